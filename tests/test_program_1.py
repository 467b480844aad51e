from pathlib import Path

from boba.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1_hello(capsys):
    with open(EXAMPLES / 'program_1.boba', 'r', encoding='utf-8') as f:
        source = f.read()
    _, ast = parse_program(source, 'program_1.boba')
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
