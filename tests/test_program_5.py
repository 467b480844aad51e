from pathlib import Path

from boba.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_5_walrus_loop(capsys):
    with open(EXAMPLES / 'program_5.boba', 'r', encoding='utf-8') as f:
        source = f.read()
    _, ast = parse_program(source, 'program_5.boba')
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '14'
