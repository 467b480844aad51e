from pathlib import Path

from boba.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_operators(capsys):
    with open(EXAMPLES / 'program_4.boba', 'r', encoding='utf-8') as f:
        source = f.read()
    _, ast = parse_program(source, 'program_4.boba')
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '\n'.join([
        '0.5',
        '1024',
        '1',
        '2',
        'ababab',
        '[]',
        'n = 5',
        '3.5',
        'true',
        'big',
        'float',
        '43',
    ])
