from decimal import Decimal

import pytest

from boba.errors import InvalidBinary, InvalidUnary, MathError
from boba.interpreter import run_program
from boba.types import BoolVal, FloatVal, IntVal, StrVal


@pytest.mark.parametrize('source, expected', [
    ('1 + 2 * 3', IntVal(7)),
    ('1 + true', IntVal(2)),
    ('10 - 2.5', FloatVal(Decimal('7.5'))),
    ('1.5 * 2', FloatVal(Decimal('3'))),
    ('1 / 2', FloatVal(Decimal('0.5'))),
    ('2 ** 10', FloatVal(Decimal(1024))),
    ('2 ** -1', FloatVal(Decimal('0.5'))),
    ('-2 ** 2', FloatVal(Decimal(-4))),
    ('7 % 3', IntVal(1)),
    ('7 % -3', IntVal(1)),
    ('-7 % 3', IntVal(2)),
    ('-7.5 % 2', FloatVal(Decimal('0.5'))),
    ('10.0 ** 30 % 7', FloatVal(Decimal(1))),
    ('-5', IntVal(-5)),
    ('-1.5', FloatVal(Decimal('-1.5'))),
])
def test_arithmetic(source, expected):
    assert run_program(source) == expected


def test_division_always_yields_float():
    result = run_program('10 / 5')
    assert isinstance(result, FloatVal)
    assert result.value == 2


@pytest.mark.parametrize('source, expected', [
    ('1 < 2', True),
    ('2 <= 2', True),
    ('3 > 4', False),
    ('1 == 1.0', True),
    ('1.5 != 1.5', False),
    ('"abc" < "abd"', True),
    ('true == false', False),
    ('true and false', False),
    ('true or false', True),
    ('!false', True),
])
def test_comparison_and_logic(source, expected):
    assert run_program(source) == BoolVal(expected)


@pytest.mark.parametrize('source, expected', [
    ('"ab" + "cd"', 'abcd'),
    ('"n=" + 3', 'n=3'),
    ('"x" + 1.5', 'x1.5'),
    ('"ok " + true', 'ok true'),
    ('"ab" * 3', 'ababab'),
    ('"ab" * 0', ''),
    ('"ab" * -2', ''),
    ('"ab" * true', 'ab'),
])
def test_strings(source, expected):
    assert run_program(source) == StrVal(expected)


@pytest.mark.parametrize('source', [
    '1 < 2 < 0',
    'true + 1',
    '1 + "a"',
    '"a" - "b"',
    'true and 1',
    '"a" + none',
    '1.5 < true',
])
def test_undefined_binary_operations(source):
    with pytest.raises(InvalidBinary):
        run_program(source)


def test_invalid_binary_names_operand_types():
    with pytest.raises(InvalidBinary) as info:
        run_program('1 < 2 < 0')
    assert (info.value.vtype1, info.value.vtype2) == ('bool', 'int')


@pytest.mark.parametrize('source', ['-"a"', '!1', '-true', '!none'])
def test_undefined_unary_operations(source):
    with pytest.raises(InvalidUnary):
        run_program(source)


@pytest.mark.parametrize('source', ['1 / 0', '1 % 0', '1.5 % 0', '0 / 0.0', '10.0 ** 10000000', '0 ** 0'])
def test_math_errors(source):
    with pytest.raises(MathError) as info:
        run_program(source)
    assert info.value.code == 'R-008'


@pytest.mark.parametrize('dividend', ['7', '-7', '8', '-8', '7.5', '-7.5', '0'])
@pytest.mark.parametrize('divisor', ['3', '-3', '4', '2.5', '-2.5'])
def test_modulo_is_euclidean(dividend, divisor):
    result = run_program(f'{dividend} % {divisor}')
    if '.' in dividend or '.' in divisor:
        assert isinstance(result, FloatVal)
    else:
        assert isinstance(result, IntVal)
    d = abs(Decimal(divisor))
    assert 0 <= result.value < d
    assert (Decimal(dividend) - result.value) % d == 0


def test_large_float_modulo():
    assert run_program('12345678901234567890123456789012345.0 % -10') == FloatVal(Decimal(5))


def test_oversized_repeat_is_math_error():
    with pytest.raises(MathError) as info:
        run_program('"ab" * 99999999999999999999')
    assert 'result too large' in info.value.message


def test_long_integers_have_no_digit_limit(capsys):
    source = 'let x = 1\nlet i = 0\nwhile i < 5000:\n    x = x * 10\n    i = i + 1\nprint(x)\n"n=" + str(x)'
    result = run_program(source)
    assert capsys.readouterr().out == '1' + '0' * 5000 + '\n'
    assert result == StrVal('n=1' + '0' * 5000)


def test_long_integer_literal_and_conversion():
    digits = '1' + '0' * 5000
    assert run_program(digits + ' % 7') == IntVal(10 ** 5000 % 7)
    assert run_program(f'int("{digits}")') == IntVal(10 ** 5000)
