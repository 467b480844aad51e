"""Operator semantics for Boba values.

Binary operators are resolved through `BINARY_TABLE`, keyed by the left
operand's value class, the operator and the right operand's value class.
Any combination missing from the table is not defined. Arithmetic on
floats runs in `DECIMAL_CONTEXT`; integer arithmetic is exact.
"""

from __future__ import annotations

import operator
import sys
from decimal import Decimal
from typing import Callable, Dict, Optional, Tuple

from .ast import BinaryOp, UnaryOp
from .types import DECIMAL_CONTEXT, BoolVal, FloatVal, IntVal, StrVal, Value, to_string


Handler = Callable[[Value, Value], Value]

BINARY_TABLE: Dict[Tuple[type, BinaryOp, type], Handler] = {}


def _decimal(value: Value) -> Decimal:
    if isinstance(value, FloatVal):
        return value.value
    return Decimal(int(value.value))


def _int_mod(a: int, b: int) -> int:
    # Euclidean remainder: always in [0, |b|)
    return a % abs(b)


def _decimal_mod(a: Decimal, b: Decimal) -> Decimal:
    # remainder needs every digit of the integer quotient
    context = DECIMAL_CONTEXT.copy()
    if a and b:
        context.prec = max(context.prec, a.adjusted() - b.adjusted() + DECIMAL_CONTEXT.prec + 1)
    rem = context.remainder(a, b)
    if rem.is_zero():
        return rem.copy_abs()
    if rem < 0:
        rem = DECIMAL_CONTEXT.add(rem, abs(b))
    return rem


def _int_handler(fn: Callable[[int, int], int]) -> Handler:
    def handler(left: Value, right: Value) -> Value:
        return IntVal(fn(left.value, int(right.value)))
    return handler


def _float_handler(fn: Callable[[Decimal, Decimal], Decimal]) -> Handler:
    def handler(left: Value, right: Value) -> Value:
        return FloatVal(fn(_decimal(left), _decimal(right)))
    return handler


def _compare_handler(fn: Callable[[object, object], bool], numeric: bool) -> Handler:
    def handler(left: Value, right: Value) -> Value:
        if numeric:
            return BoolVal(fn(_decimal(left), _decimal(right)))
        return BoolVal(fn(left.value, right.value))
    return handler


def _logic_handler(fn: Callable[[bool, bool], bool]) -> Handler:
    def handler(left: Value, right: Value) -> Value:
        return BoolVal(fn(left.value, right.value))
    return handler


def _concat(left: Value, right: Value) -> Value:
    return StrVal(left.value + to_string(right))


def _repeat(left: Value, right: Value) -> Value:
    count = int(right.value)
    if count < 0:
        return StrVal('')
    # counts past the platform limit saturate instead of failing here
    return StrVal(left.value * min(count, sys.maxsize))


def _register(left: type, ops, right: type, handler: Handler) -> None:
    for op in ops:
        BINARY_TABLE[(left, op, right)] = handler


_ARITHMETIC = {
    BinaryOp.ADD: (operator.add, DECIMAL_CONTEXT.add),
    BinaryOp.SUB: (operator.sub, DECIMAL_CONTEXT.subtract),
    BinaryOp.MUL: (operator.mul, DECIMAL_CONTEXT.multiply),
}

for _op, (_int_fn, _dec_fn) in _ARITHMETIC.items():
    _register(IntVal, [_op], BoolVal, _int_handler(_int_fn))
    _register(IntVal, [_op], IntVal, _int_handler(_int_fn))
    for _left, _right in [(IntVal, FloatVal), (FloatVal, BoolVal), (FloatVal, IntVal), (FloatVal, FloatVal)]:
        _register(_left, [_op], _right, _float_handler(_dec_fn))

for _left, _right in [(IntVal, IntVal), (IntVal, FloatVal), (FloatVal, IntVal), (FloatVal, FloatVal)]:
    _register(_left, [BinaryOp.DIV], _right, _float_handler(DECIMAL_CONTEXT.divide))
    _register(_left, [BinaryOp.POW], _right, _float_handler(DECIMAL_CONTEXT.power))
    if (_left, _right) == (IntVal, IntVal):
        _register(_left, [BinaryOp.MOD], _right, _int_handler(_int_mod))
    else:
        _register(_left, [BinaryOp.MOD], _right, _float_handler(_decimal_mod))

_COMPARE = {
    BinaryOp.EQ: operator.eq,
    BinaryOp.LT: operator.lt,
    BinaryOp.GT: operator.gt,
    BinaryOp.NEQ: operator.ne,
    BinaryOp.LTEQ: operator.le,
    BinaryOp.GTEQ: operator.ge,
}

for _op, _fn in _COMPARE.items():
    _register(IntVal, [_op], IntVal, _compare_handler(_fn, numeric=False))
    _register(IntVal, [_op], FloatVal, _compare_handler(_fn, numeric=True))
    _register(FloatVal, [_op], IntVal, _compare_handler(_fn, numeric=True))
    _register(FloatVal, [_op], FloatVal, _compare_handler(_fn, numeric=False))
    _register(BoolVal, [_op], BoolVal, _compare_handler(_fn, numeric=False))
    _register(StrVal, [_op], StrVal, _compare_handler(_fn, numeric=False))

_register(BoolVal, [BinaryOp.AND], BoolVal, _logic_handler(lambda a, b: a and b))
_register(BoolVal, [BinaryOp.OR], BoolVal, _logic_handler(lambda a, b: a or b))

for _right in (BoolVal, IntVal, FloatVal, StrVal):
    _register(StrVal, [BinaryOp.ADD], _right, _concat)
_register(StrVal, [BinaryOp.MUL], BoolVal, _repeat)
_register(StrVal, [BinaryOp.MUL], IntVal, _repeat)


def binary_handler(left: Value, op: BinaryOp, right: Value) -> Optional[Handler]:
    return BINARY_TABLE.get((type(left), op, type(right)))


def apply_unary(op: UnaryOp, value: Value) -> Optional[Value]:
    """Apply a prefix operator, or return None when it is not defined."""
    if op is UnaryOp.NOT and isinstance(value, BoolVal):
        return BoolVal(not value.value)
    if op is UnaryOp.NEG and isinstance(value, IntVal):
        return IntVal(-value.value)
    if op is UnaryOp.NEG and isinstance(value, FloatVal):
        return FloatVal(value.value.copy_negate())
    return None
