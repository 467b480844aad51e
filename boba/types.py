"""Runtime values for Boba.

Values form a closed set: `NoneVal`, `BoolVal`, `IntVal`, `FloatVal` and
`StrVal`. They are immutable and compared structurally. Integers are
Python's unbounded `int`; floats are `decimal.Decimal` values computed in
`DECIMAL_CONTEXT`.
"""

from __future__ import annotations

import decimal
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Union


DECIMAL_CONTEXT = decimal.Context(
    prec=28,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)

_INT_TEXT = re.compile(r'[+-]?\d+')


def int_to_text(value: int) -> str:
    # Decimal conversion has no digit limit, unlike str(int)
    return str(Decimal(value))


def int_from_text(text: str) -> int:
    """Parse a base-10 integer of any length; raises ValueError on bad input."""
    if not _INT_TEXT.fullmatch(text):
        raise ValueError(f"invalid integer literal {text!r}")
    return int(Decimal(text))


@dataclass(frozen=True)
class NoneVal:
    """The Boba `none` value."""


@dataclass(frozen=True)
class BoolVal:
    value: bool


@dataclass(frozen=True)
class IntVal:
    value: int


@dataclass(frozen=True)
class FloatVal:
    value: Decimal


@dataclass(frozen=True)
class StrVal:
    value: str


Value = Union[NoneVal, BoolVal, IntVal, FloatVal, StrVal]


def type_name(value: Value) -> str:
    """Return the Boba type name of a runtime value."""
    if isinstance(value, NoneVal):
        return 'none'
    if isinstance(value, BoolVal):
        return 'bool'
    if isinstance(value, IntVal):
        return 'int'
    if isinstance(value, FloatVal):
        return 'float'
    if isinstance(value, StrVal):
        return 'string'
    raise TypeError(f"not a Boba value: {value!r}")


def to_string(value: Value) -> str:
    """Convert a Boba value to its display form."""
    if isinstance(value, NoneVal):
        return 'none'
    if isinstance(value, BoolVal):
        return 'true' if value.value else 'false'
    if isinstance(value, IntVal):
        return int_to_text(value.value)
    if isinstance(value, FloatVal):
        return str(value.value)
    if isinstance(value, StrVal):
        return value.value
    raise TypeError(f"not a Boba value: {value!r}")
