from decimal import ROUND_DOWN, Decimal, InvalidOperation

from boba.errors import NativeError
from boba.types import BoolVal, FloatVal, IntVal, StrVal, Value, int_from_text, type_name


class Conversions:
    def to_int(self, value: Value) -> IntVal:
        if isinstance(value, IntVal):
            return value
        if isinstance(value, BoolVal):
            return IntVal(int(value.value))
        if isinstance(value, FloatVal):
            return IntVal(int(value.value.to_integral_value(rounding=ROUND_DOWN)))
        if isinstance(value, StrVal):
            try:
                return IntVal(int_from_text(value.value.strip()))
            except ValueError:
                raise NativeError(f"cannot parse int from {value.value!r}")
        raise NativeError(f"cannot convert '{type_name(value)}' to 'int'")

    def to_float(self, value: Value) -> FloatVal:
        if isinstance(value, FloatVal):
            return value
        if isinstance(value, (IntVal, BoolVal)):
            return FloatVal(Decimal(int(value.value)))
        if isinstance(value, StrVal):
            try:
                result = Decimal(value.value.strip())
            except InvalidOperation:
                raise NativeError(f"cannot parse float from {value.value!r}")
            if not result.is_finite():
                raise NativeError(f"cannot parse float from {value.value!r}")
            return FloatVal(result)
        raise NativeError(f"cannot convert '{type_name(value)}' to 'float'")
