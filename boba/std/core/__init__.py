import builtins
from typing import List

from boba.builtin_function import NativeFunction
from boba.types import NoneVal, StrVal, Value, to_string, type_name
from .conversions import Conversions


def standard_functions() -> List[NativeFunction]:
    conversions = Conversions()

    def std_print(args: List[Value]) -> Value:
        print(' '.join(to_string(a) for a in args))
        return NoneVal()

    def std_input(args: List[Value]) -> Value:
        prompt = to_string(args[0]) if args else ''
        try:
            return StrVal(builtins.input(prompt))
        except EOFError:
            return StrVal('')

    def std_type(args: List[Value]) -> Value:
        return StrVal(type_name(args[0] if args else NoneVal()))

    def std_str(args: List[Value]) -> Value:
        return StrVal(to_string(args[0] if args else NoneVal()))

    def std_int(args: List[Value]) -> Value:
        return conversions.to_int(args[0] if args else NoneVal())

    def std_float(args: List[Value]) -> Value:
        return conversions.to_float(args[0] if args else NoneVal())

    return [
        NativeFunction('print', None, std_print),
        NativeFunction('input', 1, std_input),
        NativeFunction('type', 1, std_type),
        NativeFunction('str', 1, std_str),
        NativeFunction('int', 1, std_int),
        NativeFunction('float', 1, std_float),
    ]
