from typing import Dict, Optional

from boba.ast import Function
from boba.types import Value


class Environment:
    """One frame: the variables and functions bound by the global scope or by one call."""
    def __init__(self):
        self.values: Dict[str, Value] = {}
        self.functions: Dict[str, Function] = {}

    def get_var(self, name: str) -> Optional[Value]:
        return self.values.get(name)

    def set_var(self, name: str, value: Value):
        self.values[name] = value

    def get_func(self, name: str) -> Optional[Function]:
        return self.functions.get(name)

    def set_func(self, func: Function):
        self.functions[func.name] = func

    def __repr__(self) -> str:
        return f"<Environment vars={sorted(self.values)} funcs={sorted(self.functions)}>"
