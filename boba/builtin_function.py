from dataclasses import dataclass
from typing import Callable, List, Optional

from boba.types import Value


@dataclass(frozen=True)
class NativeFunction:
    """A host function callable from Boba code.

    `param_count` is the most arguments the function accepts; `None`
    means any number. The callback receives the evaluated arguments and
    raises `NativeError` to report a failure.
    """
    name: str
    param_count: Optional[int]
    callback: Callable[[List[Value]], Value]

    def __repr__(self) -> str:
        return f"<native {self.name}>"
