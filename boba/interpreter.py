"""Host layer for the Boba language.

This module ties the pieces together: source text is stored in a
`SourceCache`, tokenized and parsed into statements, and the statements
are run by an `Engine`. Errors are raised as `BobaError` subclasses and
can be turned into readable reports with `Interpreter.report`.
"""

from __future__ import annotations

import pathlib
from typing import Iterable, List, Optional, Tuple

from .ast import Node, Statement
from .builtin_function import NativeFunction
from .cache import CacheId, SourceCache
from .engine import Engine
from .errors import BobaError
from .parser import parse_source
from .types import NoneVal, Value


def parse_program(source: str, label: str = '<program>',
                  cache: Optional[SourceCache] = None) -> Tuple[CacheId, List[Node[Statement]]]:
    """Parse Boba source into statements, storing the text in `cache`.

    Without a cache the text goes into a fresh one that nothing else
    holds, so its locations cannot be rendered later.
    """
    if cache is None:
        cache = SourceCache()
    entry = cache.store(label, source)
    return entry.id, parse_source(source, entry.id)


class Interpreter:
    """Runs Boba programs against one persistent global frame.

    Every buffer passed to `load` or `run_source` is kept in `cache`, so
    diagnostics for code loaded earlier can still be rendered after
    later buffers have run.
    """
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = None,
                 natives: Optional[Iterable[NativeFunction]] = None):
        self.cache = SourceCache()
        self.engine = Engine(natives=natives, debug_level=debug_level, debug_file=debug_file)

    @property
    def debug_level(self) -> int:
        return self.engine.debug_level

    def debug(self, msg: str):
        self.engine.debug(msg)

    def load(self, source: str, label: str = '<input>') -> List[Node[Statement]]:
        self.debug(f"load {label} ({len(source)} chars)")
        _, statements = parse_program(source, label, self.cache)
        return statements

    def run(self, statements: List[Node[Statement]]) -> Value:
        """Execute statements in order and return the value of the last one."""
        result: Value = NoneVal()
        for statement in statements:
            if self.debug_level >= 1:
                self.debug(f"exec {type(statement.item).__name__} at {statement.location!r}")
            result = self.engine.eval_statement(statement)
        return result

    def run_source(self, source: str, label: str = '<input>') -> Value:
        return self.run(self.load(source, label))

    def report(self, error: BobaError) -> str:
        """Render `error` against the buffers stored in this interpreter's cache."""
        return self.cache.render(error)

    def close(self):
        self.engine.close()


def run_program(source: str, debug_level: int = 0) -> Value:
    """Run a complete Boba program and return the value of its last statement."""
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run_source(source, '<program>')
    finally:
        interpreter.close()


def compile_module(path: str, debug_level: int = 0) -> Interpreter:
    """Run the Boba file at `path` and return the interpreter holding its globals."""
    file_path = pathlib.Path(path)
    source = file_path.read_text(encoding='utf-8')
    interpreter = Interpreter(debug_level=debug_level)
    interpreter.run_source(source, str(file_path))
    return interpreter
