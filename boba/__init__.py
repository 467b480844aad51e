# Boba language package
# This package provides a parser and a tree-walking interpreter for the Boba language.
from .errors import BobaError, ParseError, RunError
from .interpreter import run_program, compile_module, parse_program, Interpreter

__all__ = [
    'run_program',
    'compile_module',
    'parse_program',
    'Interpreter',
    'BobaError',
    'ParseError',
    'RunError',
]
