"""Abstract Syntax Tree (AST) definitions for the Boba language.

Every piece of the tree is wrapped in a `Node`, which pairs the payload
with the `Location` it was parsed from. Expressions and statements are
closed unions of frozen dataclasses; the parser builds them and the
engine walks them. Sub-nodes are owned by exactly one parent.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Generic, List, TypeVar, Union

from .builtin_function import NativeFunction
from .cache import Location


T = TypeVar('T')


@dataclass(frozen=True)
class Node(Generic[T]):
    location: Location
    item: T


class UnaryOp(enum.Enum):
    NEG = '-'
    NOT = '!'

    def __str__(self) -> str:
        return self.value


class BinaryOp(enum.Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    MOD = '%'
    POW = '**'
    EQ = '=='
    LT = '<'
    GT = '>'
    NEQ = '!='
    LTEQ = '<='
    GTEQ = '>='
    AND = 'and'
    OR = 'or'

    def __str__(self) -> str:
        return self.value


###############################################################################
# Expressions
###############################################################################


@dataclass(frozen=True)
class NoneLit:
    pass


@dataclass(frozen=True)
class BoolLit:
    value: bool


@dataclass(frozen=True)
class IntLit:
    value: int


@dataclass(frozen=True)
class FloatLit:
    value: Decimal


@dataclass(frozen=True)
class StrLit:
    value: str


@dataclass(frozen=True)
class Var:
    name: str


@dataclass(frozen=True)
class Call:
    ident: Node[str]
    args: List[Node['Expr']]


@dataclass(frozen=True)
class Unary:
    op: UnaryOp
    operand: Node['Expr']


@dataclass(frozen=True)
class Binary:
    op: BinaryOp
    left: Node['Expr']
    right: Node['Expr']


@dataclass(frozen=True)
class Assign:
    ident: Node[str]
    value: Node['Expr']


@dataclass(frozen=True)
class Walrus:
    ident: Node[str]
    value: Node['Expr']


@dataclass(frozen=True)
class Ternary:
    cond: Node['Expr']
    then: Node['Expr']
    otherwise: Node['Expr']


Expr = Union[
    NoneLit, BoolLit, IntLit, FloatLit, StrLit, Var, Call,
    Unary, Binary, Assign, Walrus, Ternary,
]


###############################################################################
# Functions
###############################################################################


@dataclass(frozen=True)
class CustomFunction:
    """A function defined in Boba source.

    It keeps no reference to the frame it was defined in; the length of
    `params` bounds the number of arguments a call may pass.
    """
    name: str
    params: List[Node[str]]
    body: List[Node['Statement']]

    @property
    def param_count(self) -> int:
        return len(self.params)

    def __repr__(self) -> str:
        return f"<function {self.name}>"


Function = Union[NativeFunction, CustomFunction]


###############################################################################
# Statements
###############################################################################


@dataclass(frozen=True)
class ExprStmt:
    expr: Node[Expr]


@dataclass(frozen=True)
class FuncStmt:
    func: Node[CustomFunction]


@dataclass(frozen=True)
class LetStmt:
    ident: Node[str]
    value: Node[Expr]


@dataclass(frozen=True)
class AssignStmt:
    ident: Node[str]
    value: Node[Expr]


@dataclass(frozen=True)
class WhileStmt:
    cond: Node[Expr]
    body: List[Node['Statement']]


Statement = Union[ExprStmt, FuncStmt, LetStmt, AssignStmt, WhileStmt]
