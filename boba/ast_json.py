"""JSON serialization/deserialization for the Boba AST.

This module converts between `Node`-wrapped AST dataclasses and plain
Python dict/list structures suitable for JSON encoding. Every node keeps
its character span as `"loc": [start, end]`. Cache ids are not
serialized: a program document carries its label and source text, and
the reader re-attaches spans to whichever cache the text is stored in.
Floats are written as strings so no precision is lost.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from .ast import (
    Node, UnaryOp, BinaryOp, NoneLit, BoolLit, IntLit, FloatLit, StrLit,
    Var, Call, Unary, Binary, Assign, Walrus, Ternary,
    CustomFunction, ExprStmt, FuncStmt, LetStmt, AssignStmt, WhileStmt,
)
from .cache import CacheId, Location
from .types import int_from_text, int_to_text


FORMAT_VERSION = 1


def _loc(node: Node) -> List[int]:
    return [node.location.start, node.location.end]


def _ident_to_obj(node: Node[str]) -> Dict[str, Any]:
    return {"name": node.item, "loc": _loc(node)}


def ast_to_obj(node: Node) -> Dict[str, Any]:
    item = node.item
    loc = _loc(node)

    # Expressions
    if isinstance(item, NoneLit):
        return {"type": "None", "loc": loc}
    if isinstance(item, BoolLit):
        return {"type": "Bool", "value": item.value, "loc": loc}
    if isinstance(item, IntLit):
        return {"type": "Int", "value": int_to_text(item.value), "loc": loc}
    if isinstance(item, FloatLit):
        return {"type": "Float", "value": str(item.value), "loc": loc}
    if isinstance(item, StrLit):
        return {"type": "String", "value": item.value, "loc": loc}
    if isinstance(item, Var):
        return {"type": "Var", "name": item.name, "loc": loc}
    if isinstance(item, Call):
        return {
            "type": "Call",
            "ident": _ident_to_obj(item.ident),
            "args": [ast_to_obj(a) for a in item.args],
            "loc": loc,
        }
    if isinstance(item, Unary):
        return {"type": "Unary", "op": item.op.value, "operand": ast_to_obj(item.operand), "loc": loc}
    if isinstance(item, Binary):
        return {
            "type": "Binary",
            "op": item.op.value,
            "left": ast_to_obj(item.left),
            "right": ast_to_obj(item.right),
            "loc": loc,
        }
    if isinstance(item, (Assign, Walrus)):
        return {
            "type": type(item).__name__,
            "ident": _ident_to_obj(item.ident),
            "value": ast_to_obj(item.value),
            "loc": loc,
        }
    if isinstance(item, Ternary):
        return {
            "type": "Ternary",
            "cond": ast_to_obj(item.cond),
            "then": ast_to_obj(item.then),
            "otherwise": ast_to_obj(item.otherwise),
            "loc": loc,
        }

    # Functions
    if isinstance(item, CustomFunction):
        return {
            "type": "Function",
            "name": item.name,
            "params": [_ident_to_obj(p) for p in item.params],
            "body": [ast_to_obj(s) for s in item.body],
            "loc": loc,
        }

    # Statements
    if isinstance(item, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(item.expr), "loc": loc}
    if isinstance(item, FuncStmt):
        return {"type": "FuncStmt", "func": ast_to_obj(item.func), "loc": loc}
    if isinstance(item, (LetStmt, AssignStmt)):
        return {
            "type": type(item).__name__,
            "ident": _ident_to_obj(item.ident),
            "value": ast_to_obj(item.value),
            "loc": loc,
        }
    if isinstance(item, WhileStmt):
        return {
            "type": "WhileStmt",
            "cond": ast_to_obj(item.cond),
            "body": [ast_to_obj(s) for s in item.body],
            "loc": loc,
        }

    raise TypeError(f"Unsupported node for serialization: {type(item).__name__}")


class _Reader:
    def __init__(self, source_id: Optional[CacheId]):
        self.source_id = source_id

    def location(self, obj: Dict[str, Any]) -> Location:
        start, end = obj["loc"]
        return Location(self.source_id, start, end)

    def ident(self, obj: Dict[str, Any]) -> Node[str]:
        return Node(self.location(obj), obj["name"])

    def node(self, obj: Dict[str, Any]) -> Node:
        t = obj.get("type")
        location = self.location(obj)

        if t == "None":
            return Node(location, NoneLit())
        if t == "Bool":
            return Node(location, BoolLit(bool(obj["value"])))
        if t == "Int":
            return Node(location, IntLit(int_from_text(obj["value"])))
        if t == "Float":
            return Node(location, FloatLit(Decimal(obj["value"])))
        if t == "String":
            return Node(location, StrLit(obj["value"]))
        if t == "Var":
            return Node(location, Var(obj["name"]))
        if t == "Call":
            return Node(location, Call(self.ident(obj["ident"]), [self.node(a) for a in obj["args"]]))
        if t == "Unary":
            return Node(location, Unary(UnaryOp(obj["op"]), self.node(obj["operand"])))
        if t == "Binary":
            return Node(location, Binary(BinaryOp(obj["op"]), self.node(obj["left"]), self.node(obj["right"])))
        if t == "Assign":
            return Node(location, Assign(self.ident(obj["ident"]), self.node(obj["value"])))
        if t == "Walrus":
            return Node(location, Walrus(self.ident(obj["ident"]), self.node(obj["value"])))
        if t == "Ternary":
            return Node(location, Ternary(self.node(obj["cond"]), self.node(obj["then"]), self.node(obj["otherwise"])))
        if t == "Function":
            return Node(location, CustomFunction(
                obj["name"],
                [self.ident(p) for p in obj["params"]],
                [self.node(s) for s in obj["body"]],
            ))
        if t == "ExprStmt":
            return Node(location, ExprStmt(self.node(obj["expr"])))
        if t == "FuncStmt":
            return Node(location, FuncStmt(self.node(obj["func"])))
        if t == "LetStmt":
            return Node(location, LetStmt(self.ident(obj["ident"]), self.node(obj["value"])))
        if t == "AssignStmt":
            return Node(location, AssignStmt(self.ident(obj["ident"]), self.node(obj["value"])))
        if t == "WhileStmt":
            return Node(location, WhileStmt(self.node(obj["cond"]), [self.node(s) for s in obj["body"]]))

        raise ValueError(f"Unknown AST node type: {t!r}")


def ast_from_obj(obj: Dict[str, Any], source_id: Optional[CacheId] = None) -> Node:
    return _Reader(source_id).node(obj)


def program_to_obj(statements: List[Node], label: str, source: str) -> Dict[str, Any]:
    return {
        "format": FORMAT_VERSION,
        "label": label,
        "source": source,
        "body": [ast_to_obj(s) for s in statements],
    }


def program_from_obj(data: Dict[str, Any], source_id: Optional[CacheId] = None) -> List[Node]:
    if data.get("format") != FORMAT_VERSION:
        raise ValueError(f"Unsupported AST document format: {data.get('format')!r}")
    reader = _Reader(source_id)
    return [reader.node(s) for s in data["body"]]
