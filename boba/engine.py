"""Tree-walking evaluator for Boba.

The engine owns one global frame and a stack of call frames. Bindings
always go into the innermost frame (or the global frame when no call is
active); lookups search the call stack from the top down and then the
global frame. A function body therefore sees whatever frames are active
when it runs, not the frames that existed where it was defined.
"""

from __future__ import annotations

import decimal
import sys
from typing import Iterable, List, Optional

from .ast import (
    Node, NoneLit, BoolLit, IntLit, FloatLit, StrLit, Var, Call, Unary, Binary,
    Assign, Walrus, Ternary, Expr, Function,
    ExprStmt, FuncStmt, LetStmt, AssignStmt, WhileStmt, Statement,
)
from .builtin_function import NativeFunction
from .cache import Location
from .environment import Environment
from .errors import (
    InvalidBinary, InvalidUnary, MathError, NativeCallError, NativeError,
    ParameterCount, TypeMismatch, UnknownFunction, UnknownVariable,
)
from .operators import apply_unary, binary_handler
from .std import standard_functions
from .types import BoolVal, FloatVal, IntVal, NoneVal, StrVal, Value, to_string, type_name


class Engine:
    """Evaluates Boba statements and expressions."""
    def __init__(self, natives: Optional[Iterable[NativeFunction]] = None,
                 debug_level: int = 0, debug_file: Optional[str] = None):
        self.global_scope = Environment()
        self.call_stack: List[Environment] = []
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 and debug_file else None
        for native in (standard_functions() if natives is None else natives):
            self.global_scope.set_func(native)

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def register_native(self, name: str, param_count: Optional[int], callback) -> NativeFunction:
        native = NativeFunction(name, param_count, callback)
        self.global_scope.set_func(native)
        return native

    # Frames

    @property
    def scope(self) -> Environment:
        """The frame new bindings go into."""
        return self.call_stack[-1] if self.call_stack else self.global_scope

    def push_scope(self):
        self.call_stack.append(Environment())

    def pop_scope(self) -> bool:
        """Pop the innermost call frame; False when there was nothing to pop."""
        if not self.call_stack:
            return False
        self.call_stack.pop()
        return True

    def set_var(self, name: str, value: Value):
        self.scope.set_var(name, value)
        if self.debug_level >= 2:
            self.debug(f"set {name} = {to_string(value)} ({type_name(value)})")

    def set_func(self, func: Function):
        self.scope.set_func(func)
        if self.debug_level >= 2:
            self.debug(f"define function {func.name}")

    def get_var(self, name: str) -> Optional[Value]:
        for frame in reversed(self.call_stack):
            value = frame.get_var(name)
            if value is not None:
                return value
        return self.global_scope.get_var(name)

    def get_func(self, name: str) -> Optional[Function]:
        for frame in reversed(self.call_stack):
            func = frame.get_func(name)
            if func is not None:
                return func
        return self.global_scope.get_func(name)

    # Calls

    def eval_func(self, ident: Node[str], args: List[Value]) -> Value:
        func = self.get_func(ident.item)
        if func is None:
            raise UnknownFunction(ident.item, ident.location)
        if func.param_count is not None and len(args) > func.param_count:
            raise ParameterCount(func.param_count, len(args), ident.location)

        if self.debug_level >= 3:
            self.debug(f"call {ident.item}({', '.join(to_string(a) for a in args)})")

        self.push_scope()
        try:
            if isinstance(func, NativeFunction):
                try:
                    return func.callback(args)
                except NativeError as e:
                    raise NativeCallError(str(e), ident.location) from e

            # trailing parameters without an argument stay unbound
            for param, value in zip(func.params, args):
                self.set_var(param.item, value)
            output: Value = NoneVal()
            for statement in func.body:
                output = self.eval_statement(statement)
            return output
        finally:
            self.pop_scope()

    # Statements

    def eval_statement(self, statement: Node[Statement]) -> Value:
        item = statement.item
        if isinstance(item, ExprStmt):
            return self.eval(item.expr)
        if isinstance(item, FuncStmt):
            self.set_func(item.func.item)
            return NoneVal()
        if isinstance(item, (LetStmt, AssignStmt)):
            value = self.eval(item.value)
            self.set_var(item.ident.item, value)
            return NoneVal()
        if isinstance(item, WhileStmt):
            while self.expect_bool(item.cond):
                if self.debug_level >= 3:
                    self.debug('while: iteration')
                for body_statement in item.body:
                    self.eval_statement(body_statement)
            return NoneVal()
        raise TypeError(f"eval_statement: unexpected node {item!r}")

    # Expressions

    def expect_bool(self, cond: Node[Expr]) -> bool:
        value = self.eval(cond)
        if not isinstance(value, BoolVal):
            raise TypeMismatch('bool', type_name(value), cond.location)
        return value.value

    def eval(self, expr: Node[Expr]) -> Value:
        item = expr.item
        if isinstance(item, NoneLit):
            return NoneVal()
        if isinstance(item, BoolLit):
            return BoolVal(item.value)
        if isinstance(item, IntLit):
            return IntVal(item.value)
        if isinstance(item, FloatLit):
            return FloatVal(item.value)
        if isinstance(item, StrLit):
            return StrVal(item.value)
        if isinstance(item, Var):
            value = self.get_var(item.name)
            if value is None:
                raise UnknownVariable(item.name, expr.location)
            return value
        if isinstance(item, Call):
            args = [self.eval(arg) for arg in item.args]
            return self.eval_func(item.ident, args)
        if isinstance(item, Unary):
            operand = self.eval(item.operand)
            return self.eval_unary(item.op, operand, expr.location)
        if isinstance(item, Binary):
            left = self.eval(item.left)
            right = self.eval(item.right)
            return self.eval_binary(left, item.op, right, expr.location)
        if isinstance(item, Walrus):
            value = self.eval(item.value)
            self.set_var(item.ident.item, value)
            return value
        if isinstance(item, Assign):
            value = self.eval(item.value)
            self.set_var(item.ident.item, value)
            return NoneVal()
        if isinstance(item, Ternary):
            if self.expect_bool(item.cond):
                return self.eval(item.then)
            return self.eval(item.otherwise)
        raise TypeError(f"eval: unexpected node {item!r}")

    def eval_unary(self, op, value: Value, location: Location) -> Value:
        result = apply_unary(op, value)
        if result is None:
            raise InvalidUnary(op, type_name(value), location)
        return result

    def eval_binary(self, left: Value, op, right: Value, location: Location) -> Value:
        handler = binary_handler(left, op, right)
        if handler is None:
            raise InvalidBinary(op, type_name(left), type_name(right), location)
        try:
            return handler(left, right)
        except ArithmeticError as e:
            raise MathError(f"{_describe_fault(e)} in '{op}'", location) from e


def _describe_fault(error: ArithmeticError) -> str:
    if isinstance(error, ZeroDivisionError):
        return 'division by zero'
    if isinstance(error, (OverflowError, decimal.Overflow)):
        return 'result too large'
    return 'undefined result'
