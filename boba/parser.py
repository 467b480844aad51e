"""Recursive-descent parser for the Boba language.

The parser consumes a `TokenStream` and produces `Node`-wrapped AST
values. Expressions are parsed by precedence climbing, loosest tier
first:

    assignment   =  :=            right associative
    ternary      cond ? a : b     right associative
    or
    and
    comparison   == < > != <= >=
    sum          + -
    product      * / %
    unary        - !              operand is a power chain
    power        **               right associative
    atom         literals, names, calls, parentheses

Each node's location spans from the first to the last token consumed
for it. The public entry points are `parse`, `parse_source` and
`parse_expression`.
"""

from __future__ import annotations

import ast as py_ast
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from .ast import (
    Node, UnaryOp, BinaryOp, NoneLit, BoolLit, IntLit, FloatLit, StrLit,
    Var, Call, Unary, Binary, Assign, Walrus, Ternary, Expr,
    CustomFunction, ExprStmt, FuncStmt, LetStmt, AssignStmt, WhileStmt, Statement,
)
from .cache import CacheId
from .errors import (
    InvalidAssignment, InvalidNumber, InvalidToken, UnclosedBrace, UnexpectedToken,
)
from .lexer import Lexeme, TokenStream
from .types import int_from_text


_COMPARISONS = {
    'EQ': BinaryOp.EQ,
    'LT': BinaryOp.LT,
    'GT': BinaryOp.GT,
    'NEQ': BinaryOp.NEQ,
    'LTEQ': BinaryOp.LTEQ,
    'GTEQ': BinaryOp.GTEQ,
}

_SUMS = {
    'PLUS': BinaryOp.ADD,
    'MINUS': BinaryOp.SUB,
}

_PRODUCTS = {
    'STAR': BinaryOp.MUL,
    'SLASH': BinaryOp.DIV,
    'PERCENT': BinaryOp.MOD,
}

_PREFIXES = {
    'MINUS': UnaryOp.NEG,
    'BANG': UnaryOp.NOT,
}


class Parser:
    def __init__(self, tokens: TokenStream):
        self.tokens = tokens

    # Token helpers

    def check(self, *kinds: str) -> Optional[Lexeme]:
        """Return the next lexeme if it is one of `kinds`, without consuming it."""
        lexeme = self.tokens.peek()
        if lexeme is not None and lexeme.kind in kinds:
            return lexeme
        return None

    def expect(self, kind: str, expected: str) -> Lexeme:
        lexeme = self.tokens.expect_next(expected)
        if lexeme.kind != kind:
            raise UnexpectedToken(expected, lexeme.describe(), lexeme.location)
        return lexeme

    def expect_ident(self) -> Node[str]:
        lexeme = self.expect('NAME', 'identifier')
        return Node(lexeme.location, lexeme.text)

    # Statements

    def parse_program(self) -> List[Node[Statement]]:
        statements: List[Node[Statement]] = []
        while True:
            lexeme = self.tokens.peek()
            if lexeme is None:
                break
            # blank lines between statements
            if lexeme.kind == 'NEWLINE':
                self.tokens.next()
                continue
            statements.append(self.parse_statement())
        return statements

    def parse_statement(self) -> Node[Statement]:
        lexeme = self.tokens.expect_peek('statement')
        if lexeme.kind == 'LET':
            return self.parse_let()
        if lexeme.kind == 'FN':
            return self.parse_function()
        if lexeme.kind == 'WHILE':
            return self.parse_while()

        expr = self.parse_expression()
        self.end_statement()
        if isinstance(expr.item, Assign):
            return Node(expr.location, AssignStmt(expr.item.ident, expr.item.value))
        return Node(expr.location, ExprStmt(expr))

    def end_statement(self) -> None:
        lexeme = self.tokens.peek()
        if lexeme is None or lexeme.kind == 'DEDENT':
            return
        if lexeme.kind == 'NEWLINE':
            self.tokens.next()
            return
        raise UnexpectedToken('end of statement', lexeme.describe(), lexeme.location)

    def parse_let(self) -> Node[Statement]:
        start = self.expect('LET', "'let'")
        ident = self.expect_ident()
        self.expect('ASSIGN', "'='")
        value = self.parse_expression()
        self.end_statement()
        return Node(start.location.to(value.location), LetStmt(ident, value))

    def parse_function(self) -> Node[Statement]:
        start = self.expect('FN', "'fn'")
        ident = self.expect_ident()
        self.expect('LPAR', "'('")
        params: List[Node[str]] = []
        if not self.check('RPAR'):
            while True:
                params.append(self.expect_ident())
                if not self.check('COMMA'):
                    break
                self.tokens.next()
        close = self.expect('RPAR', "',' or ')'")
        body = self.parse_block()
        end = body[-1].location if body else close.location
        location = start.location.to(end)
        func = CustomFunction(ident.item, params, body)
        return Node(location, FuncStmt(Node(location, func)))

    def parse_while(self) -> Node[Statement]:
        start = self.expect('WHILE', "'while'")
        cond = self.parse_expression()
        body = self.parse_block()
        end = body[-1].location if body else cond.location
        return Node(start.location.to(end), WhileStmt(cond, body))

    def parse_block(self) -> List[Node[Statement]]:
        """Parse `: statement` or `:` followed by an indented block."""
        self.expect('COLON', "':'")
        if not self.check('NEWLINE'):
            return [self.parse_statement()]
        self.tokens.next()
        self.expect('INDENT', 'indented block')
        body: List[Node[Statement]] = []
        while True:
            lexeme = self.tokens.peek()
            if lexeme is None:
                break
            if lexeme.kind == 'DEDENT':
                self.tokens.next()
                break
            if lexeme.kind == 'NEWLINE':
                self.tokens.next()
                continue
            body.append(self.parse_statement())
        return body

    # Expressions

    def parse_expression(self) -> Node[Expr]:
        return self.parse_assign()

    def parse_assign(self) -> Node[Expr]:
        lhs = self.parse_ternary()
        op = self.check('ASSIGN', 'WALRUS')
        if op is None:
            return lhs
        self.tokens.next()
        if not isinstance(lhs.item, Var):
            raise InvalidAssignment(op.location)
        ident = Node(lhs.location, lhs.item.name)
        rhs = self.parse_assign()
        kind = Assign if op.kind == 'ASSIGN' else Walrus
        return Node(lhs.location.to(rhs.location), kind(ident, rhs))

    def parse_ternary(self) -> Node[Expr]:
        cond = self.parse_or()
        if not self.check('QUESTION'):
            return cond
        self.tokens.next()
        then = self.parse_ternary()
        self.expect('COLON', "ternary delimiter ':'")
        otherwise = self.parse_ternary()
        return Node(cond.location.to(otherwise.location), Ternary(cond, then, otherwise))

    def parse_or(self) -> Node[Expr]:
        node = self.parse_and()
        while self.check('OR'):
            self.tokens.next()
            right = self.parse_and()
            node = Node(node.location.to(right.location), Binary(BinaryOp.OR, node, right))
        return node

    def parse_and(self) -> Node[Expr]:
        node = self.parse_comparison()
        while self.check('AND'):
            self.tokens.next()
            right = self.parse_comparison()
            node = Node(node.location.to(right.location), Binary(BinaryOp.AND, node, right))
        return node

    def parse_comparison(self) -> Node[Expr]:
        # a < b < c is (a < b) < c: the result of one comparison is
        # itself compared again
        node = self.parse_sum()
        while True:
            lexeme = self.check(*_COMPARISONS)
            if lexeme is None:
                return node
            self.tokens.next()
            right = self.parse_sum()
            node = Node(node.location.to(right.location), Binary(_COMPARISONS[lexeme.kind], node, right))

    def parse_sum(self) -> Node[Expr]:
        node = self.parse_product()
        while True:
            lexeme = self.check(*_SUMS)
            if lexeme is None:
                return node
            self.tokens.next()
            right = self.parse_product()
            node = Node(node.location.to(right.location), Binary(_SUMS[lexeme.kind], node, right))

    def parse_product(self) -> Node[Expr]:
        node = self.parse_unary()
        while True:
            lexeme = self.check(*_PRODUCTS)
            if lexeme is None:
                return node
            self.tokens.next()
            right = self.parse_unary()
            node = Node(node.location.to(right.location), Binary(_PRODUCTS[lexeme.kind], node, right))

    def parse_unary(self) -> Node[Expr]:
        lexeme = self.check(*_PREFIXES)
        if lexeme is None:
            return self.parse_power()
        self.tokens.next()
        operand = self.parse_unary()
        return Node(lexeme.location.to(operand.location), Unary(_PREFIXES[lexeme.kind], operand))

    def parse_power(self) -> Node[Expr]:
        base = self.parse_atom()
        if not self.check('POW'):
            return base
        self.tokens.next()
        exponent = self.parse_unary()
        return Node(base.location.to(exponent.location), Binary(BinaryOp.POW, base, exponent))

    def parse_atom(self) -> Node[Expr]:
        lexeme = self.tokens.expect_next('expression')
        kind = lexeme.kind
        location = lexeme.location
        if kind == 'NONE':
            return Node(location, NoneLit())
        if kind == 'TRUE':
            return Node(location, BoolLit(True))
        if kind == 'FALSE':
            return Node(location, BoolLit(False))
        if kind == 'INT':
            try:
                return Node(location, IntLit(int_from_text(lexeme.text)))
            except (ValueError, InvalidOperation) as e:
                raise InvalidNumber(e, location) from e
        if kind == 'FLOAT':
            try:
                return Node(location, FloatLit(Decimal(lexeme.text)))
            except InvalidOperation as e:
                raise InvalidNumber(e, location) from e
        if kind == 'STRING':
            try:
                value = py_ast.literal_eval(lexeme.text)
            except (SyntaxError, ValueError) as e:
                raise InvalidToken(lexeme.text, location) from e
            return Node(location, StrLit(value))
        if kind == 'NAME':
            return self.parse_var_or_call(Node(location, lexeme.text))
        if kind == 'LPAR':
            inner = self.parse_expression()
            close = self.tokens.next()
            if close is None or close.kind != 'RPAR':
                raise UnclosedBrace(location)
            return Node(location.to(close.location), inner.item)
        raise UnexpectedToken('expression', lexeme.describe(), location)

    def parse_var_or_call(self, ident: Node[str]) -> Node[Expr]:
        if not self.check('LPAR'):
            return Node(ident.location, Var(ident.item))
        self.tokens.next()

        args: List[Node[Expr]] = []
        if self.tokens.expect_peek("expression or ')'").kind != 'RPAR':
            while True:
                args.append(self.parse_expression())
                if self.tokens.expect_peek("',' or ')'").kind != 'COMMA':
                    break
                self.tokens.next()

        close = self.expect('RPAR', "')'")
        return Node(ident.location.to(close.location), Call(ident, args))


def parse(tokens: TokenStream) -> List[Node[Statement]]:
    """Parse a whole token stream into a list of statements."""
    return Parser(tokens).parse_program()


def parse_source(source: str, source_id: Optional[CacheId] = None) -> List[Node[Statement]]:
    """Tokenize and parse Boba source text."""
    return parse(TokenStream(source, source_id))


def parse_expression(source: str, source_id: Optional[CacheId] = None) -> Node[Expr]:
    """Parse a single stand-alone expression."""
    tokens = TokenStream(source, source_id)
    parser = Parser(tokens)
    expr = parser.parse_expression()
    lexeme = tokens.peek()
    if lexeme is not None and lexeme.kind != 'NEWLINE':
        raise UnexpectedToken('end of expression', lexeme.describe(), lexeme.location)
    return expr
