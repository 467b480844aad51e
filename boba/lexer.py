"""Tokenizer for the Boba language.

Lexing is done by a Lark basic lexer configured with the terminals of
the Boba grammar. Its output is fed through `BobaIndenter`, a Lark
post-lexer that turns leading whitespace into INDENT and DEDENT tokens
and rejects files that mix tabs and spaces for indentation.

The parser never sees Lark tokens directly: `TokenStream` wraps the
token iterator, converts each token into a `Lexeme` carrying a
`Location`, and translates lexing failures into Boba parse errors.
"""

from __future__ import annotations

import re
from typing import Iterator, List, NamedTuple, Optional

from lark import Lark, Token
from lark.exceptions import UnexpectedCharacters
from lark.indenter import Indenter

from .cache import CacheId, Location
from .errors import InvalidToken, MixedTabsAndSpaces, UnclosedString, UnexpectedEnd, UnexpectedToken


BOBA_GRAMMAR = r"""
    start: (LET | FN | WHILE | NONE | TRUE | FALSE | AND | OR
           | NAME | FLOAT | INT | STRING
           | POW | EQ | NEQ | LTEQ | GTEQ | WALRUS
           | PLUS | MINUS | STAR | SLASH | PERCENT | LT | GT | BANG
           | ASSIGN | QUESTION | COLON | COMMA | LPAR | RPAR
           | NEWLINE | INDENT | DEDENT)*

    // Keywords
    LET: "let"
    FN: "fn"
    WHILE: "while"
    NONE: "none"
    TRUE: "true"
    FALSE: "false"
    AND: "and"
    OR: "or"

    // Literals
    NAME: /[A-Za-z_][A-Za-z0-9_]*/
    FLOAT.2: /\d+\.\d+/
    INT: /\d+/
    STRING: /"(\\.|[^"\\\n])*"/

    // Operators and punctuation
    POW: "**"
    EQ: "=="
    NEQ: "!="
    LTEQ: "<="
    GTEQ: ">="
    WALRUS: ":="
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    PERCENT: "%"
    LT: "<"
    GT: ">"
    BANG: "!"
    ASSIGN: "="
    QUESTION: "?"
    COLON: ":"
    COMMA: ","
    LPAR: "("
    RPAR: ")"

    // A newline swallows following blank and comment-only lines
    NEWLINE: /(\r?\n[\t ]*(#[^\n]*)?)+/

    COMMENT: /#[^\n]*/
    WS: /[ \t\f]+/
    %ignore COMMENT
    %ignore WS

    %declare INDENT DEDENT
"""


# Printable names for tokens that have no useful source text
_DESCRIPTIONS = {
    'NEWLINE': 'newline',
    'INDENT': 'indent',
    'DEDENT': 'dedent',
}

_LEADING_WS = re.compile(r'[\t ]*')


class IndentationFault(Exception):
    """Raised inside the post-lexer; `TokenStream` reports it with a location."""
    def __init__(self, pos: int, tab: Optional[bool] = None, column: int = 0, expected: int = 0):
        super().__init__('indentation')
        self.pos = pos
        self.tab = tab
        self.column = column
        self.expected = expected


class BobaIndenter(Indenter):
    """Lark post-lexer producing INDENT/DEDENT tokens.

    The first indented line decides whether the buffer indents with tabs
    or with spaces; any later indentation character of the other kind is
    rejected.
    """
    NL_type = 'NEWLINE'
    OPEN_PAREN_types = ['LPAR']
    CLOSE_PAREN_types = ['RPAR']
    INDENT_type = 'INDENT'
    DEDENT_type = 'DEDENT'
    tab_len = 1

    def __init__(self) -> None:
        super().__init__()
        self.indent_char: Optional[str] = None

    def handle_NL(self, token: Token) -> Iterator[Token]:
        if self.paren_level > 0:
            return

        yield token

        last_line = token.rsplit('\n', 1)[1]
        indent_str = _LEADING_WS.match(last_line).group()
        line_start = token.end_pos - len(last_line)
        for i, ch in enumerate(indent_str):
            if self.indent_char is None:
                self.indent_char = ch
            elif ch != self.indent_char:
                raise IndentationFault(line_start + i, tab=(ch == '\t'))
        indent = len(indent_str)

        if indent > self.indent_level[-1]:
            self.indent_level.append(indent)
            yield Token.new_borrow_pos(self.INDENT_type, indent_str, token)
        else:
            while indent < self.indent_level[-1]:
                self.indent_level.pop()
                yield Token.new_borrow_pos(self.DEDENT_type, indent_str, token)

            if indent != self.indent_level[-1]:
                raise IndentationFault(line_start + indent, column=indent, expected=self.indent_level[-1])


# The indenter keeps per-buffer state, so each TokenStream runs its own
BOBA_LEXER = Lark(BOBA_GRAMMAR, parser='lalr', lexer='basic')


class Lexeme(NamedTuple):
    kind: str
    text: str
    location: Location

    def describe(self) -> str:
        if self.kind in _DESCRIPTIONS:
            return _DESCRIPTIONS[self.kind]
        return f"'{self.text}'"


class TokenStream:
    """Peekable cursor over the lexemes of one source buffer."""

    def __init__(self, source: str, source_id: Optional[CacheId] = None):
        self.source = source
        self.source_id = source_id
        # trailing blank or indented lines must not open a block at end of input
        text = source.rstrip() + "\n"
        self._length = len(text)
        self._tokens = BobaIndenter().process(BOBA_LEXER.lex(text))
        self._peeked: List[Lexeme] = []
        self._done = False

    def span(self, start: int, end: int) -> Location:
        return Location(self.source_id, start, end)

    def end_location(self) -> Location:
        return self.span(len(self.source), len(self.source))

    def _pull(self) -> Optional[Lexeme]:
        if self._done:
            return None
        try:
            token = next(self._tokens)
        except StopIteration:
            self._done = True
            return None
        except UnexpectedCharacters as e:
            self._done = True
            pos = e.pos_in_stream
            if e.char == '"':
                line_end = self.source.find('\n', pos)
                if line_end < 0:
                    line_end = len(self.source)
                raise UnclosedString(self.span(pos, line_end)) from e
            raise InvalidToken(f"'{e.char}'", self.span(pos, pos + 1)) from e
        except IndentationFault as e:
            self._done = True
            if e.tab is not None:
                raise MixedTabsAndSpaces(e.tab, self.span(e.pos, e.pos + 1)) from e
            raise UnexpectedToken(
                f"dedent to column {e.expected}",
                f"dedent to column {e.column}",
                self.span(e.pos, e.pos + 1),
            ) from e
        if token.type == 'NEWLINE' and token.end_pos == self._length:
            # the appended final newline; end of input already ends a statement
            return self._pull()
        if token.start_pos is None:
            # closing dedents at end of input carry no position
            location = self.end_location()
        else:
            location = self.span(token.start_pos, token.end_pos)
        return Lexeme(token.type, str(token), location)

    def peek(self) -> Optional[Lexeme]:
        if not self._peeked:
            lexeme = self._pull()
            if lexeme is None:
                return None
            self._peeked.append(lexeme)
        return self._peeked[0]

    def next(self) -> Optional[Lexeme]:
        if self._peeked:
            return self._peeked.pop()
        return self._pull()

    def expect_peek(self, expected: str) -> Lexeme:
        lexeme = self.peek()
        if lexeme is None:
            raise UnexpectedEnd(expected, self.end_location())
        return lexeme

    def expect_next(self, expected: str) -> Lexeme:
        lexeme = self.next()
        if lexeme is None:
            raise UnexpectedEnd(expected, self.end_location())
        return lexeme

    def __iter__(self):
        while True:
            lexeme = self.next()
            if lexeme is None:
                return
            yield lexeme


def tokenize(source: str, source_id: Optional[CacheId] = None) -> List[Lexeme]:
    """Lex a whole buffer into a list of lexemes."""
    return list(TokenStream(source, source_id))
