"""
  Lispy Lexer and Parser

- Streaming lexer, recursive-descent parser
- Emits a tagged syntax tree (AstNode) rather than values; the reader
  (lispy.reader.reader) lowers that tree into Values.

Grammar:

    number : /-?[0-9]+/ ;
    symbol : '+' | '-' | '*' | '/' ;
    sexpr  : '(' <expr>* ')' ;
    qexpr  : '{' <expr>* '}' ;
    expr   : <number> | <symbol> | <sexpr> | <qexpr> ;
    lispy  : /^/ <expr>* /$/ ;
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional

from lispy import config
from lispy.errors import LispySyntaxError
from lispy.reader.syntax_tree import AstNode, ROOT_TAG, REGEX_TAG, CHAR_TAG

logger = logging.getLogger(__name__)


TOKEN_RE = re.compile(
    r"(?P<number>-?[0-9]+)"  # number before symbol so that -5 is a literal
    r"|(?P<symbol>[-+*/])"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<lbrace>\{)"
    r"|(?P<rbrace>\})"
)
WHITESPACE_RE = re.compile(r"\s*")

OPENERS: dict[str, tuple[str, str, str]] = {
    # token type -> (rule name, closing token type, closing text)
    "lparen": ("sexpr", "rparen", ")"),
    "lbrace": ("qexpr", "rbrace", "}"),
}
CLOSERS = ("rparen", "rbrace")

DEFAULT_FILENAME = "<stdin>"


@dataclass(frozen=True)
class Token:
    type: str
    value: str
    line: int
    col: int

    def __str__(self) -> str:
        return f"{self.type}:{self.value!r}"


def position_from_offset(source: str, offset: int) -> tuple[int, int]:
    # Return (line, col), 1-based
    line = source.count("\n", 0, offset) + 1
    last_nl = source.rfind("\n", 0, offset)
    col = offset - last_nl
    return line, col


def lex(source: str, filename: str = DEFAULT_FILENAME) -> Iterator[Token]:
    """Token generator: yields Tokens, skipping whitespace."""
    pos = 0
    n = len(source)
    while True:
        pos = WHITESPACE_RE.match(source, pos).end()
        if pos >= n:
            break
        m = TOKEN_RE.match(source, pos)
        if not m:
            line, col = position_from_offset(source, pos)
            raise LispySyntaxError(f"unexpected character {source[pos]!r}", line, col, filename)
        line, col = position_from_offset(source, pos)
        tok = Token(m.lastgroup, m.group(), line, col)
        logger.debug(f"lex: Got token {tok}")
        yield tok
        pos = m.end()


class TokenStream:
    def __init__(
        self,
        token_iter: Iterator[Token],
        filename: str = DEFAULT_FILENAME,
        max_depth: Optional[int] = None,
        eof_position: tuple[int, int] = (1, 1),
    ):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        self.filename = filename
        self.max_depth = config.get_max_depth() if max_depth is None else max_depth
        self.eof_position = eof_position

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def error(self, message: str, tok: Optional[Token] = None) -> LispySyntaxError:
        line, col = (tok.line, tok.col) if tok is not None else self.eof_position
        return LispySyntaxError(message, line, col, self.filename)

    def parse_expr(self, depth: int = 1) -> AstNode:
        tok = self.peek()
        if tok is None:
            raise self.error("expected expression at end of input")

        if tok.type == "number":
            self.advance()
            return AstNode("expr|number|regex", tok.value, line=tok.line, col=tok.col)

        if tok.type == "symbol":
            self.advance()
            return AstNode("expr|symbol|char", tok.value, line=tok.line, col=tok.col)

        if tok.type in OPENERS:
            return self.parse_list(depth)

        raise self.error(f"unexpected '{tok.value}'", tok)

    def parse_list(self, depth: int) -> AstNode:
        open_tok = self.advance()
        if depth > self.max_depth:
            raise self.error(f"expression nested too deeply (limit {self.max_depth})", open_tok)
        rule, close_type, close_text = OPENERS[open_tok.type]
        logger.debug(f"parse_list: {rule} at {open_tok.line}:{open_tok.col}")

        node = AstNode(f"expr|{rule}|>", line=open_tok.line, col=open_tok.col)
        node.children.append(AstNode(CHAR_TAG, open_tok.value, line=open_tok.line, col=open_tok.col))
        while True:
            tok = self.peek()
            if tok is None:
                raise self.error(f"expected '{close_text}' at end of input")
            if tok.type == close_type:
                self.advance()
                node.children.append(AstNode(CHAR_TAG, tok.value, line=tok.line, col=tok.col))
                return node
            if tok.type in CLOSERS:
                raise self.error(f"expected '{close_text}' but found '{tok.value}'", tok)
            node.children.append(self.parse_expr(depth + 1))

    def parse_all(self) -> Iterator[AstNode]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse(source: str, filename: str = DEFAULT_FILENAME, max_depth: Optional[int] = None) -> AstNode:
    """Parse a whole input into a root node holding every top-level expression."""
    eof_position = position_from_offset(source, len(source))
    stream = TokenStream(lex(source, filename), filename, max_depth, eof_position)
    root = AstNode(ROOT_TAG, children=[AstNode(REGEX_TAG, line=1, col=1)])
    root.children.extend(stream.parse_all())
    root.children.append(AstNode(REGEX_TAG, line=eof_position[0], col=eof_position[1]))
    return root
