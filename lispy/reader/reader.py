"""Lower a tagged syntax tree into Lispy values."""

from __future__ import annotations

import logging
import re
from typing import Optional

from lispy.errors import ErrorKind
from lispy.reader.syntax_tree import AstNode, REGEX_TAG
from lispy.types.numeric import Arithmetic
from lispy.types.value import Error, Expression, Number, QExpr, SExpr, Symbol, Value

logger = logging.getLogger(__name__)

NUMBER_RE = re.compile(r"\s*[+-]?[0-9]+")
DELIMITERS = ("(", ")", "{", "}")


def read_num(node: AstNode, arithmetic: Arithmetic) -> Value:
    text = node.contents
    if not NUMBER_RE.fullmatch(text):
        return Error.from_kind(ErrorKind.BAD_NUM)
    n = int(text, 10)
    if not arithmetic.in_range(n):
        logger.debug(f"read_num: {text} does not fit in {arithmetic.bits} bits")
        return Error.from_kind(ErrorKind.BAD_NUM)
    return Number(n)


def _is_skipped(node: AstNode) -> bool:
    return node.contents in DELIMITERS or node.tag == REGEX_TAG


def _read(node: AstNode, arithmetic: Arithmetic) -> Value:
    if "number" in node.tag:
        return read_num(node, arithmetic)
    if "symbol" in node.tag:
        return Symbol(node.contents)

    # Root (">") and sexpr nodes both become S-expressions.
    x: Expression = QExpr() if "qexpr" in node.tag else SExpr()
    for child in node.children:
        if _is_skipped(child):
            continue
        x.add(_read(child, arithmetic))
    return x


def read(node: AstNode, arithmetic: Optional[Arithmetic] = None) -> Value:
    """
    Build the value for `node` and everything below it.

    Never raises for well-formed trees: a number literal that is not an
    integer inside the arithmetic's range becomes Error "invalid number".
    """
    if arithmetic is None:
        arithmetic = Arithmetic.from_env()
    return _read(node, arithmetic)
