"""Core evaluator for the Lispy interpreter.

Only S-expressions reduce; numbers, errors, symbols and Q-expressions evaluate
to themselves. Evaluation never raises for malformed input: every failure
comes back as an Error value.
"""

from __future__ import annotations

import logging
from typing import Optional

from lispy.builtins import apply_operator
from lispy.errors import ErrorKind
from lispy.types.numeric import Arithmetic
from lispy.types.operator import Operator
from lispy.types.value import Error, SExpr, Symbol, Value

logger = logging.getLogger(__name__)


def evaluate(value: Value, arithmetic: Optional[Arithmetic] = None) -> Value:
    """Reduce `value` to its result, consuming it if it is an S-expression."""
    if arithmetic is None:
        arithmetic = Arithmetic.from_env()
    return evaluate0(value, arithmetic)


def evaluate0(value: Value, arithmetic: Arithmetic) -> Value:
    if isinstance(value, SExpr):
        return evaluate_sexpr(value, arithmetic)
    return value


def evaluate_sexpr(v: SExpr, arithmetic: Arithmetic) -> Value:
    # Every child is reduced before any of them is inspected.
    for i, cell in enumerate(v.cells):
        v.replace(i, evaluate0(cell, arithmetic))

    # The first error, left to right, becomes the result of the whole expression.
    for i, cell in enumerate(v.cells):
        if isinstance(cell, Error):
            logger.debug(f"evaluate_sexpr: child {i} is {cell}")
            return v.take(i)

    if v.count == 0:
        return v

    # (x) is x
    if v.count == 1:
        return v.take(0)

    head = v.pop(0)
    if not isinstance(head, Symbol):
        v.clear()
        return Error.from_kind(ErrorKind.NOT_SYMBOL)

    # Operands are checked for numbers only once the operator is known.
    op = Operator.from_symbol(head.sym)
    if op is None:
        logger.debug(f"evaluate_sexpr: {head.sym!r} is not an operator")
        v.clear()
        return Error.from_kind(ErrorKind.UNKNOWN_OP)

    return apply_operator(v, op, arithmetic)
