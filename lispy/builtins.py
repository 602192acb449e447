"""Builtin arithmetic for the Lispy evaluator.

`apply_operator` folds one of the four operators left to right over a list of
Number arguments. It consumes the argument expression on every path, whether
it returns a Number or an Error.
"""
from __future__ import annotations

import logging
import operator
from typing import Callable, Optional, Union

from lispy.errors import ErrorKind
from lispy.types.numeric import Arithmetic, truncating_div
from lispy.types.operator import Operator
from lispy.types.value import Error, Expression, Number, Value

logger = logging.getLogger(__name__)

FOLDS: dict[Operator, Callable[[int, int], int]] = {
    Operator.ADD: operator.add,
    Operator.SUB: operator.sub,
    Operator.MUL: operator.mul,
    Operator.DIV: truncating_div,
}


def _fail(args: Expression, kind: ErrorKind) -> Error:
    args.clear()
    return Error.from_kind(kind)


def apply_operator(
    args: Expression,
    op: Union[Operator, str],
    arithmetic: Optional[Arithmetic] = None,
) -> Value:
    """Reduce `args` with `op`; `args` must hold at least one value."""
    if arithmetic is None:
        arithmetic = Arithmetic.from_env()
    resolved = op if isinstance(op, Operator) else Operator.from_symbol(op)

    # All arguments must be numbers before any arithmetic happens.
    for cell in args:
        if not isinstance(cell, Number):
            return _fail(args, ErrorKind.BAD_OP)
    if resolved is None:
        logger.debug(f"apply_operator: unknown operator {op!r}")
        return _fail(args, ErrorKind.UNKNOWN_OP)

    acc = args.pop(0).num

    # (- x) is negation
    if resolved is Operator.SUB and args.count == 0:
        negated = arithmetic.fit(-acc)
        if negated is None:
            return _fail(args, ErrorKind.OVERFLOW)
        acc = negated

    fold = FOLDS[resolved]
    while args.count > 0:
        y = args.pop(0).num
        if resolved is Operator.DIV and y == 0:
            return _fail(args, ErrorKind.DIV_ZERO)
        result = arithmetic.fit(fold(acc, y))
        if result is None:
            logger.debug(f"apply_operator: {acc} {resolved} {y} overflows {arithmetic.bits} bits")
            return _fail(args, ErrorKind.OVERFLOW)
        acc = result

    args.clear()
    return Number(acc)
