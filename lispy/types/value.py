"""The Lispy value model.

A Value is one of five variants:

    - Number  -> signed integer leaf
    - Error   -> message leaf; poisons the expression it appears in
    - Symbol  -> operator name leaf
    - SExpr   -> evaluable list of owned child values
    - QExpr   -> quoted list of owned child values, never evaluated

Leaves are frozen. Containers own their children outright: a child lives in
exactly one container, and the only mutations allowed are appending a child
(`add`) and removing one by index (`pop` / `take`, or `replace` while the
evaluator reduces children in place).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace as dc_replace
from io import StringIO
from typing import ClassVar, Iterable, Iterator

from lispy.errors import ErrorKind, LispyContractError, LispyIndexError


class ValueType(enum.Enum):
    NUM = 0
    ERR = 1
    SYM = 2
    SEXPR = 3
    QEXPR = 4


class Value:
    __slots__ = ()

    type: ClassVar[ValueType]


@dataclass(frozen=True)
class Number(Value):
    type: ClassVar[ValueType] = ValueType.NUM

    num: int

    def copy(self) -> Number:
        return dc_replace(self)

    def __str__(self) -> str:
        return str(self.num)


@dataclass(frozen=True)
class Error(Value):
    type: ClassVar[ValueType] = ValueType.ERR

    err: str

    @classmethod
    def from_kind(cls, kind: ErrorKind) -> Error:
        return cls(kind.value)

    def copy(self) -> Error:
        return dc_replace(self)

    def __str__(self) -> str:
        return f"Error: {self.err}"


@dataclass(frozen=True)
class Symbol(Value):
    type: ClassVar[ValueType] = ValueType.SYM

    sym: str

    def copy(self) -> Symbol:
        return dc_replace(self)

    def __str__(self) -> str:
        return self.sym


class Expression(Value):
    """Ordered container of owned child values."""

    __slots__ = ("cells",)

    open_char: ClassVar[str]
    close_char: ClassVar[str]

    def __init__(self, cells: Iterable[Value] = ()):
        self.cells: list[Value] = []
        for cell in cells:
            self.add(cell)

    @property
    def count(self) -> int:
        return len(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.cells)

    def add(self, x: Value) -> Expression:
        """Append `x`, taking ownership of it. Returns self so calls chain."""
        if not isinstance(x, Value):
            raise LispyContractError(f"Cannot add {x!r} to an expression: not a Value")
        if x is self:
            raise LispyContractError("Cannot add an expression to itself")
        self.cells.append(x)
        return self

    def _check_index(self, i: int) -> None:
        if not 0 <= i < len(self.cells):
            raise LispyIndexError(
                f"Index {i} out of range for expression with {len(self.cells)} cells"
            )

    def pop(self, i: int) -> Value:
        """Remove and return the child at `i`; later children shift down by one."""
        self._check_index(i)
        return self.cells.pop(i)

    def take(self, i: int) -> Value:
        """Pop the child at `i` and consume this expression."""
        x = self.pop(i)
        self.clear()
        return x

    def replace(self, i: int, x: Value) -> Value:
        """Swap the child at `i` for `x`, returning the old child."""
        self._check_index(i)
        if x is self:
            raise LispyContractError("Cannot add an expression to itself")
        old = self.cells[i]
        self.cells[i] = x
        return old

    def clear(self) -> None:
        self.cells.clear()

    def copy(self) -> Expression:
        return type(self)(cell.copy() for cell in self.cells)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.cells == other.cells

    __hash__ = None

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(self.open_char)
            buffer.write(" ".join(str(cell) for cell in self.cells))
            buffer.write(self.close_char)
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.cells!r})"


class SExpr(Expression):
    __slots__ = ()

    type: ClassVar[ValueType] = ValueType.SEXPR
    open_char = "("
    close_char = ")"


class QExpr(Expression):
    __slots__ = ()

    type: ClassVar[ValueType] = ValueType.QEXPR
    open_char = "{"
    close_char = "}"
