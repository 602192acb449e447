from __future__ import annotations

import enum
from typing import Optional


class Operator(enum.Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @classmethod
    def from_symbol(cls, sym: str) -> Optional[Operator]:
        """Resolve an operator from its symbol text, or None if it names no operator."""
        try:
            return cls(sym)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


# Shown by the language server on hover and signature help.
SIGNATURES: dict[Operator, str] = {
    Operator.ADD: "(+ n &rest ns)",
    Operator.SUB: "(- n &rest ns)",
    Operator.MUL: "(* n &rest ns)",
    Operator.DIV: "(/ n &rest ns)",
}
