from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from lispy import config


class OverflowPolicy(enum.Enum):
    ERROR = "error"
    WRAP = "wrap"
    SATURATE = "saturate"


@dataclass(frozen=True)
class Arithmetic:
    """Fixed-width signed integer range and what to do when a result leaves it."""

    bits: int = 64
    policy: OverflowPolicy = OverflowPolicy.ERROR

    @classmethod
    def from_env(cls) -> Arithmetic:
        return cls(bits=config.get_int_bits(), policy=OverflowPolicy(config.get_overflow_policy()))

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1

    def in_range(self, n: int) -> bool:
        return self.min_value <= n <= self.max_value

    def fit(self, n: int) -> Optional[int]:
        """Bring `n` into range according to the policy; None means overflow is an error."""
        if self.in_range(n):
            return n
        if self.policy is OverflowPolicy.WRAP:
            half = 1 << (self.bits - 1)
            return ((n + half) % (1 << self.bits)) - half
        if self.policy is OverflowPolicy.SATURATE:
            return self.max_value if n > 0 else self.min_value
        return None


def truncating_div(x: int, y: int) -> int:
    # C integer division: the quotient rounds toward zero.
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q
