from __future__ import annotations
import logging
import os
import sys
from pathlib import Path

from lispy.errors import LispyConfigError


# Defaults
_DEFAULT_INT_BITS = 64
_DEFAULT_OVERFLOW = "error"
_DEFAULT_MAX_DEPTH = 256
_RECURSION_HEADROOM = 200
_DEFAULT_HISTORY_FILE = Path.home() / ".lispy_history"
_DEFAULT_LOG_LEVEL = "WARNING"

OVERFLOW_POLICIES = ("error", "wrap", "saturate")


def int_from_env(var: str, default: int, minimum: int = 1, maximum: int | None = None) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise LispyConfigError(f"{var} must be an integer, got {raw!r}")
    if value < minimum:
        raise LispyConfigError(f"{var} must be at least {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise LispyConfigError(f"{var} must be at most {maximum}, got {value}")
    return value


def get_int_bits() -> int:
    return int_from_env('LISPY_INT_BITS', _DEFAULT_INT_BITS, minimum=2)


def get_overflow_policy() -> str:
    raw = os.environ.get('LISPY_OVERFLOW', '').strip().lower()
    if not raw:
        return _DEFAULT_OVERFLOW
    if raw not in OVERFLOW_POLICIES:
        raise LispyConfigError(
            f"LISPY_OVERFLOW must be one of {', '.join(OVERFLOW_POLICIES)}, got {raw!r}"
        )
    return raw


def max_safe_depth() -> int:
    # Each nesting level costs two frames in the parser, the evaluator and printing.
    return max((sys.getrecursionlimit() - _RECURSION_HEADROOM) // 2, 1)


def get_max_depth() -> int:
    return int_from_env('LISPY_MAX_DEPTH', _DEFAULT_MAX_DEPTH, maximum=max_safe_depth())


def get_history_file() -> Path:
    raw = os.environ.get('LISPY_HISTORY_FILE')
    if not raw:
        return _DEFAULT_HISTORY_FILE
    return Path(raw.strip()).expanduser()


def get_log_level() -> int:
    raw = os.environ.get('LISPY_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise LispyConfigError(f"LISPY_LOG_LEVEL is not a logging level: {raw!r}")
    return level


def get_color_options() -> str | None:
    # JSON object merged over lispy.debug_utils.pprint.DEFAULT_OPTIONS
    return os.environ.get('LISPY_COLOR_OPTIONS') or None
