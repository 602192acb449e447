import json
import logging
import re

from lispy.types.value import Error, Expression, Number, QExpr, Symbol, Value

logger = logging.getLogger(__name__)

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_NUMBER = "\033[94m"
COLOR_ERROR = "\033[91m"
COLOR_SYMBOL = "\033[95m"
COLOR_SEXPR = "\033[90m"
COLOR_QEXPR = "\033[96m"

ANSI_RE = re.compile(r"\033\[[0-9;]*m")

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "color_numbers": True,
    "color_errors": True,
    "color_symbols": True,
    "color_brackets": True,
}

PLAIN_OPTIONS = {
    **DEFAULT_OPTIONS,
    "color_numbers": False,
    "color_errors": False,
    "color_symbols": False,
    "color_brackets": False,
}


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{RESET}" if enabled else text


def visible_length(text: str) -> int:
    return len(ANSI_RE.sub("", text))


# ----------------- Colorize utility -----------------
def colorize(value: Value, options: dict = DEFAULT_OPTIONS) -> str:
    if isinstance(value, Number):
        return _paint(str(value), COLOR_NUMBER, options.get("color_numbers", True))
    if isinstance(value, Error):
        return _paint(str(value), COLOR_ERROR, options.get("color_errors", True))
    if isinstance(value, Symbol):
        return _paint(str(value), COLOR_SYMBOL, options.get("color_symbols", True))
    return str(value)


# ----------------- Pretty printer -----------------
def pprint_value(value: Value, indent: int = 0, options: dict = DEFAULT_OPTIONS) -> str:
    """Render `value` like str(value), coloured, breaking long lists over several lines."""
    if not isinstance(value, Expression):
        return colorize(value, options)

    color = COLOR_QEXPR if isinstance(value, QExpr) else COLOR_SEXPR
    paint_brackets = options.get("color_brackets", True)
    open_str = _paint(value.open_char, color, paint_brackets)
    close_str = _paint(value.close_char, color, paint_brackets)

    if not value.count:
        return open_str + close_str

    parts = [pprint_value(cell, indent + 1, options) for cell in value]

    single_line = open_str + " ".join(parts) + close_str
    if visible_length(single_line) + indent * 2 <= options.get("max_line_length", 80):
        return single_line

    aligned_lines = [open_str + parts[0]]
    for part in parts[1:]:
        aligned_lines.append("  " * (indent + 1) + part)
    aligned_lines[-1] += close_str
    return "\n".join(aligned_lines)


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    try:
        user_opts = json.loads(json_str)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring pretty-printer options, not valid JSON: {e}")
        return DEFAULT_OPTIONS
    if not isinstance(user_opts, dict):
        logger.warning("Ignoring pretty-printer options, expected a JSON object")
        return DEFAULT_OPTIONS
    return {**DEFAULT_OPTIONS, **user_opts}
