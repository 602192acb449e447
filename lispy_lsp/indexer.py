from __future__ import annotations

"""
Indexer for Lispy documents.

Every non-blank line of a document is a program, exactly as at the REPL. The
indexer parses and evaluates each line once and keeps what the language
server needs: the printed result, or the syntax error with its position.
Evaluation is pure arithmetic, so running user buffers is safe.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from lispy.errors import LispySyntaxError
from lispy.interpreter import Interpreter
from lispy.types.operator import Operator, SIGNATURES
from lispy.types.value import Error


SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


@dataclass
class LineResult:
    line: int  # 0-based
    source: str
    result: Optional[str] = None
    is_error_value: bool = False
    syntax_error: Optional[LispySyntaxError] = None


@dataclass
class Problem:
    line: int  # 0-based
    col: int  # 0-based
    end_col: int
    message: str
    severity: str


@dataclass
class DocumentIndex:
    lines: Dict[int, LineResult] = field(default_factory=dict)
    paren_balance: int = 0
    brace_balance: int = 0


def build_index(text: str, interpreter: Optional[Interpreter] = None) -> DocumentIndex:
    interp = Interpreter() if interpreter is None else interpreter
    idx = DocumentIndex()

    for ch in text:
        if ch == "(":
            idx.paren_balance += 1
        elif ch == ")":
            idx.paren_balance -= 1
        elif ch == "{":
            idx.brace_balance += 1
        elif ch == "}":
            idx.brace_balance -= 1

    for lineno, source in enumerate(text.splitlines()):
        if not source.strip():
            continue
        entry = LineResult(line=lineno, source=source)
        try:
            value = interp.eval(source)
        except LispySyntaxError as e:
            entry.syntax_error = e
        else:
            entry.result = str(value)
            entry.is_error_value = isinstance(value, Error)
        idx.lines[lineno] = entry

    return idx


def problems(idx: DocumentIndex) -> List[Problem]:
    found: List[Problem] = []
    for entry in idx.lines.values():
        if entry.syntax_error is not None:
            col = max(entry.syntax_error.col - 1, 0)
            found.append(Problem(
                line=entry.line, col=col, end_col=col + 1,
                message=entry.syntax_error.message, severity=SEVERITY_ERROR,
            ))
        elif entry.is_error_value:
            start = len(entry.source) - len(entry.source.lstrip())
            found.append(Problem(
                line=entry.line, col=start, end_col=len(entry.source.rstrip()),
                message=entry.result, severity=SEVERITY_WARNING,
            ))

    if idx.paren_balance != 0:
        found.append(Problem(0, 0, 1, "Unmatched parentheses detected", SEVERITY_WARNING))
    if idx.brace_balance != 0:
        found.append(Problem(0, 0, 1, "Unmatched braces detected", SEVERITY_WARNING))
    return found


def word_at(source: str, character: int) -> Optional[str]:
    # expand to token boundaries
    character = min(character, len(source))
    start = character
    while start > 0 and source[start - 1] not in " \t(){}":
        start -= 1
    end = character
    while end < len(source) and source[end] not in " \t(){}":
        end += 1
    return source[start:end] or None


def describe(idx: DocumentIndex, line: int, character: int) -> Optional[str]:
    """Hover text at a position: an operator's signature, else the line's result."""
    entry = idx.lines.get(line)
    if entry is None:
        return None
    op = Operator.from_symbol(word_at(entry.source, character) or "")
    if op is not None:
        return SIGNATURES[op]
    if entry.result is not None:
        return f"{entry.source.strip()} => {entry.result}"
    return None
