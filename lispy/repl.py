"""Interactive read-eval-print loop for Lispy."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from lispy import __version__, config
from lispy.debug_utils.pprint import DEFAULT_OPTIONS, load_options_from_json, pprint_value
from lispy.errors import LispySyntaxError
from lispy.interpreter import Interpreter
from lispy.types.value import Value

logger = logging.getLogger(__name__)

PROMPT = "lispy> "
BANNER = f"Lispy version {__version__}\nPress Ctrl+c to Exit.\n"


def _load_history(path: Path) -> bool:
    try:
        import readline
    except ImportError:
        logger.debug("readline is not available, history disabled")
        return False
    try:
        readline.read_history_file(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not read history file {path}: {e}")
    return True


def _save_history(path: Path) -> None:
    import readline
    try:
        readline.write_history_file(path)
    except OSError as e:
        logger.warning(f"Could not write history file {path}: {e}")


class Repl:
    def __init__(
        self,
        interpreter: Optional[Interpreter] = None,
        show_ast: bool = False,
        color: bool = False,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ):
        self.interpreter = Interpreter() if interpreter is None else interpreter
        self.show_ast = show_ast
        self.color = color
        self.out = sys.stdout if out is None else out
        self.err = sys.stderr if err is None else err
        raw_options = config.get_color_options()
        self.color_options = load_options_from_json(raw_options) if raw_options else DEFAULT_OPTIONS

    def format_value(self, value: Value) -> str:
        if self.color:
            return pprint_value(value, options=self.color_options)
        return str(value)

    def eval_line(self, line: str, filename: str = "<stdin>", lineno: int = 1) -> bool:
        """Evaluate one program and print its result. Returns False on a syntax error."""
        try:
            tree = self.interpreter.parse(line, filename)
        except LispySyntaxError as e:
            e.line += lineno - 1
            print(e, file=self.err)
            return False
        if self.show_ast:
            self.out.write(tree.pretty())
        print(self.format_value(self.interpreter.eval_tree(tree)), file=self.out)
        return True

    def run(self, input_fn: Callable[[str], str] = input, history: Optional[Path] = None) -> None:
        self.out.write(BANNER + "\n")
        history_enabled = history is not None and _load_history(history)
        try:
            while True:
                try:
                    line = input_fn(PROMPT)
                except (EOFError, KeyboardInterrupt):
                    self.out.write("\n")
                    break
                if not line.strip():
                    continue
                self.eval_line(line)
        finally:
            if history_enabled:
                _save_history(history)

    def run_file(self, path: Path) -> int:
        """Evaluate each non-blank line of `path`; returns the number of lines that failed to parse."""
        failures = 0
        with open(path, "r") as f:
            for lineno, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                if not self.eval_line(line, str(path), lineno):
                    failures += 1
        return failures
