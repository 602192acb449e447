from __future__ import annotations

from typing import Optional

from lispy import config
from lispy.evaluation.evaluator import evaluate
from lispy.reader.parser import DEFAULT_FILENAME, parse
from lispy.reader.reader import read
from lispy.reader.syntax_tree import AstNode
from lispy.types.numeric import Arithmetic
from lispy.types.value import Value


class Interpreter:
    """
    Parses, reads and evaluates Lispy programs.

    A program is one line of input: every top-level expression on it belongs
    to a single root S-expression, so `+ 1 2` and `(+ 1 2)` both give 3.
    The interpreter only carries configuration, so one instance can serve
    any number of inputs.
    """
    def __init__(self, arithmetic: Optional[Arithmetic] = None, max_depth: Optional[int] = None):
        self.arithmetic = Arithmetic.from_env() if arithmetic is None else arithmetic
        self.max_depth = config.get_max_depth() if max_depth is None else max_depth

    def parse(self, code: str, filename: str = DEFAULT_FILENAME) -> AstNode:
        """Parse `code`; raises LispySyntaxError if it is not a program."""
        return parse(code, filename, self.max_depth)

    def read(self, code: str, filename: str = DEFAULT_FILENAME) -> Value:
        return read(self.parse(code, filename), self.arithmetic)

    def eval_tree(self, tree: AstNode) -> Value:
        return evaluate(read(tree, self.arithmetic), self.arithmetic)

    def eval(self, code: str, filename: str = DEFAULT_FILENAME) -> Value:
        """Parse, read and evaluate `code`, returning the resulting value."""
        return self.eval_tree(self.parse(code, filename))
