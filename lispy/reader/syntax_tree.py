"""Tagged syntax tree produced by the parser and consumed by the reader.

Tags follow the folding convention of mpc-style parser combinators: a node
reached through several single-child rules carries all of their names joined
with `|`, and the kind of leaf that matched comes last, e.g.

    >                       root
    regex                   start/end anchors (empty contents)
    expr|number|regex       number literal
    expr|symbol|char        operator symbol
    expr|sexpr|>            ( ... )
    expr|qexpr|>            { ... }
    char                    a delimiter: ( ) { }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO


ROOT_TAG = ">"
REGEX_TAG = "regex"
CHAR_TAG = "char"


@dataclass
class AstNode:
    tag: str
    contents: str = ""
    children: list[AstNode] = field(default_factory=list)
    line: int = 1
    col: int = 1

    def _write(self, buffer: StringIO, depth: int) -> None:
        buffer.write("  " * depth)
        if self.children:
            buffer.write(f"{self.tag} \n")
            for child in self.children:
                child._write(buffer, depth + 1)
        else:
            buffer.write(f"{self.tag}:{self.line}:{self.col} '{self.contents}'\n")

    def pretty(self) -> str:
        """Indented dump of the tree, one node per line."""
        with StringIO() as buffer:
            self._write(buffer, 0)
            return buffer.getvalue()
