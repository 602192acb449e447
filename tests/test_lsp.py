from lsprotocol.types import DiagnosticSeverity

from lispy_lsp.indexer import (
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    Problem,
    build_index,
    describe,
    problems,
    word_at,
)
from lispy_lsp.server import callee_at, to_diagnostics
from lispy.types.operator import Operator

DOCUMENT = "(+ 1 2)\n\n(/ 1 0)\n(+ 1\n{1 2}\n"


def test_build_index_evaluates_each_line(interp):
    idx = build_index(DOCUMENT, interp)
    assert sorted(idx.lines) == [0, 2, 3, 4]
    assert idx.lines[0].result == "3"
    assert idx.lines[2].result == "Error: Division By Zero"
    assert idx.lines[2].is_error_value
    assert idx.lines[3].syntax_error is not None
    assert idx.lines[4].result == "{1 2}"
    assert idx.paren_balance == 1
    assert idx.brace_balance == 0


def test_problems(interp):
    found = problems(build_index(DOCUMENT, interp))
    assert found == [
        Problem(2, 0, 7, "Error: Division By Zero", SEVERITY_WARNING),
        Problem(3, 4, 5, "expected ')' at end of input", SEVERITY_ERROR),
        Problem(0, 0, 1, "Unmatched parentheses detected", SEVERITY_WARNING),
    ]


def test_clean_document_has_no_problems(interp):
    assert problems(build_index("(+ 1 2)\n  (* 3 4)  \n", interp)) == []


def test_to_diagnostics():
    diags = to_diagnostics([
        Problem(3, 4, 5, "expected ')' at end of input", SEVERITY_ERROR),
        Problem(2, 0, 7, "Error: Division By Zero", SEVERITY_WARNING),
    ])
    assert [d.severity for d in diags] == [DiagnosticSeverity.Error, DiagnosticSeverity.Warning]
    assert (diags[0].range.start.line, diags[0].range.start.character) == (3, 4)
    assert diags[1].range.end.character == 7
    assert all(d.source == "lispy-ls" for d in diags)


def test_describe(interp):
    idx = build_index(DOCUMENT, interp)
    assert describe(idx, 0, 1) == "(+ n &rest ns)"
    assert describe(idx, 0, 3) == "(+ 1 2) => 3"
    assert describe(idx, 1, 0) is None
    assert describe(idx, 3, 0) is None


def test_word_at():
    assert word_at("(+ 12 3)", 3) == "12"
    assert word_at("(+ 12 3)", 0) is None
    assert word_at("(- -5)", 4) == "-5"
    assert word_at("abc", 99) == "abc"


def test_callee_at():
    assert callee_at("(* 1 ") is Operator.MUL
    assert callee_at("(+ 1 (/ 2") is Operator.DIV
    assert callee_at("(1 2") is None
    assert callee_at("1 2") is None
    assert callee_at("(") is None
