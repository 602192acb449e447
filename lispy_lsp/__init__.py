"""Lispy Language Server and REPL integration package.

This package provides:
- A pygls-based Language Server for Lispy.
- An indexer that parses and evaluates each line of a document for the server.
- A simple TCP REPL server to evaluate code via the existing Interpreter.
"""

__all__ = [
    "server",
    "indexer",
    "repl_server",
]
