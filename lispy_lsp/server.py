from __future__ import annotations

"""
A minimal pygls-based Language Server for Lispy.

Features:
- Text synchronization and document store
- Diagnostics: syntax errors, lines that evaluate to an Error, unmatched delimiters
- Hover: operator signatures, otherwise the value of the line under the cursor
- Completion and Signature Help for the four operators
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    TextDocumentSyncKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
    SignatureInformation,
)

from lispy import __version__
from lispy.types.operator import Operator, SIGNATURES
from lispy_lsp.indexer import (
    SEVERITY_ERROR,
    DocumentIndex,
    Problem,
    build_index,
    describe,
    problems,
)

logger = logging.getLogger(__name__)


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class LispyLanguageServer(LanguageServer):
    CMD_NAME = "lispy-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__, text_document_sync_kind=TextDocumentSyncKind.Full)
        self.documents: Dict[str, DocumentState] = {}


ls = LispyLanguageServer()


def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    logger.debug(f"Indexed {uri}: {len(idx.lines)} programs")
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, to_diagnostics(problems(idx)))


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    _update(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # Full sync: the last change carries the whole document
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents[uri].text if uri in ls.documents else ""
    _update(uri, text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def to_diagnostics(found: List[Problem]) -> List[Diagnostic]:
    return [
        Diagnostic(
            range=Range(
                start=Position(line=p.line, character=p.col),
                end=Position(line=p.line, character=p.end_col),
            ),
            message=p.message,
            severity=DiagnosticSeverity.Error if p.severity == SEVERITY_ERROR else DiagnosticSeverity.Warning,
            source=LispyLanguageServer.CMD_NAME,
        )
        for p in found
    ]


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    contents = describe(state.index, params.position.line, params.position.character)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["(", "{"]))
def on_completion(params: CompletionParams) -> CompletionList:
    items = [
        CompletionItem(label=op.value, kind=CompletionItemKind.Operator, detail=SIGNATURES[op])
        for op in Operator
    ]
    return CompletionList(is_incomplete=False, items=items)


# --- Signature Help ---
@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=[" "]))
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    lines = state.text.splitlines()
    if params.position.line >= len(lines):
        return None
    op = callee_at(lines[params.position.line][: params.position.character])
    if op is None:
        return None

    label = SIGNATURES[op]
    params_list = label.strip("()").split()[1:]
    parameters = [ParameterInformation(label=p) for p in params_list]
    return SignatureHelp(
        signatures=[SignatureInformation(label=label, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


def callee_at(prefix: str) -> Optional[Operator]:
    # operator following the last '(' before the cursor
    lp = prefix.rfind("(")
    if lp == -1:
        return None
    tail = prefix[lp + 1:].split()
    if not tail:
        return None
    return Operator.from_symbol(tail[0])


def main():
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
