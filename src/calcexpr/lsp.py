"""Minimal LSP server for expression files: diagnostics only.

Each non-blank line of a document is an independent expression; lines
starting with '#' are comments.
"""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from calcexpr import __version__
from calcexpr.calculator import evaluate_lines
from calcexpr.errors import EvalError

server = LanguageServer(
    "calcexpr-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _diagnostic(lineno: int, text: str, exc: EvalError) -> Diagnostic:
    line = lineno - 1
    if exc.has_position:
        start, end = exc.start, exc.end
    else:
        # No recoverable position: flag the whole line
        start, end = 0, len(text)
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=start),
            end=Position(line=line, character=end),
        ),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        source="calcexpr",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Evaluate every line of the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics = [
        _diagnostic(r.line, r.text, r.error)
        for r in evaluate_lines(doc.source)
        if r.error is not None
    ]
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
