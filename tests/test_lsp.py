"""Tests for the LSP server: diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from calcexpr.lsp import _validate


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///test.calc") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="calcexpr", version=0, text=source)
        )

    return ls, published, put


class TestDiagnostics:
    def test_unknown_symbol(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("5+&")
        _validate(ls, "file:///test.calc")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "'&'" in d.message
        assert d.source == "calcexpr"
        assert d.range.start.line == 0
        assert d.range.start.character == 2
        assert d.range.end.character == 3

    def test_error_on_later_line(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("1+2\n# comment\n1+)")
        _validate(ls, "file:///test.calc")

        diags = published[0].diagnostics
        assert len(diags) == 1
        assert diags[0].range.start.line == 2
        assert diags[0].range.start.character == 2

    def test_unpositioned_error_covers_line(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("(1+2")
        _validate(ls, "file:///test.calc")

        d = published[0].diagnostics[0]
        assert "unbalanced" in d.message
        assert d.range.start.character == 0
        assert d.range.end.character == 4

    def test_multiple_errors(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("*1\n2\n3/")
        _validate(ls, "file:///test.calc")

        lines = [d.range.start.line for d in published[0].diagnostics]
        assert lines == [0, 2]


class TestCleanDocument:
    def test_valid_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("1+2\n\n2*(3+4)\n")
        _validate(ls, "file:///test.calc")

        assert len(published) == 1
        assert published[0].diagnostics == []
