"""Tests for the LSP server: diagnostic generation for route files."""

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

from pathpat.lsp import _validate


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///app.routes") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="routes", version=0, text=source)
        )

    return ls, published, put


# ---------------------------------------------------------------------------
# Pattern errors → Error severity
# ---------------------------------------------------------------------------


class TestPatternErrors:
    def test_missing_name(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("/users/:")
        _validate(ls, "file:///app.routes")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "missing parameter name" in d.message
        assert d.source == "pathpat"
        # ':' is at column 8 (1-based) → character 7 (0-based)
        assert d.range.start.line == 0
        assert d.range.start.character == 7

    def test_unclosed_group(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("/a{/b")
        _validate(ls, "file:///app.routes")

        d = published[0].diagnostics[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "CLOSE" in d.message


# ---------------------------------------------------------------------------
# Duplicate routes → Warning severity
# ---------------------------------------------------------------------------


class TestDuplicates:
    def test_duplicate_route(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("/users/:id\n/users/:name")
        _validate(ls, "file:///app.routes")

        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Warning
        assert d.range.start.line == 1
        assert d.range.end.character == len("/users/:name")


# ---------------------------------------------------------------------------
# Clean document → empty diagnostics
# ---------------------------------------------------------------------------


class TestCleanDocument:
    def test_valid_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("# routes\n/\n/posts/:slug\n")
        _validate(ls, "file:///app.routes")

        assert len(published) == 1
        assert published[0].diagnostics == []


# ---------------------------------------------------------------------------
# Position conversion (1-based → 0-based)
# ---------------------------------------------------------------------------


class TestPositionConversion:
    def test_error_on_indented_third_line(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("/a\n\n  /b/(x")
        _validate(ls, "file:///app.routes")

        d = published[0].diagnostics[0]
        # Line 3 (1-based) → LSP line 2; '(' at column 6 → character 5
        assert d.range.start.line == 2
        assert d.range.start.character == 5
