"""Minimal LSP server for doc comments — diagnostics only."""

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

from doctor import __version__
from doctor.errors import ParseError
from doctor.parser import parse

server = LanguageServer("doctor-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document as one doc comment and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source.rstrip("\r\n")
    diagnostics: list[Diagnostic] = []

    try:
        parse(source)
    except ParseError as exc:
        pos = exc.position
        line = pos.line - 1
        col = pos.column - 1
        rules = " <- ".join(entry.rule for entry in exc.trace)
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
                message=f"{exc.message} ({rules})",
                severity=DiagnosticSeverity.Error,
                source="doctor",
            )
        )

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
