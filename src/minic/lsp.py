"""Minimal LSP server for minic — lexical diagnostics only."""

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

from minic import __version__
from minic.errors import LexError
from minic.lexer import tokenize

server = LanguageServer("minic-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        tokenize(source, filename=filename)
    except LexError as exc:
        line = exc.position.line - 1
        # LSP columns count UTF-16 code units, Position.column counts code points
        offset = exc.position.offset
        start = _utf16_len(source[offset - (exc.position.column - 1) : offset])
        end = start + _utf16_len(source[offset : offset + 1])
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=start),
                    end=Position(line=line, character=end),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="minic",
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
