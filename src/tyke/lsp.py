"""Tyke Language Server — pygls-based LSP for .tyk files.

Publishes parse diagnostics and answers hover requests via stdio transport.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer

from tyke import __version__
from tyke.ast_nodes import Node
from tyke.context import ParsingContext
from tyke.errors import CompileError, Diagnostic, Severity
from tyke.lexer import Lexer
from tyke.parser import Parser
from tyke.source import SourceFile, Span

# ── Conversion helpers ────────────────────────────────────────────

_SEVERITY_MAP = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.NOTE: lsp.DiagnosticSeverity.Information,
}


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def span_to_range(span: Span, source: SourceFile | None = None) -> lsp.Range:
    """Convert a 1-indexed inclusive Span to a 0-indexed LSP Range.

    With ``source`` given, character columns become UTF-16 code units.
    """
    start_char = span.start_col - 1
    end_char = span.end_col
    if source is not None:
        start_char = _utf16_len(source.line_at(span.start_line)[:start_char])
        end_char = _utf16_len(source.line_at(span.end_line)[:end_char])
    return lsp.Range(
        start=lsp.Position(line=span.start_line - 1, character=start_char),
        end=lsp.Position(line=span.end_line - 1, character=end_char),
    )


def _compile_diag(d: Diagnostic, source: SourceFile | None = None) -> lsp.Diagnostic:
    """Convert a tyke Diagnostic to an LSP Diagnostic."""
    span_range = lsp.Range(start=lsp.Position(0, 0), end=lsp.Position(0, 0))
    if d.span is not None:
        span_range = span_to_range(d.span, source)
    return lsp.Diagnostic(
        range=span_range,
        severity=_SEVERITY_MAP[d.severity],
        source="tyke",
        code=d.code,
        message=f"[{d.code}] {d.message}",
    )


# ── Per-document state ────────────────────────────────────────────


@dataclass
class DocumentState:
    """Cached analysis results for a single open document."""

    source: bytes = b""
    node: Node | None = None
    context: ParsingContext | None = None
    diagnostics: list[lsp.Diagnostic] = field(default_factory=list)


server = LanguageServer(
    "tyke-lsp", __version__,
    text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
)
_state: dict[str, DocumentState] = {}


def _analyze(uri: str, text: str) -> DocumentState:
    """Parse the document, cache results, return state."""
    source = text.encode("utf-8")
    source_file = SourceFile(source, uri)
    parser = Parser(source, uri)
    ds = DocumentState(source=source, context=parser.context)
    try:
        ds.node = parser.parse_expr()
    except CompileError as e:
        ds.diagnostics.extend(_compile_diag(d, source_file) for d in e.diagnostics)
    ds.diagnostics.extend(_compile_diag(d, source_file) for d in parser.diagnostics)
    _state[uri] = ds
    return ds


def _word_at(source: bytes, line: int, character: int) -> str:
    """The lexeme covering the given 0-indexed position, or ''.

    ``character`` counts UTF-16 code units, as LSP positions do.
    """
    lines = source.split(b"\n")
    if line < 0 or line >= len(lines):
        return ""
    text = lines[line].decode("utf-8", errors="replace")
    index = units = 0
    while index < len(text) and units < character:
        units += _utf16_len(text[index])
        index += 1
    offset = sum(len(raw) + 1 for raw in lines[:line]) + len(text[:index].encode("utf-8"))
    for lexeme in Lexer(source):
        if lexeme.beginning <= offset < lexeme.end:
            return lexeme.decode(source)
        if lexeme.beginning > offset:
            break
    return ""


def _hover_text(ds: DocumentState, word: str) -> str | None:
    context = ds.context
    if context is None or not word:
        return None
    if context.resolve_type(word) is not None:
        return f"**type** `{word}`"
    declared = context.declared_type(word)
    if declared is not None:
        type_name = context.type_name(declared) or declared.label()
        return f"**variable** `{word}` : `{type_name}`"
    return None


# ── LSP Feature Handlers ─────────────────────────────────────────


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
    uri = params.text_document.uri
    ds = _analyze(uri, params.text_document.text)
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=ds.diagnostics,
    ))


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
    uri = params.text_document.uri
    # Full sync — take last content change
    text = params.content_changes[-1].text if params.content_changes else ""
    ds = _analyze(uri, text)
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=ds.diagnostics,
    ))


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
    _state.pop(params.text_document.uri, None)


@server.feature(lsp.TEXT_DOCUMENT_HOVER)
def hover(params: lsp.HoverParams) -> lsp.Hover | None:
    ds = _state.get(params.text_document.uri)
    if ds is None:
        return None
    word = _word_at(ds.source, params.position.line, params.position.character)
    content = _hover_text(ds, word)
    if content is None:
        return None
    return lsp.Hover(contents=lsp.MarkupContent(
        kind=lsp.MarkupKind.Markdown,
        value=content,
    ))


def main() -> None:
    """Start the Tyke language server on stdio."""
    server.start_io()
