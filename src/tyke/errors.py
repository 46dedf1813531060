"""Error kinds and Rust-style colored diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tyke.source import SourceFile, Span


class ErrorKind(Enum):
    NONE = "E000"
    ARGUMENTS = "E001"
    TYPE = "E002"
    GENERIC = "E003"
    SYNTAX = "E004"
    TODO = "E005"

    @property
    def code(self) -> str:
        return self.value

    @property
    def headline(self) -> str:
        return _HEADLINES[self]


_HEADLINES = {
    ErrorKind.NONE: "",
    ErrorKind.ARGUMENTS: "Invalid arguments",
    ErrorKind.TYPE: "Mismatched types",
    ErrorKind.GENERIC: "Error",
    ErrorKind.SYNTAX: "Invalid syntax",
    ErrorKind.TODO: "TODO (not implemented)",
}


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a specific source location."""

    span: Span
    message: str


@dataclass(frozen=True)
class Suggestion:
    """A suggested fix."""

    message: str
    replacement: str


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and suggestions.

    ``code`` defaults to the code of ``kind``; warnings pass their own.
    """

    severity: Severity
    kind: ErrorKind
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    code: str = ""

    def __post_init__(self) -> None:
        if not self.code:
            self.code = self.kind.code

    @property
    def span(self) -> Span | None:
        return self.labels[0].span if self.labels else None


def error(
    kind: ErrorKind,
    message: str,
    span: Span | None = None,
    label: str = "",
    notes: list[str] | None = None,
    suggestions: list[Suggestion] | None = None,
) -> CompileError:
    """Build a single-diagnostic CompileError, ready to raise."""
    labels = [DiagnosticLabel(span=span, message=label)] if span is not None else []
    return CompileError([
        Diagnostic(
            severity=Severity.ERROR,
            kind=kind,
            message=message,
            labels=labels,
            notes=list(notes or []),
            suggestions=list(suggestions or []),
        )
    ])


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True, source: SourceFile | None = None) -> None:
        self.color = color
        self.source = source
        self._file_cache: dict[str, list[str]] = {}

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def _get_source_line(self, filename: str, line_num: int) -> str | None:
        """Return the 1-indexed line from the attached source or from disk."""
        if self.source is not None and self.source.filename == filename:
            lines = self.source.lines
        else:
            if filename not in self._file_cache:
                try:
                    path = Path(filename)
                    if path.is_file():
                        self._file_cache[filename] = path.read_text(
                            errors="replace"
                        ).splitlines()
                    else:
                        self._file_cache[filename] = []
                except OSError:
                    self._file_cache[filename] = []
            lines = self._file_cache[filename]
        if 1 <= line_num <= len(lines):
            return lines[line_num - 1]
        return None

    def render(self, diag: Diagnostic) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]

        # Header: error[E002]: Mismatched types
        headline = diag.kind.headline if sev == Severity.ERROR else ""
        title = headline or diag.message
        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {title}{self._c(_RESET)}"
        )
        if headline and diag.message:
            lines.append(f"  {self._c(_BLUE)}:{self._c(_RESET)} {diag.message}")

        for label in diag.labels:
            span = label.span
            lines.append(f"  {self._c(_BLUE)}-->{self._c(_RESET)} {span}")
            gutter = f"{span.start_line:>4}"
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")

            source_line = self._get_source_line(span.file, span.start_line)
            if source_line is not None:
                lines.append(
                    f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} {source_line}"
                )
                if span.start_line == span.end_line:
                    caret_len = max(1, span.end_col - span.start_col + 1)
                    padding = " " * (span.start_col - 1)
                    lines.append(
                        f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                        f"{padding}{self._c(color)}{'^' * caret_len}{self._c(_RESET)}"
                    )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        for suggestion in diag.suggestions:
            lines.append(
                f"  {self._c(_BLUE)}try:{self._c(_RESET)} {suggestion.replacement}"
            )

        return "\n".join(lines)


class CompileError(Exception):
    """Compilation error carrying one or more diagnostics.

    ``kind`` and ``message`` expose the primary (first) diagnostic as the
    ``(kind, message)`` error value callers report.
    """

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")

    @property
    def kind(self) -> ErrorKind:
        if not self.diagnostics:
            return ErrorKind.GENERIC
        return self.diagnostics[0].kind

    @property
    def message(self) -> str | None:
        if not self.diagnostics:
            return None
        return self.diagnostics[0].message or None

    @property
    def span(self) -> Span | None:
        if not self.diagnostics:
            return None
        return self.diagnostics[0].span
