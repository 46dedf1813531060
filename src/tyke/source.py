"""Source buffer representation and span tracking for diagnostics."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path

from tyke.tokens import NUL, Lexeme


@dataclass(frozen=True)
class Span:
    """A 1-indexed, inclusive line/column range within a source file."""

    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.file}:{self.start_line}:{self.start_col}"


class SourceFile:
    """A source buffer held as raw bytes, with line access for diagnostics.

    Lexemes carry byte offsets; spans carry character columns into the
    decoded lines, so carets and editor ranges line up with the text.
    """

    def __init__(self, content: bytes, filename: str = "<stdin>") -> None:
        self.content = content
        self.filename = filename
        end = content.find(bytes([NUL]))
        text = content if end < 0 else content[:end]
        self.lines = [
            line.decode("utf-8", errors="replace").removesuffix("\r")
            for line in text.split(b"\n")
        ]
        self._line_starts = [0]
        for i, byte in enumerate(text):
            if byte == ord("\n"):
                self._line_starts.append(i + 1)

    @classmethod
    def load(cls, path: Path) -> SourceFile:
        """Read a whole file and NUL-terminate the buffer."""
        return cls(path.read_bytes() + bytes([NUL]), str(path))

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1]
        return ""

    def position(self, offset: int) -> tuple[int, int]:
        """Map a byte offset to a 1-indexed (line, character column) pair."""
        index = bisect_right(self._line_starts, offset) - 1
        prefix = self.content[self._line_starts[index]:offset]
        return index + 1, len(prefix.decode("utf-8", errors="replace")) + 1

    def span(self, lexeme: Lexeme) -> Span:
        start_line, start_col = self.position(lexeme.beginning)
        # Lexemes never cross a newline, so the end sits on the start line.
        _, after = self.position(lexeme.end)
        return Span(self.filename, start_line, start_col, start_line, max(start_col, after - 1))

    def span_text(self, span: Span) -> str:
        """Extract the text covered by a span."""
        if span.start_line == span.end_line:
            line = self.line_at(span.start_line)
            return line[span.start_col - 1 : span.end_col]
        parts = []
        for ln in range(span.start_line, span.end_line + 1):
            line = self.line_at(ln)
            if ln == span.start_line:
                parts.append(line[span.start_col - 1 :])
            elif ln == span.end_line:
                parts.append(line[: span.end_col])
            else:
                parts.append(line)
        return "\n".join(parts)
