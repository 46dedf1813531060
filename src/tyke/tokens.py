"""Byte classes and lexeme spans for the Tyke tokenizer."""

from __future__ import annotations

from dataclasses import dataclass

# Bytes skipped before a token starts.
WHITESPACE: frozenset[int] = frozenset(b" \r\n")

# Bytes that end a token. The non-whitespace ones are tokens of their own.
DELIMITERS: frozenset[int] = frozenset(b" \r\n,():")

# Logical end of input, as written by loaders that NUL-terminate the buffer.
NUL = 0


@dataclass(frozen=True)
class Lexeme:
    """A ``[beginning, end)`` view into a source buffer."""

    beginning: int
    end: int

    def __len__(self) -> int:
        return max(0, self.end - self.beginning)

    def text(self, source: bytes) -> bytes:
        return source[self.beginning:self.end]

    def decode(self, source: bytes) -> str:
        return self.text(source).decode("utf-8", errors="replace")

    def equals(self, source: bytes, expected: bytes) -> bool:
        """True when the lexeme covers exactly ``expected``."""
        return self.text(source) == expected
