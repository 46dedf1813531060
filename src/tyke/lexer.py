"""Tokenizer for the Tyke language.

Tokens are byte spans. Whitespace separates them, and each of ``, ( ) :``
is a token on its own. Everything else runs together into one token, so
``420``, ``foo`` and ``integer`` each lex as a single span. A NUL byte marks
the logical end of input the same way the end of the buffer does.
"""

from __future__ import annotations

from collections.abc import Iterator

from tyke.errors import ErrorKind, error
from tyke.tokens import DELIMITERS, NUL, WHITESPACE, Lexeme


def lex(source: bytes, start: int) -> Lexeme | None:
    """Lex the next token of ``source`` at or after ``start``.

    Returns ``None`` at end of input. Raises an ARGUMENTS CompileError when
    ``start`` lies past the end of the buffer.
    """
    if start > len(source):
        raise error(ErrorKind.ARGUMENTS, "cannot lex empty source")

    beginning = start
    while beginning < len(source) and source[beginning] in WHITESPACE:
        beginning += 1
    if beginning >= len(source) or source[beginning] == NUL:
        return None

    end = beginning
    while end < len(source) and source[end] not in DELIMITERS and source[end] != NUL:
        end += 1
    if end == beginning:
        end += 1
    return Lexeme(beginning, end)


class Lexer:
    """Walks a source buffer lexeme by lexeme."""

    def __init__(self, source: bytes, filename: str = "<stdin>") -> None:
        self.source = source
        self.filename = filename

    def __iter__(self) -> Iterator[Lexeme]:
        lexeme = lex(self.source, 0)
        while lexeme is not None:
            yield lexeme
            lexeme = lex(self.source, lexeme.end)

    def lex(self) -> list[Lexeme]:
        """Tokenize the entire source and return the lexeme list."""
        return list(self)
