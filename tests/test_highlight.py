"""Tests for the Pygments lexer."""

from __future__ import annotations

from pygments.token import Keyword, Name, Number, Punctuation

from tyke.highlight import TykeLexer


def tokens(source: str) -> list[tuple[object, str]]:
    """Helper: highlight source, dropping whitespace tokens."""
    return [
        (kind, value)
        for kind, value in TykeLexer().get_tokens(source)
        if value.strip(" \r\n")
    ]


class TestTykeLexer:
    def test_declaration(self):
        assert tokens("count : integer") == [
            (Name.Variable, "count"),
            (Punctuation, ":"),
            (Keyword.Type, "integer"),
        ]

    def test_integers(self):
        assert tokens("0 420 -7") == [
            (Number.Integer, "0"),
            (Number.Integer, "420"),
            (Number.Integer, "-7"),
        ]

    def test_zero_spellings_are_names(self):
        assert tokens("00 -0") == [(Name, "00"), (Name, "-0")]

    def test_delimiters(self):
        assert tokens("(a,b)") == [
            (Punctuation, "("),
            (Name, "a"),
            (Punctuation, ","),
            (Name, "b"),
            (Punctuation, ")"),
        ]

    def test_type_name_prefix_is_name(self):
        assert tokens("integers") == [(Name, "integers")]

    def test_filename_registration(self):
        assert "*.tyk" in TykeLexer.filenames
