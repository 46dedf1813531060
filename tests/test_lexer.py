"""Tests for the Tyke lexer."""

from __future__ import annotations

import pytest

from tyke.errors import CompileError, ErrorKind
from tyke.lexer import Lexer, lex
from tyke.tokens import Lexeme


def texts(source: bytes) -> list[bytes]:
    """Helper: lex source and return each lexeme's bytes."""
    return [t.text(source) for t in Lexer(source).lex()]


class TestLexFunction:
    def test_empty_source(self):
        assert lex(b"", 0) is None

    def test_whitespace_only(self):
        assert lex(b"  \r\n ", 0) is None

    def test_skips_leading_whitespace(self):
        token = lex(b"  42", 0)
        assert token == Lexeme(2, 4)
        assert token.text(b"  42") == b"42"

    def test_start_at_end_is_no_token(self):
        assert lex(b"abc", 3) is None

    def test_start_past_end_is_arguments_error(self):
        with pytest.raises(CompileError) as exc:
            lex(b"abc", 4)
        assert exc.value.kind == ErrorKind.ARGUMENTS
        assert exc.value.message == "cannot lex empty source"

    def test_nul_byte_ends_input(self):
        assert lex(b"\x00abc", 0) is None
        assert lex(b"  \x00abc", 0) is None

    def test_nul_byte_ends_token(self):
        source = b"abc\x00def"
        assert lex(source, 0) == Lexeme(0, 3)
        assert lex(source, 3) is None

    def test_delimiter_is_single_byte_token(self):
        for delim in (b",", b"(", b")", b":"):
            assert lex(delim + b"rest", 0) == Lexeme(0, 1)

    def test_tab_is_not_whitespace(self):
        assert lex(b"\tx", 0) == Lexeme(0, 2)

    def test_deterministic(self):
        source = b"A : integer"
        assert lex(source, 1) == lex(source, 1)
        assert lex(source, 0) == lex(source, 0)


class TestLexerStream:
    def test_delimiter_isolation(self):
        assert texts(b"a,b") == [b"a", b",", b"b"]

    def test_declaration(self):
        assert texts(b"A: integer") == [b"A", b":", b"integer"]

    def test_parens(self):
        assert texts(b"(foo bar)") == [b"(", b"foo", b"bar", b")"]

    def test_runs_of_other_bytes(self):
        assert texts(b"420 +7 a-b") == [b"420", b"+7", b"a-b"]

    def test_crlf_separators(self):
        assert texts(b"a\r\nb\n") == [b"a", b"b"]

    def test_stops_at_nul_terminator(self):
        assert texts(b"x : integer\x00junk") == [b"x", b":", b"integer"]

    def test_iteration_matches_list(self):
        source = b"1 2 three"
        assert list(Lexer(source)) == Lexer(source).lex()

    def test_lexeme_length(self):
        assert [len(t) for t in Lexer(b"abc , d").lex()] == [3, 1, 1]


class TestLexeme:
    def test_decode(self):
        assert Lexeme(0, 3).decode(b"foo bar") == "foo"

    def test_decode_invalid_utf8(self):
        assert Lexeme(0, 1).decode(b"\xff") == "\ufffd"

    def test_equals(self):
        source = b"a:b"
        assert Lexeme(1, 2).equals(source, b":")
        assert not Lexeme(0, 1).equals(source, b":")
