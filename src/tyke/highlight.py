"""Pygments lexer for the Tyke language."""

from pygments.lexer import RegexLexer, words
from pygments.token import Keyword, Name, Number, Punctuation, Text

from tyke.context import BUILTIN_TYPES

# A token ends at whitespace, a delimiter, NUL, or the end of input.
_END = r"(?=[ \r\n,():\x00]|\Z)"


class TykeLexer(RegexLexer):
    """Pygments lexer for the Tyke typed expression language."""

    name = "Tyke"
    aliases = ["tyke"]
    filenames = ["*.tyk"]
    mimetypes = ["text/x-tyke"]

    tokens = {
        "root": [
            (r"[ \r\n]+", Text),
            (r"\x00", Text),
            (r"[,():]", Punctuation),
            # Only a bare 0 is zero; other zero spellings are symbols.
            (r"0" + _END, Number.Integer),
            (r"[+\-]?0*[1-9][0-9]*" + _END, Number.Integer),
            (words(tuple(BUILTIN_TYPES), suffix=_END), Keyword.Type),
            # Declared names (symbol followed by a colon)
            (r"[^ \r\n,():\x00]+(?=[ \r\n]*:)", Name.Variable),
            (r"[^ \r\n,():\x00]+", Name),
        ],
    }
