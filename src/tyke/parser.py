"""Parser for the Tyke language.

Drives the tokenizer one lexeme at a time and recognizes three forms:
integer literals, bare symbols, and ``symbol : type`` declarations. Type
names are resolved against the parsing context's ``types`` environment;
successful declarations are recorded in its ``variables`` environment.
"""

from __future__ import annotations

import logging

from tyke.ast_nodes import (
    INT64_MAX,
    INT64_MIN,
    Integer,
    Node,
    NoneNode,
    Symbol,
    VariableDeclaration,
    format_tree,
)
from tyke.context import ParsingContext
from tyke.environment import SetResult
from tyke.errors import (
    Diagnostic,
    DiagnosticLabel,
    ErrorKind,
    Severity,
    Suggestion,
    error,
)
from tyke.lexer import lex
from tyke.source import SourceFile, Span
from tyke.tokens import Lexeme

log = logging.getLogger(__name__)

_COLON = b":"
_SIGNS = (b"+", b"-")


def parse_integer(token: bytes) -> int | None:
    """Parse a decimal integer token, or return None if it is not one.

    Only the single byte ``0`` denotes zero; other spellings of zero such as
    ``00`` or ``-0`` are rejected. Out-of-range values saturate at the 64-bit
    signed bounds.
    """
    if token == b"0":
        return 0
    negative = False
    digits = token
    if digits[:1] in _SIGNS:
        negative = digits[:1] == b"-"
        digits = digits[1:]
    if not digits or not digits.isdigit():
        return None

    limit = -INT64_MIN if negative else INT64_MAX
    magnitude = 0
    for byte in digits:
        magnitude = magnitude * 10 + (byte - ord("0"))
        if magnitude >= limit:
            magnitude = limit
            break
    if magnitude == 0:
        return None
    return -magnitude if negative else magnitude


class Parser:
    """Parses expressions out of a source buffer.

    The cursor and the parsing context persist across ``parse_expr`` calls,
    so consecutive calls walk through the buffer expression by expression.
    """

    def __init__(
        self,
        source: bytes,
        filename: str = "<stdin>",
        context: ParsingContext | None = None,
    ) -> None:
        self.source = source
        self.filename = filename
        self.context = context if context is not None else ParsingContext()
        self.pos = 0
        self.diagnostics: list[Diagnostic] = []
        self._file = SourceFile(source, filename)

    # ── Token access ─────────────────────────────────────────────

    def _next(self) -> Lexeme | None:
        lexeme = lex(self.source, self.pos)
        if lexeme is not None:
            self.pos = lexeme.end
        return lexeme

    def _text(self, lexeme: Lexeme) -> str:
        return lexeme.decode(self.source)

    def _span(self, lexeme: Lexeme) -> Span:
        return self._file.span(lexeme)

    def _warning(self, code: str, message: str, lexeme: Lexeme, label: str = "") -> None:
        self.diagnostics.append(
            Diagnostic(
                severity=Severity.WARNING,
                kind=ErrorKind.NONE,
                message=message,
                labels=[DiagnosticLabel(span=self._span(lexeme), message=label)],
                code=code,
            )
        )

    # ── Expressions ──────────────────────────────────────────────

    def parse_expr(self) -> Node:
        """Parse one expression starting at the cursor.

        Returns ``NoneNode`` when the input is exhausted before any token.
        Raises CompileError on an unresolved type or an unrecognized token.
        """
        result: Node = NoneNode()
        while True:
            token = self._next()
            if token is None:
                return result

            value = parse_integer(token.text(self.source))
            if value is None:
                return self._parse_symbol(token)

            result = Integer(value)
            # TODO: check the lookahead for a binary operator taking integers.
            self._next()
            log.debug("intermediate node: %s", format_tree(result))

    def _parse_symbol(self, token: Lexeme) -> Node:
        symbol = Symbol(self._text(token))

        following = self._next()
        if following is None:
            return symbol
        if following.equals(self.source, _COLON):
            return self._parse_declaration(symbol, token, following)

        text = self._text(following)
        raise error(
            ErrorKind.SYNTAX,
            f"unrecognized token '{text}'",
            self._span(following),
            label="not expected here",
        )

    def _parse_declaration(self, symbol: Symbol, name: Lexeme, colon: Lexeme) -> Node:
        type_token = self._next()
        if type_token is None:
            raise error(
                ErrorKind.SYNTAX,
                "expected type name after ':'",
                self._span(colon),
            )

        type_name = self._text(type_token)
        resolved = self.context.types.get(Symbol(type_name))
        if resolved is None:
            known = [b.id.name for b in self.context.types if isinstance(b.id, Symbol)]
            raise error(
                ErrorKind.TYPE,
                f"invalid type within variable declaration: '{type_name}'",
                self._span(type_token),
                label="unknown type",
                notes=[f"known types: {', '.join(known)}"] if known else None,
                suggestions=[
                    Suggestion(
                        f"declare '{symbol.name}' as {known_name}",
                        f"{symbol.name} : {known_name}",
                    )
                    for known_name in known
                ],
            )

        decl = VariableDeclaration()
        decl.add_child(resolved.tag_copy())
        decl.add_child(symbol)

        outcome = self.context.variables.set(Symbol(symbol.name), resolved.tag_copy())
        if outcome is SetResult.OVERWROTE:
            self._warning(
                "W100",
                f"redeclaration of '{symbol.name}'",
                name,
                label="previous declaration replaced",
            )
        return decl


def parse(
    source: bytes,
    filename: str = "<stdin>",
    context: ParsingContext | None = None,
) -> Node:
    """Parse a single expression from ``source``."""
    return Parser(source, filename, context).parse_expr()
