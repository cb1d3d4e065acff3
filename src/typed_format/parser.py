"""Parser for typed_format values and type expressions.

Recursive descent over the token list. Value alternatives are tried in a
fixed priority order; each one starts from a saved token position that is
restored when it does not match, so the first matching alternative wins.
When nothing matches, the error points at the farthest token any
alternative reached, listing everything that was expected there.
"""

from __future__ import annotations

import re
from typing import Callable, NoReturn, TypeVar

from typed_format.ast_nodes import (
    ArrayType,
    BareTypeLit,
    BoolLit,
    CharLit,
    GenericIdentifier,
    GenericType,
    ListLit,
    MapEntry,
    MapLit,
    NamedStructLit,
    NumberLit,
    OptionLit,
    RawStringLit,
    StringLit,
    StructField,
    TupleLit,
    TupleStructLit,
    TupleType,
    TypeIdentifier,
    UnitLit,
    Value,
)
from typed_format.config import Dialect, ParserOptions
from typed_format.errors import (
    InvalidSyntaxError,
    LexError,
    ParseError,
    RecursionLimitExceeded,
    TrailingInputError,
)
from typed_format.lexer import Lexer
from typed_format.source import Span
from typed_format.tokens import (
    BOOL_KEYWORDS,
    NONE_KEYWORD,
    SOME_KEYWORD,
    TOKEN_TEXT,
    Token,
    TokenKind,
)

T = TypeVar("T")

_ARRAY_SIZE_RE = re.compile(r"0|[1-9][0-9]*")


class Parser:
    """Parses a list of tokens into a value or type AST."""

    def __init__(self, tokens: list[Token], options: ParserOptions | None = None) -> None:
        self.tokens = tokens
        self.options = options or ParserOptions()
        self.pos = 0
        self._depth = 0
        self._farthest = 0
        self._expected: list[str] = []

        extended = self.options.dialect == Dialect.EXTENDED
        self._reserved_names = set(BOOL_KEYWORDS)
        if extended:
            self._reserved_names |= {SOME_KEYWORD, NONE_KEYWORD}

        # Priority order of value alternatives
        self._value_alternatives: list[Callable[[], Value]] = [
            self._parse_unit,
            self._parse_bool,
        ]
        if extended:
            self._value_alternatives.append(self._parse_option)
        self._value_alternatives += [
            self._parse_struct,
            self._parse_bare_type,
            self._parse_tuple,
            self._parse_collection,
            self._parse_string,
            self._parse_char,
            self._parse_number,
        ]

    # ── Entry points ─────────────────────────────────────────────

    def parse_value(self) -> Value:
        """Parse the whole token stream as exactly one value."""
        return self._parse_entry(self._parse_value)

    def parse_type_identifier(self) -> TypeIdentifier:
        """Parse the whole token stream as a scoped type identifier."""
        return self._parse_entry(self._parse_type_identifier)

    def parse_type(self) -> GenericType:
        """Parse the whole token stream as a type expression."""
        return self._parse_entry(self._parse_generic_type)

    def _parse_entry(self, rule: Callable[[], T]) -> T:
        self.pos = 0
        self._depth = 0
        self._farthest = 0
        self._expected = []
        try:
            result = rule()
        except _NoMatch:
            raise self._syntax_error() from None
        except RecursionError:
            tok = self._current()
            raise RecursionLimitExceeded(
                "input is nested too deeply for the interpreter stack",
                tok.span,
                found=tok.describe(),
            ) from None

        if not self._at(TokenKind.EOF):
            if self._farthest > self.pos:
                raise self._syntax_error()
            tok = self._current()
            raise TrailingInputError(
                f"unexpected {tok.describe()} after a complete value",
                tok.span,
                expected=(TOKEN_TEXT[TokenKind.EOF],),
                found=tok.describe(),
            )
        return result

    # ── Token access ─────────────────────────────────────────────

    def _current(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]  # EOF

    def _peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]

    def _at(self, kind: TokenKind) -> bool:
        return self._current().kind == kind

    def _advance(self) -> Token:
        tok = self._current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def _expect(self, kind: TokenKind) -> Token:
        if self._current().kind == kind:
            return self._advance()
        self._fail(TOKEN_TEXT[kind])

    def _span_from(self, start: Token) -> Span:
        """Span from a start token to the last consumed token."""
        end = self.tokens[max(self.pos - 1, 0)].span
        return Span(start.span.start, end.end, start.span.line, start.span.column)

    # ── Failure bookkeeping ──────────────────────────────────────

    def _note(self, *expected: str) -> None:
        """Record what would have been accepted at the current position."""
        if self.pos > self._farthest:
            self._farthest = self.pos
            self._expected = []
        if self.pos == self._farthest:
            for item in expected:
                if item not in self._expected:
                    self._expected.append(item)

    def _fail(self, *expected: str) -> NoReturn:
        self._note(*expected)
        raise _NoMatch

    def _attempt(self, rule: Callable[[], T]) -> T | None:
        """Run one alternative, rewinding to the saved position if it fails."""
        save = self.pos
        try:
            return rule()
        except _NoMatch:
            self.pos = save
            return None

    def _syntax_error(self) -> ParseError:
        tok = self.tokens[min(self._farthest, len(self.tokens) - 1)]
        if tok.kind == TokenKind.UNKNOWN:
            return LexError(
                f"unexpected character: {tok.value!r}",
                tok.span,
                rule="token",
                found=tok.describe(),
            )
        return InvalidSyntaxError(
            f"unexpected {tok.describe()}",
            tok.span,
            expected=tuple(self._expected),
            found=tok.describe(),
        )

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > self.options.max_depth:
            tok = self._current()
            raise RecursionLimitExceeded(
                f"nesting exceeds the maximum depth of {self.options.max_depth}",
                tok.span,
                found=tok.describe(),
            )

    def _leave(self) -> None:
        self._depth -= 1

    def _parse_delimited(
        self,
        close: TokenKind,
        parse_item: Callable[[], T],
        *,
        allow_empty: bool = True,
    ) -> list[T]:
        """Parse ``item ("," item)* ","? close`` after the opening delimiter."""
        items: list[T] = []
        if not allow_empty:
            items.append(parse_item())
            if self._at(TokenKind.COMMA):
                self._advance()
            elif not self._at(close):
                self._fail(TOKEN_TEXT[TokenKind.COMMA], TOKEN_TEXT[close])

        while not self._at(close):
            self._note(TOKEN_TEXT[close])
            items.append(parse_item())
            if self._at(TokenKind.COMMA):
                self._advance()
            elif not self._at(close):
                self._fail(TOKEN_TEXT[TokenKind.COMMA], TOKEN_TEXT[close])

        self._advance()  # close
        return items

    # ── Values ───────────────────────────────────────────────────

    def _parse_value(self) -> Value:
        self._enter()
        try:
            for alternative in self._value_alternatives:
                value = self._attempt(alternative)
                if value is not None:
                    return value
            raise _NoMatch
        finally:
            self._leave()

    def _parse_unit(self) -> UnitLit:
        start = self._expect(TokenKind.LPAREN)
        self._expect(TokenKind.RPAREN)
        return UnitLit(self._span_from(start))

    def _parse_bool(self) -> BoolLit:
        tok = self._current()
        if tok.kind == TokenKind.IDENTIFIER and tok.value in BOOL_KEYWORDS:
            self._advance()
            return BoolLit(BOOL_KEYWORDS[tok.value], tok.span)
        self._fail("'true'", "'false'")

    def _parse_option(self) -> OptionLit:
        tok = self._current()
        if tok.kind == TokenKind.IDENTIFIER and tok.value == NONE_KEYWORD:
            self._advance()
            return OptionLit(None, tok.span)
        if tok.kind == TokenKind.IDENTIFIER and tok.value == SOME_KEYWORD:
            self._advance()
            self._expect(TokenKind.LPAREN)
            inner = self._parse_value()
            self._expect(TokenKind.RPAREN)
            return OptionLit(inner, self._span_from(tok))
        self._fail(f"'{SOME_KEYWORD}'", f"'{NONE_KEYWORD}'")

    def _parse_value_type_name(self) -> TypeIdentifier:
        """A type identifier in value position; keywords never qualify."""
        type_name = self._parse_type_identifier()
        if len(type_name.segments) == 1 and type_name.name in self._reserved_names:
            raise _NoMatch
        return type_name

    def _parse_struct(self) -> TupleStructLit | NamedStructLit:
        start = self._current()
        type_name = self._parse_value_type_name()
        self._expect(TokenKind.LPAREN)

        if self._at(TokenKind.IDENTIFIER) and self._peek(1).kind == TokenKind.COLON:
            seen: set[str] = set()

            def parse_field() -> StructField:
                name_tok = self._expect(TokenKind.IDENTIFIER)
                self._expect(TokenKind.COLON)
                if name_tok.value in seen:
                    raise InvalidSyntaxError(
                        f"duplicate field {name_tok.value!r} in {type_name}",
                        name_tok.span,
                        found=name_tok.describe(),
                    )
                seen.add(name_tok.value)
                return StructField(name_tok.value, self._parse_value())

            fields = self._parse_delimited(TokenKind.RPAREN, parse_field)
            return NamedStructLit(type_name, tuple(fields), self._span_from(start))

        items = self._parse_delimited(TokenKind.RPAREN, self._parse_value)
        return TupleStructLit(type_name, tuple(items), self._span_from(start))

    def _parse_bare_type(self) -> BareTypeLit:
        start = self._current()
        type_name = self._parse_value_type_name()
        return BareTypeLit(type_name, self._span_from(start))

    def _parse_tuple(self) -> TupleLit:
        start = self._expect(TokenKind.LPAREN)
        items = self._parse_delimited(TokenKind.RPAREN, self._parse_value, allow_empty=False)
        return TupleLit(tuple(items), self._span_from(start))

    def _parse_collection(self) -> ListLit | MapLit:
        start = self._current()
        if start.kind == TokenKind.LBRACKET:
            self._advance()
            items = self._parse_delimited(TokenKind.RBRACKET, self._parse_value)
            return ListLit(tuple(items), self._span_from(start))
        if start.kind == TokenKind.LBRACE:
            self._advance()
            entries = self._parse_delimited(TokenKind.RBRACE, self._parse_map_entry)
            return MapLit(tuple(entries), self._span_from(start))
        self._fail(TOKEN_TEXT[TokenKind.LBRACKET], TOKEN_TEXT[TokenKind.LBRACE])

    def _parse_map_entry(self) -> MapEntry:
        key = self._parse_value()
        self._expect(TokenKind.COLON)
        return MapEntry(key, self._parse_value())

    def _parse_string(self) -> StringLit | RawStringLit:
        tok = self._current()
        if tok.kind == TokenKind.STRING:
            self._advance()
            return StringLit(tok.value, tok.span)
        if tok.kind == TokenKind.RAW_STRING:
            self._advance()
            return RawStringLit(tok.value, tok.span)
        self._fail(TOKEN_TEXT[TokenKind.STRING], TOKEN_TEXT[TokenKind.RAW_STRING])

    def _parse_char(self) -> CharLit:
        tok = self._expect(TokenKind.CHAR)
        return CharLit(tok.value, tok.span)

    def _parse_number(self) -> NumberLit:
        tok = self._expect(TokenKind.NUMBER)
        return NumberLit(tok.value, tok.span)

    # ── Type expressions ─────────────────────────────────────────

    def _parse_type_identifier(self) -> TypeIdentifier:
        start = self._current()
        segments = [self._parse_generic_identifier()]
        while self._at(TokenKind.COLON_COLON):
            self._advance()
            segments.append(self._parse_generic_identifier())
        return TypeIdentifier(tuple(segments), self._span_from(start))

    def _parse_generic_identifier(self) -> GenericIdentifier:
        name_tok = self._expect(TokenKind.IDENTIFIER)
        if not self._at(TokenKind.LESS):
            return GenericIdentifier(name_tok.value, (), name_tok.span)
        self._advance()  # <
        # At least one argument once the brackets are written
        args = self._parse_delimited(TokenKind.GREATER, self._parse_generic_type, allow_empty=False)
        return GenericIdentifier(name_tok.value, tuple(args), self._span_from(name_tok))

    def _parse_generic_type(self) -> GenericType:
        self._enter()
        try:
            tok = self._current()
            if tok.kind == TokenKind.IDENTIFIER:
                return self._parse_type_identifier()
            if tok.kind == TokenKind.LBRACKET:
                return self._parse_array_type()
            if tok.kind == TokenKind.LPAREN and self.options.dialect == Dialect.EXTENDED:
                return self._parse_tuple_type()
            expected = [TOKEN_TEXT[TokenKind.IDENTIFIER], TOKEN_TEXT[TokenKind.LBRACKET]]
            if self.options.dialect == Dialect.EXTENDED:
                expected.append(TOKEN_TEXT[TokenKind.LPAREN])
            self._fail(*expected)
        finally:
            self._leave()

    def _parse_array_type(self) -> ArrayType:
        start = self._expect(TokenKind.LBRACKET)
        element = self._parse_generic_type()
        self._expect(TokenKind.SEMICOLON)
        size_tok = self._current()
        if size_tok.kind != TokenKind.NUMBER or not _ARRAY_SIZE_RE.fullmatch(size_tok.value):
            self._fail("array size (non-negative integer)")
        self._advance()
        self._expect(TokenKind.RBRACKET)
        return ArrayType(element, int(size_tok.value), self._span_from(start))

    def _parse_tuple_type(self) -> TupleType:
        start = self._expect(TokenKind.LPAREN)
        elements = self._parse_delimited(TokenKind.RPAREN, self._parse_generic_type)
        return TupleType(tuple(elements), self._span_from(start))


class _NoMatch(Exception):
    """Internal signal that the alternative being tried does not match."""


# ── Convenience entry points ─────────────────────────────────────


def _parser_for(text: str, options: ParserOptions | None) -> Parser:
    options = options or ParserOptions()
    tokens = Lexer(text, strict_numbers=options.strict_numbers).lex()
    return Parser(tokens, options)


def parse_value(text: str, options: ParserOptions | None = None) -> Value:
    """Parse text holding exactly one value."""
    return _parser_for(text, options).parse_value()


def parse_type_identifier(text: str, options: ParserOptions | None = None) -> TypeIdentifier:
    """Parse text holding exactly one scoped type identifier, e.g. ``std::Vec<u8>``."""
    return _parser_for(text, options).parse_type_identifier()


def parse_type(text: str, options: ParserOptions | None = None) -> GenericType:
    """Parse text holding exactly one type expression, e.g. ``[(u8, char); 4]``."""
    return _parser_for(text, options).parse_type()
