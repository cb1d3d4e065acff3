"""Lexer for the typed_format value notation.

Produces a list of tokens from source text. Whitespace and comments are
dropped; string, raw string and char literals are delivered with their
escapes already resolved. A character outside the notation becomes an
UNKNOWN token so that the parser can report it in context.
"""

from __future__ import annotations

import string

from typed_format.errors import LexError, Suggestion, UnmatchedRawStringDelimiter
from typed_format.source import Span
from typed_format.tokens import PUNCTUATION, Token, TokenKind

_DIGITS = frozenset(string.digits)
_HEX_DIGITS = frozenset(string.hexdigits)
_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CONTINUE = _IDENT_START | _DIGITS
_WHITESPACE = frozenset(" \t\r\n")

_COMMON_ESCAPES = {"\\": "\\", "n": "\n", "r": "\r", "t": "\t", "0": "\0"}
_STRING_ESCAPES = {**_COMMON_ESCAPES, '"': '"'}
_CHAR_ESCAPES = {**_COMMON_ESCAPES, "'": "'"}


class Lexer:
    """Tokenizes typed_format source text."""

    def __init__(self, source: str, *, strict_numbers: bool = False) -> None:
        self.source = source
        self.strict_numbers = strict_numbers
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: list[Token] = []

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        while True:
            self._skip_trivia()
            if self.pos >= len(self.source):
                break
            ch = self.source[self.pos]
            if ch == '"':
                self._lex_string()
            elif ch == "'":
                self._lex_char()
            elif ch == "r" and self._raw_string_hashes() is not None:
                self._lex_raw_string()
            elif ch == "-" or ch in _DIGITS:
                self._lex_number()
            elif ch in _IDENT_START:
                self._lex_identifier()
            else:
                self._lex_punct()

        self._emit(TokenKind.EOF, "", self.pos, self.line, self.col)
        return self.tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return "\0"

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _emit(self, kind: TokenKind, value: str, start: int, line: int, col: int) -> Token:
        tok = Token(kind, value, Span(start, self.pos, line, col))
        self.tokens.append(tok)
        return tok

    def _error(
        self,
        message: str,
        start: int,
        line: int,
        col: int,
        *,
        rule: str,
        error_cls: type[LexError] = LexError,
        suggestion: Suggestion | None = None,
    ) -> LexError:
        end = max(self.pos, start + 1)
        if start < len(self.source):
            found = self.source[start:end]
            if len(found) > 24:
                found = found[:24] + "..."
            found = repr(found)
        else:
            found = "end of input"
        return error_cls(
            message,
            Span(start, end, line, col),
            rule=rule,
            found=found,
            suggestion=suggestion,
        )

    # ── Whitespace and comments ──────────────────────────────────

    def _skip_trivia(self) -> None:
        while not self._at_end():
            ch = self.source[self.pos]
            if ch in _WHITESPACE:
                self._advance()
            elif ch == "/" and self._peek(1) == "/":
                while not self._at_end() and self.source[self.pos] != "\n":
                    self._advance()
            elif ch == "/" and self._peek(1) == "*":
                self._skip_block_comment()
            else:
                return

    def _skip_block_comment(self) -> None:
        start, line, col = self.pos, self.line, self.col
        close = self.source.find("*/", self.pos + 2)
        if close < 0:
            self.pos = start + 2
            raise self._error("unterminated block comment", start, line, col, rule="block comment")
        # Block comments do not nest
        while self.pos < close + 2:
            self._advance()

    # ── Strings and chars ────────────────────────────────────────

    def _lex_string(self) -> None:
        start, line, col = self.pos, self.line, self.col
        self._advance()  # skip opening "
        text: list[str] = []
        while not self._at_end() and self.source[self.pos] != '"':
            if self.source[self.pos] == "\\":
                text.append(self._lex_escape_sequence(_STRING_ESCAPES, "string"))
            else:
                text.append(self._advance())

        if self._at_end():
            raise self._error("unterminated string literal", start, line, col, rule="string")

        self._advance()  # skip closing "
        self._emit(TokenKind.STRING, "".join(text), start, line, col)

    def _lex_escape_sequence(self, escapes: dict[str, str], rule: str) -> str:
        start, line, col = self.pos, self.line, self.col
        self._advance()  # skip backslash
        if self._at_end():
            raise self._error("unexpected end of escape sequence", start, line, col, rule=rule)
        ch = self._advance()
        if ch in escapes:
            return escapes[ch]
        if ch == "u":
            return self._lex_unicode_escape(start, line, col, rule)
        raise self._error(f"unknown escape sequence: \\{ch}", start, line, col, rule=rule)

    def _lex_unicode_escape(self, start: int, line: int, col: int, rule: str) -> str:
        digits = self.source[self.pos : self.pos + 4]
        if len(digits) != 4 or not all(d in _HEX_DIGITS for d in digits):
            raise self._error(
                "\\u escape needs exactly four hex digits", start, line, col, rule=rule,
            )
        for _ in range(4):
            self._advance()
        codepoint = int(digits, 16)
        if 0xD800 <= codepoint <= 0xDFFF:
            raise self._error(
                f"\\u{digits} is a surrogate, not a Unicode scalar value",
                start, line, col, rule=rule,
            )
        return chr(codepoint)

    def _lex_char(self) -> None:
        start, line, col = self.pos, self.line, self.col
        self._advance()  # skip opening '
        if self._at_end():
            raise self._error("unterminated character literal", start, line, col, rule="char")
        if self.source[self.pos] == "'":
            self._advance()
            raise self._error("empty character literal", start, line, col, rule="char")
        if self.source[self.pos] == "\\":
            ch = self._lex_escape_sequence(_CHAR_ESCAPES, "char")
        else:
            ch = self._advance()
        if self._at_end():
            raise self._error("unterminated character literal", start, line, col, rule="char")
        if self.source[self.pos] != "'":
            raise self._error(
                "character literal must contain exactly one character",
                start, line, col, rule="char",
            )
        self._advance()  # skip closing '
        self._emit(TokenKind.CHAR, ch, start, line, col)

    # ── Raw strings ──────────────────────────────────────────────

    def _raw_string_hashes(self) -> int | None:
        """Count the '#' marks of a raw string starting at 'r', if one starts here."""
        i = self.pos + 1
        while i < len(self.source) and self.source[i] == "#":
            i += 1
        if i < len(self.source) and self.source[i] == '"':
            return i - self.pos - 1
        if i > self.pos + 1:
            line, col = self.line, self.col
            start = self.pos
            self.pos = i
            raise self._error(
                "expected '\"' after raw string delimiter", start, line, col, rule="raw string",
            )
        return None

    def _lex_raw_string(self) -> None:
        start, line, col = self.pos, self.line, self.col
        hashes = self._raw_string_hashes() or 0
        for _ in range(hashes + 2):
            self._advance()  # r, #..., "

        closing = '"' + "#" * hashes
        close = self.source.find(closing, self.pos)
        if close < 0:
            self.pos = len(self.source)
            raise self._error(
                f"raw string is not closed by {closing!r}",
                start, line, col,
                rule="raw string",
                error_cls=UnmatchedRawStringDelimiter,
                suggestion=Suggestion("close the raw string", closing),
            )

        content = self.source[self.pos : close]
        while self.pos < close + len(closing):
            self._advance()
        if self._peek() == "#":
            extra = 0
            while self._peek() == "#":
                self._advance()
                extra += 1
            raise self._error(
                f"raw string opened with {hashes} '#' but closed with {hashes + extra}",
                start, line, col,
                rule="raw string",
                error_cls=UnmatchedRawStringDelimiter,
                suggestion=Suggestion("close with the opening number of '#' marks", closing),
            )
        self._emit(TokenKind.RAW_STRING, content, start, line, col)

    # ── Numbers ──────────────────────────────────────────────────

    def _scan_digits(self) -> str:
        begin = self.pos
        while not self._at_end() and self.source[self.pos] in _DIGITS:
            self._advance()
        return self.source[begin : self.pos]

    def _lex_number(self) -> None:
        start, line, col = self.pos, self.line, self.col
        sign = ""
        if self.source[self.pos] == "-":
            sign = self._advance()
            if self._peek() not in _DIGITS:
                raise self._error("expected digits after '-'", start, line, col, rule="number")

        integer = self._scan_digits()
        if len(integer) > 1 and integer[0] == "0":
            raise self._error(
                "leading zeros are not allowed in numbers",
                start, line, col,
                rule="number",
                suggestion=Suggestion("drop the leading zeros", sign + (integer.lstrip("0") or "0")),
            )

        if self._peek() == ".":
            self._advance()
            fraction = self._scan_digits()
            if not fraction and self.strict_numbers:
                raise self._error(
                    "expected digits after decimal point", start, line, col, rule="number",
                )

        # The exponent belongs to the number only if digits follow the marker
        if self._peek() in ("e", "E"):
            digits_at = 2 if self._peek(1) in ("+", "-") else 1
            if self._peek(digits_at) in _DIGITS:
                for _ in range(digits_at):
                    self._advance()
                self._scan_digits()

        self._emit(TokenKind.NUMBER, self.source[start : self.pos], start, line, col)

    # ── Identifiers and punctuation ──────────────────────────────

    def _lex_identifier(self) -> None:
        start, line, col = self.pos, self.line, self.col
        while not self._at_end() and self.source[self.pos] in _IDENT_CONTINUE:
            self._advance()
        self._emit(TokenKind.IDENTIFIER, self.source[start : self.pos], start, line, col)

    def _lex_punct(self) -> None:
        start, line, col = self.pos, self.line, self.col
        ch = self.source[self.pos]

        if ch == ":" and self._peek(1) == ":":
            self._advance()
            self._advance()
            self._emit(TokenKind.COLON_COLON, "::", start, line, col)
            return

        self._advance()
        self._emit(PUNCTUATION.get(ch, TokenKind.UNKNOWN), ch, start, line, col)
