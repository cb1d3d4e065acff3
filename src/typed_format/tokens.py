"""Token kinds and token representation for the typed_format lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typed_format.source import Span


class TokenKind(Enum):
    # Literals
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()
    RAW_STRING = auto()
    CHAR = auto()

    # Delimiters
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LBRACE = auto()
    RBRACE = auto()
    LESS = auto()
    GREATER = auto()

    # Punctuation
    COMMA = auto()
    COLON = auto()
    COLON_COLON = auto()
    SEMICOLON = auto()

    # Special
    UNKNOWN = auto()  # stray character, rejected by the parser
    EOF = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    span: Span

    def describe(self) -> str:
        """Short human-readable form used in error messages."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        if self.kind in (TokenKind.STRING, TokenKind.RAW_STRING):
            return "string literal"
        if self.kind == TokenKind.CHAR:
            return "char literal"
        return repr(self.value)


# Identifiers with a fixed meaning in value position. They stay IDENTIFIER
# tokens so that type paths such as `Some::Thing` still lex normally.
BOOL_KEYWORDS: dict[str, bool] = {
    "true": True,
    "false": False,
}

SOME_KEYWORD = "Some"
NONE_KEYWORD = "None"

PUNCTUATION: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "<": TokenKind.LESS,
    ">": TokenKind.GREATER,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
}

# Display form of each token kind for "expected ..." messages.
TOKEN_TEXT: dict[TokenKind, str] = {
    **{kind: f"'{text}'" for text, kind in PUNCTUATION.items()},
    TokenKind.COLON_COLON: "'::'",
    TokenKind.IDENTIFIER: "identifier",
    TokenKind.NUMBER: "number",
    TokenKind.STRING: "string",
    TokenKind.RAW_STRING: "raw string",
    TokenKind.CHAR: "char",
    TokenKind.EOF: "end of input",
}
