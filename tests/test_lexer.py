"""Tests for the typed_format lexer."""

from __future__ import annotations

import pytest

from typed_format.errors import LexError, UnmatchedRawStringDelimiter
from typed_format.lexer import Lexer
from typed_format.tokens import TokenKind


def lex(source: str) -> list[tuple[TokenKind, str]]:
    """Helper: lex source and return (kind, value) pairs, excluding EOF."""
    tokens = Lexer(source).lex()
    return [(t.kind, t.value) for t in tokens if t.kind != TokenKind.EOF]


def kinds(source: str) -> list[TokenKind]:
    """Helper: lex source and return just the token kinds, excluding EOF."""
    tokens = Lexer(source).lex()
    return [t.kind for t in tokens if t.kind != TokenKind.EOF]


class TestLexerBasic:
    def test_empty_source(self):
        tokens = Lexer("").lex()
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF

    def test_identifier(self):
        assert lex("hello") == [(TokenKind.IDENTIFIER, "hello")]

    def test_underscore_identifier(self):
        assert lex("_") == [(TokenKind.IDENTIFIER, "_")]

    def test_identifier_with_digits(self):
        assert lex("u8") == [(TokenKind.IDENTIFIER, "u8")]

    def test_keywords_are_identifiers(self):
        for kw in ["true", "false", "Some", "None"]:
            assert lex(kw) == [(TokenKind.IDENTIFIER, kw)]

    def test_identifier_starting_with_r(self):
        assert lex("rust") == [(TokenKind.IDENTIFIER, "rust")]
        assert lex("r") == [(TokenKind.IDENTIFIER, "r")]

    def test_punctuation(self):
        assert kinds("()[]{}<>,:;") == [
            TokenKind.LPAREN, TokenKind.RPAREN,
            TokenKind.LBRACKET, TokenKind.RBRACKET,
            TokenKind.LBRACE, TokenKind.RBRACE,
            TokenKind.LESS, TokenKind.GREATER,
            TokenKind.COMMA, TokenKind.COLON, TokenKind.SEMICOLON,
        ]

    def test_path_separator(self):
        assert kinds("a::b") == [
            TokenKind.IDENTIFIER, TokenKind.COLON_COLON, TokenKind.IDENTIFIER,
        ]

    def test_nested_generic_closers_are_separate(self):
        assert kinds(">>") == [TokenKind.GREATER, TokenKind.GREATER]

    def test_unknown_character(self):
        tokens = Lexer("[1, @]").lex()
        stray = tokens[3]
        assert stray.kind == TokenKind.UNKNOWN
        assert stray.value == "@"
        assert stray.span.column == 5


class TestLexerTrivia:
    def test_whitespace_skipped(self):
        assert lex(" \t\r\n 1 \n") == [(TokenKind.NUMBER, "1")]

    def test_line_comment(self):
        assert lex("1 // one\n2") == [(TokenKind.NUMBER, "1"), (TokenKind.NUMBER, "2")]

    def test_block_comment(self):
        assert lex("1 /* one\n two */ 2") == [
            (TokenKind.NUMBER, "1"), (TokenKind.NUMBER, "2"),
        ]

    def test_block_comments_do_not_nest(self):
        # The first */ closes the comment, leaving a stray '*'
        assert lex("/* a /* b */ c */") == [
            (TokenKind.IDENTIFIER, "c"),
            (TokenKind.UNKNOWN, "*"),
            (TokenKind.UNKNOWN, "/"),
        ]

    def test_unterminated_block_comment(self):
        with pytest.raises(LexError) as exc_info:
            Lexer("1 /* never closed").lex()
        assert exc_info.value.rule == "block comment"
        assert exc_info.value.column == 3

    def test_positions_track_lines(self):
        tokens = Lexer("[\n  1,\n  22\n]").lex()
        number = [t for t in tokens if t.kind == TokenKind.NUMBER][1]
        assert number.span.line == 3
        assert number.span.column == 3
        assert number.span.start == 9
        assert number.span.end == 11


class TestLexerNumbers:
    def test_integer(self):
        assert lex("42") == [(TokenKind.NUMBER, "42")]

    def test_zero(self):
        assert lex("0") == [(TokenKind.NUMBER, "0")]

    def test_negative(self):
        assert lex("-7") == [(TokenKind.NUMBER, "-7")]

    def test_decimal(self):
        assert lex("3.25") == [(TokenKind.NUMBER, "3.25")]

    def test_exponent(self):
        assert lex("1e10") == [(TokenKind.NUMBER, "1e10")]
        assert lex("-2.5E-3") == [(TokenKind.NUMBER, "-2.5E-3")]

    def test_trailing_dot_allowed_by_default(self):
        assert lex("1.") == [(TokenKind.NUMBER, "1.")]

    def test_trailing_dot_rejected_when_strict(self):
        with pytest.raises(LexError):
            Lexer("1.", strict_numbers=True).lex()

    def test_exponent_without_digits_is_not_consumed(self):
        assert lex("1e") == [(TokenKind.NUMBER, "1"), (TokenKind.IDENTIFIER, "e")]

    def test_leading_zero_rejected(self):
        with pytest.raises(LexError) as exc_info:
            Lexer("007").lex()
        err = exc_info.value
        assert err.rule == "number"
        assert err.suggestion is not None
        assert err.suggestion.replacement == "7"

    def test_lone_minus_rejected(self):
        with pytest.raises(LexError):
            Lexer("- 1").lex()


class TestLexerStrings:
    def test_simple_string(self):
        assert lex('"hello"') == [(TokenKind.STRING, "hello")]

    def test_empty_string(self):
        assert lex('""') == [(TokenKind.STRING, "")]

    def test_escapes(self):
        assert lex(r'"a\nb\tc\\d\"e\0\r"') == [(TokenKind.STRING, 'a\nb\tc\\d"e\0\r')]

    def test_unicode_escape(self):
        assert lex(r'"\u00e9"') == [(TokenKind.STRING, "é")]

    def test_unicode_escape_needs_four_digits(self):
        with pytest.raises(LexError):
            Lexer(r'"\u12"').lex()

    def test_surrogate_escape_rejected(self):
        with pytest.raises(LexError):
            Lexer(r'"\ud800"').lex()

    def test_unknown_escape(self):
        with pytest.raises(LexError) as exc_info:
            Lexer(r'"\q"').lex()
        assert exc_info.value.rule == "string"

    def test_multiline_string(self):
        assert lex('"a\nb"') == [(TokenKind.STRING, "a\nb")]

    def test_unterminated_string(self):
        with pytest.raises(LexError) as exc_info:
            Lexer('"never closed').lex()
        assert exc_info.value.column == 1
        assert exc_info.value.rule == "string"


class TestLexerRawStrings:
    def test_raw_string(self):
        assert lex(r'r"C:\path"') == [(TokenKind.RAW_STRING, "C:\\path")]

    def test_raw_string_with_hashes(self):
        assert lex('r#"say "hi""#') == [(TokenKind.RAW_STRING, 'say "hi"')]

    def test_raw_string_closes_on_first_match(self):
        assert lex('r##"a"#b"## 1') == [
            (TokenKind.RAW_STRING, 'a"#b'), (TokenKind.NUMBER, "1"),
        ]

    def test_unmatched_delimiter(self):
        with pytest.raises(UnmatchedRawStringDelimiter) as exc_info:
            Lexer('r##"open"#').lex()
        err = exc_info.value
        assert err.suggestion is not None
        assert err.suggestion.replacement == '"##'

    def test_too_many_closing_hashes(self):
        with pytest.raises(UnmatchedRawStringDelimiter) as exc_info:
            Lexer('r#"x"##').lex()
        err = exc_info.value
        assert "opened with 1" in err.message
        assert "closed with 2" in err.message
        assert err.suggestion.replacement == '"#'

    def test_closing_hash_on_plain_raw_string(self):
        with pytest.raises(UnmatchedRawStringDelimiter):
            Lexer('r"x"#').lex()

    def test_unmatched_delimiter_is_lex_error(self):
        assert issubclass(UnmatchedRawStringDelimiter, LexError)

    def test_hashes_without_quote(self):
        with pytest.raises(LexError):
            Lexer("r#x").lex()


class TestLexerChars:
    def test_char(self):
        assert lex("'a'") == [(TokenKind.CHAR, "a")]

    def test_non_ascii_char(self):
        assert lex("'λ'") == [(TokenKind.CHAR, "λ")]

    def test_escaped_quote(self):
        assert lex(r"'\''") == [(TokenKind.CHAR, "'")]

    def test_escaped_newline(self):
        assert lex(r"'\n'") == [(TokenKind.CHAR, "\n")]

    def test_unicode_char(self):
        assert lex(r"'\u0041'") == [(TokenKind.CHAR, "A")]

    def test_empty_char(self):
        with pytest.raises(LexError):
            Lexer("''").lex()

    def test_two_chars(self):
        with pytest.raises(LexError) as exc_info:
            Lexer("'ab'").lex()
        assert exc_info.value.rule == "char"

    def test_unterminated_char(self):
        with pytest.raises(LexError):
            Lexer("'a").lex()
