"""Tests for the Pygments lexer."""

from __future__ import annotations

from pygments.token import Comment, Keyword, Name, Number, Punctuation, String

from pygments_typed_format import TypedFormatLexer


def tokens(source: str) -> list[tuple]:
    """Helper: token stream without whitespace."""
    return [
        (tok, text)
        for tok, text in TypedFormatLexer().get_tokens(source)
        if text.strip()
    ]


class TestTypedFormatLexer:
    def test_metadata(self):
        assert TypedFormatLexer.name == "TypedFormat"
        assert "tyf" in TypedFormatLexer.aliases
        assert "*.tyf" in TypedFormatLexer.filenames

    def test_struct(self):
        result = tokens("Point(x: 1, y: -2.5)")
        assert (Name.Class, "Point") in result
        assert (Name.Attribute, "x") in result
        assert (Number.Integer, "1") in result
        assert (Number.Float, "-2.5") in result
        assert (Punctuation, "(") in result

    def test_keywords(self):
        result = tokens("[true, Some(None)]")
        assert (Keyword.Constant, "true") in result
        assert (Keyword.Pseudo, "Some") in result
        assert (Keyword.Pseudo, "None") in result

    def test_comments(self):
        result = tokens("// line\n/* block */ 1")
        assert (Comment.Single, "// line") in result
        assert (Comment.Multiline, "/* block */") in result

    def test_raw_string(self):
        result = tokens('r#"a "quoted" b"#')
        assert result == [(String.Regex, 'r#"a "quoted" b"#')]

    def test_string_escape(self):
        result = tokens(r'"a\nb"')
        assert (String.Escape, r"\n") in result

    def test_char(self):
        assert tokens("'x'") == [(String.Char, "'x'")]

    def test_path_is_not_a_field(self):
        result = tokens("Color::Red")
        assert (Name.Class, "Color") in result
        assert (Name.Class, "Red") in result
