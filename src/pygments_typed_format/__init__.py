"""Pygments lexer for typed_format (.tyf) value files."""

from pygments.lexer import RegexLexer, words
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
)


class TypedFormatLexer(RegexLexer):
    """Pygments lexer for typed_format values and type expressions."""

    name = "TypedFormat"
    aliases = ["typed-format", "tyf"]
    filenames = ["*.tyf"]
    mimetypes = ["text/x-typed-format"]

    tokens = {
        "root": [
            # Whitespace
            (r"\s+", Text),
            # Line comments (// ...)
            (r"//.*$", Comment.Single),
            # Block comments (do not nest)
            (r"/\*[\s\S]*?\*/", Comment.Multiline),
            # Raw strings close on '"' followed by the opening number of '#'
            (r'r(#*)"[\s\S]*?"\1', String.Regex),
            # Regular strings with escape support
            (r'"', String, "string"),
            # Char literals
            (r"'(\\u[0-9a-fA-F]{4}|\\[nrt\\'0]|[^'\\])'", String.Char),
            # Numbers
            (r"-?(0|[1-9][0-9]*)(\.[0-9]*)?[eE][+-]?[0-9]+", Number.Float),
            (r"-?(0|[1-9][0-9]*)\.[0-9]*", Number.Float),
            (r"-?(0|[1-9][0-9]*)", Number.Integer),
            # Boolean constants
            (r"\b(true|false)\b", Keyword.Constant),
            # Option constructors
            (words(("Some", "None"), prefix=r"\b", suffix=r"\b"), Keyword.Pseudo),
            # Path separator
            (r"::", Operator),
            # Field names (word followed by a single colon)
            (r"[a-z_][A-Za-z0-9_]*(?=\s*:(?!:))", Name.Attribute),
            # Type names (PascalCase)
            (r"[A-Z][A-Za-z0-9_]*", Name.Class),
            # Identifiers
            (r"[A-Za-z_][A-Za-z0-9_]*", Name),
            # Punctuation
            (r"[(),;:\[\]{}<>]", Punctuation),
        ],
        # String state, handles escape sequences
        "string": [
            (r"\\u[0-9a-fA-F]{4}", String.Escape),
            (r'\\[nrt\\"0]', String.Escape),
            (r'[^"\\]+', String),
            (r'"', String, "#pop"),
        ],
    }
