"""typed_format: a parser for a Rust-flavoured typed literal notation."""

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
from typed_format.config import (
    Dialect,
    FormatOptions,
    ParserOptions,
    TypedFormatConfig,
    find_config,
    load_config,
)
from typed_format.errors import (
    DiagnosticRenderer,
    InvalidSyntaxError,
    LexError,
    ParseError,
    RecursionLimitExceeded,
    TrailingInputError,
    UnmatchedRawStringDelimiter,
)
from typed_format.formatter import ValueFormatter, format_type, format_value
from typed_format.lexer import Lexer
from typed_format.parser import Parser, parse_type, parse_type_identifier, parse_value
from typed_format.source import SourceText, Span

__version__ = "0.1.0"

__all__ = [
    "ArrayType",
    "BareTypeLit",
    "BoolLit",
    "CharLit",
    "DiagnosticRenderer",
    "Dialect",
    "FormatOptions",
    "GenericIdentifier",
    "GenericType",
    "InvalidSyntaxError",
    "LexError",
    "Lexer",
    "ListLit",
    "MapEntry",
    "MapLit",
    "NamedStructLit",
    "NumberLit",
    "OptionLit",
    "ParseError",
    "Parser",
    "ParserOptions",
    "RawStringLit",
    "RecursionLimitExceeded",
    "SourceText",
    "Span",
    "StringLit",
    "StructField",
    "TrailingInputError",
    "TupleLit",
    "TupleStructLit",
    "TupleType",
    "TypeIdentifier",
    "TypedFormatConfig",
    "UnitLit",
    "UnmatchedRawStringDelimiter",
    "Value",
    "ValueFormatter",
    "find_config",
    "format_type",
    "format_value",
    "load_config",
    "parse_type",
    "parse_type_identifier",
    "parse_value",
]
