"""Shared test helpers for the typed_format test suite."""

from __future__ import annotations

import pytest

from typed_format.ast_nodes import (
    BareTypeLit,
    GenericIdentifier,
    NumberLit,
    StringLit,
    TypeIdentifier,
    Value,
)
from typed_format.config import ParserOptions
from typed_format.errors import ParseError
from typed_format.lexer import Lexer
from typed_format.parser import Parser


def parse(source: str, options: ParserOptions | None = None) -> Value:
    """Lex and parse source as a single value."""
    options = options or ParserOptions()
    tokens = Lexer(source, strict_numbers=options.strict_numbers).lex()
    return Parser(tokens, options).parse_value()


def parse_fails(
    source: str,
    error_cls: type[ParseError],
    options: ParserOptions | None = None,
) -> ParseError:
    """Parse source, asserting it raises exactly ``error_cls``."""
    with pytest.raises(ParseError) as exc_info:
        parse(source, options)
    err = exc_info.value
    assert type(err) is error_cls, f"Expected {error_cls.__name__} but got {type(err).__name__}: {err}"
    return err


def num(text: str) -> NumberLit:
    return NumberLit(text)


def s(text: str) -> StringLit:
    return StringLit(text)


def ty(*names: str) -> TypeIdentifier:
    """Plain type path without generic arguments."""
    return TypeIdentifier.of(*names)


def generic(name: str, *args) -> TypeIdentifier:
    """Single-segment type path with generic arguments."""
    return TypeIdentifier((GenericIdentifier(name, tuple(args)),))


def bare(*names: str) -> BareTypeLit:
    return BareTypeLit(ty(*names))
