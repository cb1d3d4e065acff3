"""AST-walking writer that turns values back into canonical source text.

Pretty output puts every element of a non-empty composite on its own line,
each followed by a comma. Compact output drops all optional whitespace and
trailing commas. Either form parses back to an equal value.

Comments are not part of the AST and are therefore never reproduced.
"""

from __future__ import annotations

from typed_format.ast_nodes import (
    BareTypeLit,
    BoolLit,
    CharLit,
    GenericType,
    ListLit,
    MapLit,
    NamedStructLit,
    NumberLit,
    OptionLit,
    RawStringLit,
    StringLit,
    TupleLit,
    TupleStructLit,
    UnitLit,
    Value,
)
from typed_format.config import FormatOptions

_COMMON_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def _escape(text: str, quote: str) -> str:
    out: list[str] = []
    for ch in text:
        if ch in _COMMON_ESCAPES:
            out.append(_COMMON_ESCAPES[ch])
        elif ch == quote:
            out.append("\\" + ch)
        else:
            out.append(ch)
    return "".join(out)


def _raw_string(text: str) -> str:
    # Fewest '#' marks whose closing sequence does not occur in the content
    hashes = 0
    while '"' + "#" * hashes in text:
        hashes += 1
    marks = "#" * hashes
    return f'r{marks}"{text}"{marks}'


class ValueFormatter:
    """Format a parsed value back to canonical source text."""

    def __init__(self, *, pretty: bool = True, indent: int = 4) -> None:
        self.pretty = pretty
        self.indent = indent

    @classmethod
    def from_options(cls, options: FormatOptions) -> ValueFormatter:
        return cls(pretty=options.pretty, indent=options.indent)

    # ── Public API ─────────────────────────────────────────────

    def format(self, value: Value) -> str:
        """Format a value to source text (without a trailing newline)."""
        return self._format_value(value, 0)

    def format_type(self, type_expr: GenericType) -> str:
        return str(type_expr)

    # ── Value dispatch ─────────────────────────────────────────

    def _format_value(self, value: Value, level: int) -> str:
        if isinstance(value, UnitLit):
            return "()"
        if isinstance(value, BoolLit):
            return "true" if value.value else "false"
        if isinstance(value, NumberLit):
            return value.text
        if isinstance(value, StringLit):
            return f'"{_escape(value.value, chr(34))}"'
        if isinstance(value, RawStringLit):
            return _raw_string(value.value)
        if isinstance(value, CharLit):
            return f"'{_escape(value.value, chr(39))}'"
        if isinstance(value, BareTypeLit):
            return str(value.type_name)
        if isinstance(value, OptionLit):
            return self._format_option(value, level)
        if isinstance(value, ListLit):
            return self._block("[", self._format_items(value.items, level), "]", level)
        if isinstance(value, TupleLit):
            return self._block("(", self._format_items(value.items, level), ")", level)
        if isinstance(value, MapLit):
            entries = [
                f"{self._format_value(e.key, level + 1)}{self._colon()}"
                f"{self._format_value(e.value, level + 1)}"
                for e in value.entries
            ]
            return self._block("{", entries, "}", level)
        if isinstance(value, TupleStructLit):
            items = self._format_items(value.items, level)
            return self._block(f"{value.type_name}(", items, ")", level)
        if isinstance(value, NamedStructLit):
            fields = [
                f"{f.name}{self._colon()}{self._format_value(f.value, level + 1)}"
                for f in value.fields
            ]
            return self._block(f"{value.type_name}(", fields, ")", level)
        raise TypeError(f"cannot format {type(value).__name__}")

    def _format_option(self, value: OptionLit, level: int) -> str:
        if value.value is None:
            return "None"
        inner = self._format_value(value.value, level + 1)
        if not self.pretty:
            return f"Some({inner})"
        return f"Some(\n{self._pad(level + 1)}{inner}\n{self._pad(level)})"

    # ── Helpers ────────────────────────────────────────────────

    def _format_items(self, items: tuple[Value, ...], level: int) -> list[str]:
        return [self._format_value(item, level + 1) for item in items]

    def _colon(self) -> str:
        return ": " if self.pretty else ":"

    def _pad(self, level: int) -> str:
        return " " * (self.indent * level)

    def _block(self, open_: str, parts: list[str], close: str, level: int) -> str:
        if not parts:
            return open_ + close
        if not self.pretty:
            return open_ + ",".join(parts) + close
        inner = self._pad(level + 1)
        body = "".join(f"{inner}{part},\n" for part in parts)
        return f"{open_}\n{body}{self._pad(level)}{close}"


def format_value(value: Value, *, pretty: bool = False, indent: int = 4) -> str:
    """Write a value as source text; compact unless ``pretty`` is set."""
    return ValueFormatter(pretty=pretty, indent=indent).format(value)


def format_type(type_expr: GenericType) -> str:
    """Write a type expression as canonical source text."""
    return str(type_expr)
