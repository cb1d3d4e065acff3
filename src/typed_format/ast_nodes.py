"""AST node definitions for typed_format values and type expressions.

Nodes are immutable and compare structurally. Every node carries the span it
was parsed from, but the span takes no part in equality or hashing, so the
same value written with different spacing parses to equal trees.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Union

from typed_format.source import Span

# ── Type expressions ─────────────────────────────────────────────


@dataclass(frozen=True)
class GenericIdentifier:
    name: str
    args: tuple[GenericType, ...] = ()  # () when no <...> list was written
    span: Span | None = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        if self.args:
            return f"{self.name}<{', '.join(str(a) for a in self.args)}>"
        return self.name


@dataclass(frozen=True)
class TypeIdentifier:
    segments: tuple[GenericIdentifier, ...]
    span: Span | None = field(default=None, compare=False, repr=False)

    @classmethod
    def of(cls, *names: str) -> TypeIdentifier:
        """Build a plain path such as ``TypeIdentifier.of("std", "Vec")``."""
        if not names:
            raise ValueError("a type identifier needs at least one segment")
        return cls(tuple(GenericIdentifier(n) for n in names))

    @property
    def name(self) -> str:
        """The identifier of the last segment (``Variant`` in ``Enum::Variant``)."""
        return self.segments[-1].name

    def __str__(self) -> str:
        return "::".join(str(s) for s in self.segments)


@dataclass(frozen=True)
class ArrayType:
    element: GenericType
    size: int
    span: Span | None = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return f"[{self.element}; {self.size}]"


@dataclass(frozen=True)
class TupleType:
    elements: tuple[GenericType, ...]
    span: Span | None = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return f"({', '.join(str(e) for e in self.elements)})"


GenericType = Union[TypeIdentifier, ArrayType, TupleType]


# ── Scalar values ────────────────────────────────────────────────

_NUMBER_RE = re.compile(
    r"""
    (?P<sign>-)?
    (?P<integer>0|[1-9][0-9]*)
    (?:\.(?P<fraction>[0-9]*))?
    (?:[eE](?P<exponent>[+-]?[0-9]+))?
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class UnitLit:
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class BoolLit:
    value: bool
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class NumberLit:
    """A number kept as its literal text; conversions never round."""

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)

    def _parts(self) -> re.Match[str]:
        m = _NUMBER_RE.fullmatch(self.text)
        if m is None:
            raise ValueError(f"malformed number literal {self.text!r}")
        return m

    @property
    def negative(self) -> bool:
        return self._parts().group("sign") is not None

    @property
    def integer(self) -> str:
        return self._parts().group("integer")

    @property
    def fraction(self) -> str | None:
        """Digits after the decimal point; ``""`` for a bare trailing dot."""
        return self._parts().group("fraction")

    @property
    def exponent(self) -> int | None:
        exp = self._parts().group("exponent")
        return int(exp) if exp is not None else None

    @property
    def is_integer(self) -> bool:
        m = self._parts()
        return m.group("fraction") is None and m.group("exponent") is None

    def as_decimal(self) -> Decimal:
        self._parts()
        return Decimal(self.text)

    def as_int(self) -> int:
        if not self.is_integer:
            raise ValueError(f"{self.text!r} is not an integer literal")
        return int(self.text)

    def as_float(self) -> float:
        self._parts()
        return float(self.text)


@dataclass(frozen=True)
class StringLit:
    value: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class RawStringLit:
    value: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class CharLit:
    value: str
    span: Span | None = field(default=None, compare=False, repr=False)


# ── Composite values ─────────────────────────────────────────────


@dataclass(frozen=True)
class OptionLit:
    value: Value | None  # None for `None`, the payload for `Some(...)`
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class ListLit:
    items: tuple[Value, ...]
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class TupleLit:
    items: tuple[Value, ...]
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class MapEntry:
    key: Value
    value: Value


@dataclass(frozen=True)
class MapLit:
    entries: tuple[MapEntry, ...]
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class TupleStructLit:
    type_name: TypeIdentifier
    items: tuple[Value, ...]
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class StructField:
    name: str
    value: Value


@dataclass(frozen=True)
class NamedStructLit:
    type_name: TypeIdentifier
    fields: tuple[StructField, ...]
    span: Span | None = field(default=None, compare=False, repr=False)

    def get(self, name: str) -> Value | None:
        for f in self.fields:
            if f.name == name:
                return f.value
        return None


@dataclass(frozen=True)
class BareTypeLit:
    type_name: TypeIdentifier
    span: Span | None = field(default=None, compare=False, repr=False)


Value = Union[
    UnitLit,
    BoolLit,
    OptionLit,
    NumberLit,
    StringLit,
    RawStringLit,
    CharLit,
    ListLit,
    TupleLit,
    MapLit,
    TupleStructLit,
    NamedStructLit,
    BareTypeLit,
]
