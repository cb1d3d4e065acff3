"""Parser/formatter options and TOML config loading for typed_format.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

CONFIG_FILENAME = "typed_format.toml"


def _check_bool(key: str, value: object) -> None:
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")


def _check_int(key: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")


class Dialect(Enum):
    """Grammar dialect accepted by the parser.

    EXTENDED has ``Some(...)``/``None`` option values and tuple types such as
    ``(u8, String)``. BASIC has neither: ``Some(1)`` reads as a tuple struct
    named ``Some`` and ``None`` as a bare type name.
    """

    EXTENDED = "extended"
    BASIC = "basic"


@dataclass(frozen=True)
class ParserOptions:
    dialect: Dialect = Dialect.EXTENDED
    max_depth: int = 128
    strict_numbers: bool = False  # reject a bare trailing dot such as `1.`

    def __post_init__(self) -> None:
        if not isinstance(self.dialect, Dialect):
            raise ValueError(f"unknown dialect: {self.dialect!r}")
        _check_int("max_depth", self.max_depth)
        _check_bool("strict_numbers", self.strict_numbers)
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")


@dataclass(frozen=True)
class FormatOptions:
    pretty: bool = True
    indent: int = 4

    def __post_init__(self) -> None:
        _check_bool("pretty", self.pretty)
        _check_int("indent", self.indent)
        if self.indent < 0:
            raise ValueError(f"indent must not be negative, got {self.indent}")


@dataclass
class TypedFormatConfig:
    parser: ParserOptions = field(default_factory=ParserOptions)
    format: FormatOptions = field(default_factory=FormatOptions)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find typed_format.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_FILENAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_FILENAME} found in any parent directory")
        path = parent


def _parse_dialect(raw: object) -> Dialect:
    try:
        return Dialect(raw)
    except ValueError:
        choices = ", ".join(d.value for d in Dialect)
        raise ValueError(f"unknown dialect {raw!r}; expected one of: {choices}") from None


def load_config(path: Path) -> TypedFormatConfig:
    """Parse a typed_format.toml file into a TypedFormatConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = TypedFormatConfig()

    if "parser" in data:
        psr = data["parser"]
        config.parser = ParserOptions(
            dialect=_parse_dialect(psr.get("dialect", Dialect.EXTENDED.value)),
            max_depth=psr.get("max_depth", 128),
            strict_numbers=psr.get("strict_numbers", False),
        )

    if "format" in data:
        fmt = data["format"]
        config.format = FormatOptions(
            pretty=fmt.get("pretty", True),
            indent=fmt.get("indent", 4),
        )

    return config
