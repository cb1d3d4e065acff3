"""Parse errors and Rust-style colored diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typed_format.source import SourceText, Span


class Severity(Enum):
    ERROR = "error"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",  # bold red
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a specific source location."""

    span: Span
    message: str


@dataclass(frozen=True)
class Suggestion:
    """A suggested fix."""

    message: str
    replacement: str


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and suggestions."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


# ── Parse errors ─────────────────────────────────────────────────


class ParseError(Exception):
    """Base class for every failure raised by the lexer and parser.

    ``rule`` names the lexical rule that failed (lexer errors); ``expected``
    lists the alternatives that were attempted at the reported position
    (parser errors). ``found`` describes the offending input.
    """

    code = "E000"

    def __init__(
        self,
        message: str,
        span: Span,
        *,
        rule: str | None = None,
        expected: tuple[str, ...] = (),
        found: str | None = None,
        suggestion: Suggestion | None = None,
    ) -> None:
        self.message = message
        self.span = span
        self.rule = rule
        self.expected = expected
        self.found = found
        self.suggestion = suggestion
        super().__init__(str(self))

    @property
    def offset(self) -> int:
        return self.span.start

    @property
    def line(self) -> int:
        return self.span.line

    @property
    def column(self) -> int:
        return self.span.column

    def __str__(self) -> str:
        text = f"{self.span.line}:{self.span.column}: {self.message}"
        if self.expected:
            text += f"; expected {', '.join(self.expected)}"
        if self.found is not None:
            text += f"; found {self.found}"
        return text

    def to_diagnostic(self) -> Diagnostic:
        notes: list[str] = []
        if self.expected:
            notes.append(f"expected one of: {', '.join(self.expected)}")
        if self.rule is not None:
            notes.append(f"while lexing {self.rule}")
        return Diagnostic(
            severity=Severity.ERROR,
            code=self.code,
            message=self.message,
            labels=[DiagnosticLabel(span=self.span, message=f"found {self.found}" if self.found else "")],
            suggestions=[self.suggestion] if self.suggestion is not None else [],
            notes=notes,
        )


class LexError(ParseError):
    """Malformed or unterminated string, char, raw string, number or comment."""

    code = "E100"


class UnmatchedRawStringDelimiter(LexError):
    """A raw string was never closed with the same number of '#' marks."""

    code = "E101"


class InvalidSyntaxError(ParseError):
    """No alternative matched at the reported position."""

    code = "E200"


class TrailingInputError(ParseError):
    """A complete value or type was read but input remains."""

    code = "E201"


class RecursionLimitExceeded(ParseError):
    """Nesting went deeper than the configured maximum depth."""

    code = "E202"


# ── Rendering ────────────────────────────────────────────────────


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render_error(self, err: ParseError, source: SourceText | None = None) -> str:
        return self.render(err.to_diagnostic(), source)

    def render(self, diag: Diagnostic, source: SourceText | None = None) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]

        # Header: error[E100]: message
        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        name = source.name if source is not None else "<input>"
        for label in diag.labels:
            span = label.span
            lines.append(
                f"  {self._c(_BLUE)}-->{self._c(_RESET)} {name}:{span.line}:{span.column}"
            )
            gutter = f"{span.line:>4}"
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")

            if source is not None:
                source_line = source.line_at(span.line)
                lines.append(
                    f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} {source_line}"
                )
                # Carets stop at the end of the first line of the span
                room = max(1, len(source_line) - span.column + 1)
                caret_len = max(1, min(span.end - span.start, room))
                padding = " " * (span.column - 1)
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                    f"{padding}{self._c(color)}{'^' * caret_len}{self._c(_RESET)}"
                )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        for suggestion in diag.suggestions:
            lines.append(
                f"  {self._c(_BLUE)}try:{self._c(_RESET)} {suggestion.replacement}"
            )

        return "\n".join(lines)
