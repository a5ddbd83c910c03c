"""Semantic errors and diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

_RED = "\x1b[31m"
_RESET = "\x1b[0m"


@dataclass(frozen=True, order=True)
class Span:
    """A half-open range of character offsets in a source file."""

    start: int
    end: int


class Severity(Enum):
    """How serious a diagnostic is."""

    BUG = "bug"
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"


@dataclass(frozen=True)
class Label:
    """A message attached to a span of source code."""

    span: Span
    message: str
    is_primary: bool = True

    @classmethod
    def primary(cls, span: Span, message: object) -> Label:
        return cls(span, str(message), True)


@dataclass
class Diagnostic:
    """A message for the user, with labelled source spans and notes."""

    severity: Severity
    message: str
    labels: list[Label] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    code: str | None = None
    file_id: int | None = None


class AlreadyDefined(Exception):
    """A definition with the same name already exists."""


class CannotMove(Exception):
    """A value cannot move between memory and storage."""


class ErrorKind(Enum):
    """Kinds of errors that may arise in a valid syntax tree."""

    NOT_SUBSCRIPTABLE = "NotSubscriptable"
    SIGNED_EXPONENT_NOT_ALLOWED = "SignedExponentNotAllowed"
    TYPE_ERROR = "TypeError"
    FATAL = "Fatal"


def _line_count(text: str) -> int:
    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)


class SemanticError(Exception):
    """An error found during analysis, with the nested spans it arose in."""

    def __init__(self, kind: ErrorKind, context: list[Span] | None = None) -> None:
        super().__init__(kind.value)
        self.kind = kind
        self.context: list[Span] = list(context or [])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticError):
            return NotImplemented
        return self.kind == other.kind and self.context == other.context

    __hash__ = Exception.__hash__

    def __repr__(self) -> str:
        return f"SemanticError(kind={self.kind}, context={self.context!r})"

    @classmethod
    def fatal(cls) -> SemanticError:
        return cls(ErrorKind.FATAL)

    @classmethod
    def not_subscriptable(cls) -> SemanticError:
        return cls(ErrorKind.NOT_SUBSCRIPTABLE)

    @classmethod
    def signed_exponent_not_allowed(cls) -> SemanticError:
        return cls(ErrorKind.SIGNED_EXPONENT_NOT_ALLOWED)

    @classmethod
    def type_error(cls) -> SemanticError:
        return cls(ErrorKind.TYPE_ERROR)

    def with_context(self, span: Span) -> SemanticError:
        """Add an enclosing span to the error and return it."""
        self.context.append(span)
        return self

    def format_user(self, src: str) -> str:
        """Describe the error with its line number and the code around it."""
        line = _line_count(src[: self.context[0].start]) if self.context else 0

        if len(self.context) >= 2:
            inner, outer = self.context[0], self.context[1]
            text = (
                src[outer.start : inner.start]
                + _RED
                + src[inner.start : inner.end]
                + _RESET
                + src[inner.end : outer.end]
            )
        elif self.context:
            span = self.context[0]
            text = src[span.start : span.end]
        else:
            text = "no error context available"

        return f"{self.kind.value} on line {line}\n{text}"


class AnalyzerError(Exception):
    """Analysis failed; holds the diagnostics and any classic error."""

    def __init__(
        self, diagnostics: list[Diagnostic], classic: SemanticError | None = None
    ) -> None:
        super().__init__(f"analysis failed with {len(diagnostics)} diagnostic(s)")
        self.diagnostics = diagnostics
        self.classic = classic