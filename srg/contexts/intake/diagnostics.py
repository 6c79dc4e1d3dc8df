"""Parse diagnostics: non-fatal issues reported with their source line."""

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class DiagnosticKind(str, Enum):
    """
    Kinds of parse diagnostics.

    MISSING_REQUIRED_FIELD is the only fatal kind; every other kind is
    recoverable and reported at WARNING severity.
    """

    MISSING_REQUIRED_FIELD = "missing-required-field"
    UNKNOWN_SECTION = "unknown-section"
    ORPHAN_FIELD = "orphan-field"
    MALFORMED_LINE = "malformed-line"
    UNKNOWN_FIELD = "unknown-field"
    EMPTY_VALUE = "empty-value"
    DUPLICATE_FIELD = "duplicate-field"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single issue found while parsing.

    Attributes:
        line_number: 1-based line the issue originates from
        severity: WARNING for recoverable issues, ERROR for fatal ones
        kind: Diagnostic category
        message: Human-readable cause
    """

    line_number: int
    severity: Severity
    kind: DiagnosticKind
    message: str

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.severity.value}: {self.message} [{self.kind.value}]"


def warning(line_number: int, kind: DiagnosticKind, message: str) -> Diagnostic:
    return Diagnostic(line_number, Severity.WARNING, kind, message)
