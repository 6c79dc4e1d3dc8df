"""Custom exceptions for the intake context with source line references."""

from typing import Optional, Sequence

from srg.contexts.intake.diagnostics import Diagnostic


class ParseError(Exception):
    """
    Exception raised when a JOBL document cannot be turned into a resume.

    Attributes:
        message: Error description
        line_number: 1-based line the error originates from
        diagnostics: Warnings collected before the parse was aborted
    """

    def __init__(
        self,
        message: str,
        line_number: int,
        diagnostics: Optional[Sequence[Diagnostic]] = None,
    ):
        self.message = message
        self.line_number = line_number
        self.diagnostics = tuple(diagnostics or ())

        super().__init__(f"line {line_number}: {message}")


class MissingRequiredField(ParseError):
    """
    Exception raised when input ends without a required field being set.

    Attributes:
        field_name: Dotted name of the missing field (e.g., "contact.name")
    """

    def __init__(
        self,
        field_name: str,
        line_number: int,
        diagnostics: Optional[Sequence[Diagnostic]] = None,
    ):
        self.field_name = field_name
        super().__init__(
            f"missing required field '{field_name}'",
            line_number=line_number,
            diagnostics=diagnostics,
        )


class WarningsAsErrors(ParseError):
    """
    Exception raised in strict mode when a parse produced warnings.

    The first warning provides the line number; all of them are kept in diagnostics.
    """

    def __init__(self, diagnostics: Sequence[Diagnostic]):
        first = diagnostics[0]
        parts = [f"{len(diagnostics)} warning(s) treated as errors"]
        parts.extend(f"  - {diagnostic}" for diagnostic in diagnostics)
        super().__init__("\n".join(parts), line_number=first.line_number, diagnostics=diagnostics)
