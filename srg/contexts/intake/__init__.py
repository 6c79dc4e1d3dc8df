"""
Intake Context

Responsibilities:
- Classifies raw JOBL lines (section headers, key/value pairs, list items)
- Builds the validated ResumeDocument from classified lines
- Reports recoverable problems as line-numbered diagnostics

Owns: JOBL grammar and document building
Never: Makes presentation decisions
"""

from srg.contexts.intake.builder import ParseResult, build_document, parse_file, parse_jobl
from srg.contexts.intake.diagnostics import Diagnostic, DiagnosticKind, Severity
from srg.contexts.intake.exceptions import MissingRequiredField, ParseError, WarningsAsErrors
from srg.contexts.intake.lexer import LineKind, RawLine, classify_line, tokenize

__all__ = [
    # Lexing
    "LineKind",
    "RawLine",
    "classify_line",
    "tokenize",
    # Building
    "ParseResult",
    "build_document",
    "parse_jobl",
    "parse_file",
    # Diagnostics and errors
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    "ParseError",
    "MissingRequiredField",
    "WarningsAsErrors",
]
