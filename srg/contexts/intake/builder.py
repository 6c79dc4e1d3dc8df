"""
JOBL Document Builder

Consumes classified lines and assembles an immutable ResumeDocument.

A cursor (active section, open entry) is threaded explicitly through a single
pass. Recoverable problems become warning diagnostics; only a missing contact
name aborts the parse.

Entries are opened two ways:
- Under a [section] header, each primary field (title, name, institution, ...)
  starts a new entry and later fields attach to it.
- Each [[section]] header starts one pending entry. Its fields may come in any
  order; the entry is kept when the table closes (next header or end of input)
  if it has a primary field.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from srg.contexts.intake.diagnostics import Diagnostic, DiagnosticKind, warning
from srg.contexts.intake.exceptions import MissingRequiredField, WarningsAsErrors
from srg.contexts.intake.jobl_patterns import (
    COMMA_LIST_FIELDS,
    ENTRY_MARKERS,
    ITEM_SEPARATOR,
    LIST_FIELDS,
    LIST_ITEM_FIELD,
    PRIMARY_FIELD,
    SCALAR_FIELDS,
    SECTION_ALIASES,
)
from srg.contexts.intake.lexer import LineKind, RawLine, tokenize
from srg.contexts.intake.logger import _log_debug
from srg.contexts.templating.resume_data_structure import (
    DocumentDraft,
    ResumeDocument,
    SectionKind,
)

# Draft key holding the line an entry was opened on
LINE_KEY = "_line"


@dataclass(frozen=True)
class ParseResult:
    """
    Best-effort document plus the warnings gathered while building it.

    Attributes:
        document: The built resume
        diagnostics: Non-fatal issues in source order
    """

    document: ResumeDocument
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def warnings(self) -> Tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if not d.is_fatal)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def raise_for_warnings(self) -> None:
        """Raise WarningsAsErrors if any warning was reported (strict mode)."""
        if self.warnings:
            raise WarningsAsErrors(self.warnings)


@dataclass(frozen=True)
class _Cursor:
    """
    Builder position within the document.

    Attributes:
        section: Active recognized section (None before any header or inside an unknown one)
        skipping: True while inside an unrecognized section
        entry: Most recently opened entry of the active section
        table_line: Header line of the open [[section]] table (None outside tables)
        contact_line: Line of the first contact header (for missing-name reports)
    """

    section: Optional[SectionKind] = None
    skipping: bool = False
    entry: Optional[dict] = None
    table_line: Optional[int] = None
    contact_line: Optional[int] = None


def build_document(lines: Iterable[RawLine]) -> ParseResult:
    """
    Build a ResumeDocument from classified lines.

    Args:
        lines: RawLine sequence in source order

    Returns:
        ParseResult with the document and warning diagnostics

    Raises:
        MissingRequiredField: If input ends without a non-empty contact name
    """
    draft = DocumentDraft()
    diagnostics: List[Diagnostic] = []
    cursor = _Cursor()
    last_line = 0

    for line in lines:
        last_line = line.line_number
        cursor = _consume(line, cursor, draft, diagnostics)
    cursor = _close_table(cursor, draft, diagnostics)
    _drop_empty_categories(draft, diagnostics)
    diagnostics.sort(key=lambda diagnostic: diagnostic.line_number)

    if not draft.contact.get("name"):
        raise MissingRequiredField(
            "contact.name",
            line_number=cursor.contact_line or max(last_line, 1),
            diagnostics=diagnostics,
        )

    document = draft.freeze()
    _log_debug(
        f"Built resume for {document.name}: {len(document.skills)} skill categories, "
        f"{len(document.experience)} jobs, {len(document.projects)} projects, "
        f"{len(document.education)} education entries, {len(diagnostics)} warnings"
    )
    return ParseResult(document=document, diagnostics=tuple(diagnostics))


def parse_jobl(data: Union[bytes, str]) -> ParseResult:
    """Tokenize and build a JOBL document from raw bytes or text."""
    return build_document(tokenize(data))


def parse_file(path: Path) -> ParseResult:
    """Read a JOBL file as bytes and parse it."""
    return parse_jobl(Path(path).read_bytes())


# ───────────────────────────────────────── helpers ──


def _consume(line: RawLine, cursor: _Cursor, draft: DocumentDraft, out: List[Diagnostic]) -> _Cursor:
    if line.kind is LineKind.BLANK:
        return cursor

    if line.kind is LineKind.COMMENT:
        if line.malformed and not cursor.skipping:
            out.append(
                warning(
                    line.line_number,
                    DiagnosticKind.MALFORMED_LINE,
                    f"unrecognized line '{line.text}' ignored",
                )
            )
        return cursor

    if line.kind is LineKind.SECTION_HEADER:
        cursor = _close_table(cursor, draft, out)
        return _open_section(line, cursor, out)

    if cursor.skipping:
        return cursor

    if line.malformed:
        out.append(
            warning(
                line.line_number,
                DiagnosticKind.MALFORMED_LINE,
                f"value of '{line.key}' is not a valid inline array; using it as text",
            )
        )

    if cursor.section is None:
        out.append(
            warning(
                line.line_number,
                DiagnosticKind.ORPHAN_FIELD,
                f"{_describe(line)} appears before any section header; ignored",
            )
        )
        return cursor

    if cursor.section is SectionKind.CONTACT:
        _consume_contact(line, draft, out)
        return cursor

    return _consume_entry_line(line, cursor, draft, out)


def _open_section(line: RawLine, cursor: _Cursor, out: List[Diagnostic]) -> _Cursor:
    kind = SECTION_ALIASES.get(line.name)

    if kind is None:
        out.append(
            warning(
                line.line_number,
                DiagnosticKind.UNKNOWN_SECTION,
                f"unknown section '[{line.name}]'; skipping until the next recognized section",
            )
        )
        return _Cursor(skipping=True, contact_line=cursor.contact_line)

    contact_line = cursor.contact_line
    if kind is SectionKind.CONTACT:
        if contact_line is None:
            contact_line = line.line_number
        return _Cursor(section=kind, contact_line=contact_line)

    if line.table:
        return _Cursor(
            section=kind,
            entry=_new_entry(kind, line.line_number),
            table_line=line.line_number,
            contact_line=contact_line,
        )
    return _Cursor(section=kind, contact_line=contact_line)


def _close_table(cursor: _Cursor, draft: DocumentDraft, out: List[Diagnostic]) -> _Cursor:
    """Keep the pending [[section]] entry if it has its primary field."""
    if cursor.table_line is None:
        return cursor

    kind = cursor.section
    if cursor.entry.get(PRIMARY_FIELD[kind]):
        getattr(draft, kind.value).append(cursor.entry)
    else:
        out.append(
            warning(
                cursor.table_line,
                DiagnosticKind.ORPHAN_FIELD,
                f"[[{kind.value}]] table has no {_markers(kind)}; its fields are ignored",
            )
        )
    return replace(cursor, entry=None, table_line=None)


def _consume_contact(line: RawLine, draft: DocumentDraft, out: List[Diagnostic]) -> None:
    if line.kind is LineKind.LIST_ITEM:
        out.append(
            warning(
                line.line_number,
                DiagnosticKind.ORPHAN_FIELD,
                "list items are not allowed in [contact]; ignored",
            )
        )
        return

    value = ", ".join(line.items) if line.items is not None else line.value
    if not value:
        out.append(
            warning(line.line_number, DiagnosticKind.EMPTY_VALUE, f"empty value for '{line.key}'; ignored")
        )
        return

    if line.key in draft.contact:
        out.append(
            warning(
                line.line_number,
                DiagnosticKind.DUPLICATE_FIELD,
                f"contact field '{line.key}' set more than once; using the later value",
            )
        )
    draft.contact[line.key] = value


def _consume_entry_line(
    line: RawLine, cursor: _Cursor, draft: DocumentDraft, out: List[Diagnostic]
) -> _Cursor:
    kind = cursor.section
    entries = getattr(draft, kind.value)

    if line.kind is LineKind.LIST_ITEM:
        if cursor.entry is None:
            out.append(_orphan(line, kind))
        elif not line.text:
            out.append(warning(line.line_number, DiagnosticKind.EMPTY_VALUE, "empty list item; ignored"))
        else:
            cursor.entry[LIST_ITEM_FIELD[kind]].append(line.text)
        return cursor

    key, value = line.key, line.value

    if key in ENTRY_MARKERS[kind]:
        if line.items is not None:
            out.append(_single_value_expected(line))
            return cursor
        if not value:
            out.append(
                warning(
                    line.line_number,
                    DiagnosticKind.EMPTY_VALUE,
                    f"empty '{key}' in [{kind.value}]; entry not started",
                )
            )
            return cursor if cursor.table_line is not None else replace(cursor, entry=None)
        if cursor.table_line is not None:
            _set_field(cursor.entry, PRIMARY_FIELD[kind], value, line, out)
            return cursor
        return _open_entry(kind, value, entries, cursor, line.line_number)

    if key in LIST_FIELDS[kind]:
        if cursor.entry is None:
            out.append(_orphan(line, kind))
        else:
            _extend(cursor.entry, LIST_FIELDS[kind][key], line, out)
        return cursor

    if key in SCALAR_FIELDS[kind]:
        if cursor.entry is None:
            out.append(_orphan(line, kind))
        elif line.items is not None:
            out.append(_single_value_expected(line))
        elif not value:
            out.append(warning(line.line_number, DiagnosticKind.EMPTY_VALUE, f"empty '{key}'; ignored"))
        else:
            _set_field(cursor.entry, SCALAR_FIELDS[kind][key], value, line, out)
        return cursor

    if kind is SectionKind.SKILLS:
        # Shorthand: "Languages: Python, Rust" is a category named after the key
        category = _new_entry(kind, line.line_number)
        category[PRIMARY_FIELD[kind]] = line.raw_key
        entries.append(category)
        _extend(category, LIST_ITEM_FIELD[kind], line, out, warn_empty=False)
        if cursor.table_line is not None:
            return cursor
        return replace(cursor, entry=category)

    out.append(
        warning(
            line.line_number,
            DiagnosticKind.UNKNOWN_FIELD,
            f"unknown field '{key}' in [{kind.value}]; ignored",
        )
    )
    return cursor


def _new_entry(kind: SectionKind, line_number: int) -> dict:
    entry = {LINE_KEY: line_number}
    entry.update({field_name: [] for field_name in LIST_FIELDS[kind].values()})
    return entry


def _open_entry(
    kind: SectionKind, identifier: str, entries: List[dict], cursor: _Cursor, line_number: int
) -> _Cursor:
    entry = _new_entry(kind, line_number)
    entry[PRIMARY_FIELD[kind]] = identifier
    entries.append(entry)
    return replace(cursor, entry=entry)


def _set_field(entry: dict, field_name: str, value: str, line: RawLine, out: List[Diagnostic]) -> None:
    if entry.get(field_name):
        out.append(
            warning(
                line.line_number,
                DiagnosticKind.DUPLICATE_FIELD,
                f"field '{field_name}' set more than once in this entry; using the later value",
            )
        )
    entry[field_name] = value


def _extend(entry: dict, field_name: str, line: RawLine, out: List[Diagnostic], warn_empty: bool = True) -> None:
    """Add the items of a list field: an inline array, comma-separated text or one value."""
    if line.items is not None:
        entry[field_name].extend(line.items)
    elif not line.value:
        if warn_empty:
            out.append(warning(line.line_number, DiagnosticKind.EMPTY_VALUE, f"empty '{line.key}'; ignored"))
    elif field_name in COMMA_LIST_FIELDS:
        entry[field_name].extend(_split_items(line.value))
    else:
        entry[field_name].append(line.value)


def _drop_empty_categories(draft: DocumentDraft, out: List[Diagnostic]) -> None:
    kept = []
    for category in draft.skills:
        if category[LIST_ITEM_FIELD[SectionKind.SKILLS]]:
            kept.append(category)
            continue
        out.append(
            warning(
                category[LINE_KEY],
                DiagnosticKind.EMPTY_VALUE,
                f"skill category '{category['name']}' has no items; omitted",
            )
        )
    draft.skills = kept


def _split_items(value: str) -> List[str]:
    return [item.strip() for item in value.split(ITEM_SEPARATOR) if item.strip()]


def _markers(kind: SectionKind) -> str:
    return " or ".join(f"'{marker}'" for marker in sorted(ENTRY_MARKERS[kind]))


def _orphan(line: RawLine, kind: SectionKind) -> Diagnostic:
    return warning(
        line.line_number,
        DiagnosticKind.ORPHAN_FIELD,
        f"{_describe(line)} in [{kind.value}] appears before any {_markers(kind)}; ignored",
    )


def _single_value_expected(line: RawLine) -> Diagnostic:
    return warning(
        line.line_number,
        DiagnosticKind.MALFORMED_LINE,
        f"'{line.key}' takes a single value, not an array; ignored",
    )


def _describe(line: RawLine) -> str:
    if line.kind is LineKind.KEY_VALUE:
        return f"field '{line.key}'"
    return "list item"
