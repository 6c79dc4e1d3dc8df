"""
JOBL Lexer

Splits raw JOBL text into classified lines. Never fails: anything that cannot
be classified becomes an ignorable COMMENT flagged as malformed, and the
document builder decides what to report.
"""

from dataclasses import dataclass
from enum import Enum
import tomllib
from typing import List, Optional, Tuple, Union

from srg.contexts.intake.jobl_patterns import LineRegex, fold_key, unquote

BOM = "\ufeff"


class LineKind(str, Enum):
    SECTION_HEADER = "section_header"
    KEY_VALUE = "key_value"
    LIST_ITEM = "list_item"
    BLANK = "blank"
    COMMENT = "comment"


@dataclass(frozen=True)
class RawLine:
    """
    One physical line of JOBL input.

    Only the attributes relevant to the line's kind are set:
    - SECTION_HEADER: name, and table for [[name]] headers
    - KEY_VALUE: key (folded), raw_key (as written), value, and items when the
      value is an inline array such as ["Rust", "Python"]
    - LIST_ITEM, COMMENT: text

    Attributes:
        line_number: 1-based line number in the source
        kind: Classified kind
        malformed: True for COMMENT lines that could not be classified, and for
            KEY_VALUE lines whose bracketed value is not a valid array of scalars
    """

    line_number: int
    kind: LineKind
    name: Optional[str] = None
    key: Optional[str] = None
    raw_key: Optional[str] = None
    value: Optional[str] = None
    text: Optional[str] = None
    items: Optional[Tuple[str, ...]] = None
    table: bool = False
    malformed: bool = False


def decode(data: Union[bytes, str]) -> str:
    """Decode input as UTF-8, replacing undecodable bytes and dropping a leading BOM."""
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    if data.startswith(BOM):
        data = data[len(BOM):]
    return data


def classify_line(text: str, line_number: int) -> RawLine:
    """
    Classify a single line of JOBL text.

    Args:
        text: Line content without its line terminator
        line_number: 1-based line number

    Returns:
        RawLine tagged with its kind and extracted (trimmed) values
    """
    stripped = text.strip()

    if not stripped:
        return RawLine(line_number, LineKind.BLANK)

    if LineRegex.COMMENT.match(stripped):
        return RawLine(line_number, LineKind.COMMENT, text=stripped[1:].strip())

    if match := LineRegex.SECTION_HEADER.match(stripped):
        return RawLine(
            line_number,
            LineKind.SECTION_HEADER,
            name=match.group("name").strip().lower(),
            table=stripped.startswith("[[") and stripped.endswith("]]"),
        )

    if match := LineRegex.LIST_ITEM.match(stripped):
        return RawLine(line_number, LineKind.LIST_ITEM, text=unquote(match.group("text").strip()))

    if match := LineRegex.KEY_VALUE.match(stripped):
        raw_key = match.group("key").strip()
        raw_value = (match.group("value") or "").strip()
        items, malformed = None, False
        if raw_value.startswith("[") and raw_value.endswith("]"):
            items = inline_array(raw_value)
            malformed = items is None
        return RawLine(
            line_number,
            LineKind.KEY_VALUE,
            key=fold_key(raw_key),
            raw_key=raw_key,
            value=unquote(raw_value),
            items=items,
            malformed=malformed,
        )

    return RawLine(line_number, LineKind.COMMENT, text=stripped, malformed=True)


def inline_array(raw_value: str) -> Optional[Tuple[str, ...]]:
    """
    Read a TOML inline array of scalars, e.g. ["Rust", "Python"].

    Returns:
        Non-empty items as trimmed strings, or None if the value is not a
        valid single-line array of scalars
    """
    try:
        parsed = tomllib.loads(f"value = {raw_value}")["value"]
    except tomllib.TOMLDecodeError:
        return None

    if not isinstance(parsed, list) or any(isinstance(item, (list, dict)) for item in parsed):
        return None
    return tuple(str(item).strip() for item in parsed if str(item).strip())


def split_lines(text: str) -> List[str]:
    """Split on LF only (CRLF tolerated) so line numbers match what editors show."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def tokenize(data: Union[bytes, str]) -> List[RawLine]:
    """
    Split raw JOBL input into classified lines in source order.

    Args:
        data: Raw file bytes (assumed UTF-8) or already decoded text

    Returns:
        One RawLine per physical line
    """
    text = decode(data)
    return [classify_line(line, number) for number, line in enumerate(split_lines(text), start=1)]
