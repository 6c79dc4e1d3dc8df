"""
JOBL Pattern Constants

Centralized token patterns and vocabularies for the JOBL line grammar.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

import re
from dataclasses import dataclass
from typing import Dict, FrozenSet

from srg.contexts.templating.resume_data_structure import SectionKind


@dataclass(frozen=True)
class LineRegex:
    """
    Compiled regexes for line classification.

    A key must start with a letter, so a line whose list marker comes first
    can never be read as a key/value pair.
    """

    COMMENT: re.Pattern = re.compile(r"^#")
    SECTION_HEADER: re.Pattern = re.compile(r"^\[{1,2}\s*(?P<name>[^\[\]]*?)\s*\]{1,2}$")
    LIST_ITEM: re.Pattern = re.compile(r"^[-*•]\s+(?P<text>.*)$")
    KEY_VALUE: re.Pattern = re.compile(
        r"^(?P<key>[A-Za-z][\w .\-]*?)\s*[:=](?:\s+(?P<value>.*))?$"
    )
    KEY_FOLD: re.Pattern = re.compile(r"[\s.\-]+")


SECTION_ALIASES: Dict[str, SectionKind] = {
    "contact": SectionKind.CONTACT,
    "person": SectionKind.CONTACT,
    "skills": SectionKind.SKILLS,
    "experience": SectionKind.EXPERIENCE,
    "work": SectionKind.EXPERIENCE,
    "jobs": SectionKind.EXPERIENCE,
    "projects": SectionKind.PROJECTS,
    "education": SectionKind.EDUCATION,
}


_DATE_KEYS = {
    "dates": "date_range",
    "date": "date_range",
    "date_range": "date_range",
    "period": "date_range",
    "start": "start",
    "end": "end",
}

ENTRY_MARKERS: Dict[SectionKind, FrozenSet[str]] = {
    SectionKind.SKILLS: frozenset({"category", "name"}),
    SectionKind.EXPERIENCE: frozenset({"title"}),
    SectionKind.PROJECTS: frozenset({"name"}),
    SectionKind.EDUCATION: frozenset({"institution", "school"}),
}

# Scalar fields (key -> canonical field) per entry section
SCALAR_FIELDS: Dict[SectionKind, Dict[str, str]] = {
    SectionKind.SKILLS: {},
    SectionKind.EXPERIENCE: {
        "organization": "organization",
        "company": "organization",
        "employer": "organization",
        "location": "location",
        "summary": "summary",
        **_DATE_KEYS,
    },
    SectionKind.PROJECTS: {
        "link": "link",
        "url": "link",
        "website": "link",
        "summary": "summary",
    },
    SectionKind.EDUCATION: {
        "credential": "credential",
        "degree": "credential",
        "location": "location",
        **_DATE_KEYS,
    },
}

# Repeatable fields (key -> list field) per entry section; list items feed the same list
LIST_FIELDS: Dict[SectionKind, Dict[str, str]] = {
    SectionKind.SKILLS: {"items": "items", "item": "items"},
    SectionKind.EXPERIENCE: {
        "highlight": "highlights",
        "highlights": "highlights",
        "technologies": "technologies",
        "technology": "technologies",
        "tech": "technologies",
    },
    SectionKind.PROJECTS: {"highlight": "highlights", "highlights": "highlights"},
    SectionKind.EDUCATION: {"details": "details", "detail": "details"},
}

# Field that collects bare list items in each entry section
LIST_ITEM_FIELD: Dict[SectionKind, str] = {
    SectionKind.SKILLS: "items",
    SectionKind.EXPERIENCE: "highlights",
    SectionKind.PROJECTS: "highlights",
    SectionKind.EDUCATION: "details",
}

# Canonical primary identifier field per entry section
PRIMARY_FIELD: Dict[SectionKind, str] = {
    SectionKind.SKILLS: "name",
    SectionKind.EXPERIENCE: "title",
    SectionKind.PROJECTS: "name",
    SectionKind.EDUCATION: "institution",
}

# List fields whose plain values hold several comma-separated items
COMMA_LIST_FIELDS: FrozenSet[str] = frozenset({"items", "technologies"})

ITEM_SEPARATOR = ","


def fold_key(key: str) -> str:
    """Lower-case a key and fold spaces, dots and hyphens to underscores."""
    return LineRegex.KEY_FOLD.sub("_", key.strip().lower())


def unquote(value: str) -> str:
    """Strip one pair of matching surrounding quotes, TOML style."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1].strip()
    return value
