"""
Resume Document Structure

Defines the structured, immutable representation of a resume.
This structure is the interface between the Intake and Templating contexts.

Intake owns:
- Building ResumeDocument instances from JOBL source

Templating reads ResumeDocument instances to produce HTML and page layouts.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple


class SectionKind(str, Enum):
    """
    The five recognized resume sections.

    Declaration order is the canonical presentation order.
    """

    CONTACT = "contact"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    EDUCATION = "education"

    @classmethod
    def ordered(cls) -> Tuple["SectionKind", ...]:
        return tuple(cls)


# Contact fields presented before any other, in this order
CONTACT_FIELD_ORDER = ("name", "headline", "email", "phone", "location", "website", "links")

# Contact fields rendered as a free-text paragraph instead of a detail item
CONTACT_PARAGRAPH_FIELDS = ("summary",)


@dataclass(frozen=True)
class SkillCategory:
    """
    Named group of skills.

    Attributes:
        name: Category name (e.g., "Languages")
        items: Skills in source order
    """

    name: str
    items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Job:
    """
    Work experience entry.

    Attributes:
        title: Job title (primary identifier)
        organization: Company or organization name
        date_range: Free-form date range (e.g., "2020 - 2024")
        highlights: Highlight bullets in source order
        location: Optional location
        summary: Optional one-paragraph summary
        technologies: Technologies used, in source order
    """

    title: str
    organization: str = ""
    date_range: str = ""
    highlights: Tuple[str, ...] = ()
    location: str = ""
    summary: str = ""
    technologies: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Project:
    """
    Project entry.

    Attributes:
        name: Project name (primary identifier)
        link: Optional URL
        highlights: Highlight bullets in source order
        summary: Optional one-paragraph summary
    """

    name: str
    link: Optional[str] = None
    highlights: Tuple[str, ...] = ()
    summary: str = ""


@dataclass(frozen=True)
class Education:
    """
    Education entry.

    Attributes:
        institution: School or institution (primary identifier)
        credential: Degree or certificate
        date_range: Free-form date range
        details: Optional detail lines in source order
        location: Optional location
    """

    institution: str
    credential: str = ""
    date_range: str = ""
    details: Tuple[str, ...] = ()
    location: str = ""


@dataclass(frozen=True)
class ResumeDocument:
    """
    Canonical in-memory representation of a resume.

    Built once per invocation by the intake context and never mutated.
    Every downstream consumer reads only from this model.

    Attributes:
        contact: Read-only mapping of contact field name to value ("name" is required)
        skills: Skill categories in source order
        experience: Jobs in source order
        projects: Projects in source order
        education: Education entries in source order
    """

    contact: Mapping[str, str]
    skills: Tuple[SkillCategory, ...] = ()
    experience: Tuple[Job, ...] = ()
    projects: Tuple[Project, ...] = ()
    education: Tuple[Education, ...] = ()

    def __post_init__(self):
        if not self.contact.get("name", "").strip():
            raise ValueError("ResumeDocument requires a non-empty contact name")

        if not isinstance(self.contact, MappingProxyType):
            object.__setattr__(self, "contact", MappingProxyType(dict(self.contact)))

        checks = (
            ("skill category", "name", self.skills),
            ("job", "title", self.experience),
            ("project", "name", self.projects),
            ("education entry", "institution", self.education),
        )
        for label, attr, entries in checks:
            for entry in entries:
                if not getattr(entry, attr).strip():
                    raise ValueError(f"Every {label} requires a non-empty {attr}")

    @property
    def name(self) -> str:
        return self.contact["name"]

    def entries(self, kind: SectionKind) -> tuple:
        """
        Get the backing sequence for a section.

        The contact section is backed by its mapping and is never empty.
        """
        if kind is SectionKind.CONTACT:
            return (self.contact,)
        return getattr(self, kind.value)

    def is_empty(self, kind: SectionKind) -> bool:
        return len(self.entries(kind)) == 0

    def contact_details(self) -> Iterator[Tuple[str, str]]:
        """
        Yield (field, value) contact pairs in canonical order, excluding name and paragraph fields.

        Known fields come first in CONTACT_FIELD_ORDER, the rest alphabetically,
        so the order of contact lines in the source never changes the output.
        """
        known = [key for key in CONTACT_FIELD_ORDER if key in self.contact]
        extra = sorted(
            key
            for key in self.contact
            if key not in CONTACT_FIELD_ORDER and key not in CONTACT_PARAGRAPH_FIELDS
        )
        for key in known + extra:
            if key == "name":
                continue
            yield key, self.contact[key]


@dataclass
class DocumentDraft:
    """
    Mutable accumulator used while a single parse pass is running.

    Owned by exactly one build call and frozen into a ResumeDocument at the end.
    """

    contact: dict = field(default_factory=dict)
    skills: List[dict] = field(default_factory=list)
    experience: List[dict] = field(default_factory=list)
    projects: List[dict] = field(default_factory=list)
    education: List[dict] = field(default_factory=list)

    def freeze(self) -> ResumeDocument:
        return ResumeDocument(
            contact=dict(self.contact),
            skills=tuple(
                SkillCategory(name=entry["name"], items=tuple(entry["items"]))
                for entry in self.skills
            ),
            experience=tuple(
                Job(
                    title=entry["title"],
                    organization=entry.get("organization", ""),
                    date_range=_date_range(entry),
                    highlights=tuple(entry["highlights"]),
                    location=entry.get("location", ""),
                    summary=entry.get("summary", ""),
                    technologies=tuple(entry.get("technologies", ())),
                )
                for entry in self.experience
            ),
            projects=tuple(
                Project(
                    name=entry["name"],
                    link=entry.get("link") or None,
                    highlights=tuple(entry["highlights"]),
                    summary=entry.get("summary", ""),
                )
                for entry in self.projects
            ),
            education=tuple(
                Education(
                    institution=entry["institution"],
                    credential=entry.get("credential", ""),
                    date_range=_date_range(entry),
                    details=tuple(entry["details"]),
                    location=entry.get("location", ""),
                )
                for entry in self.education
            ),
        )


def _date_range(entry: dict) -> str:
    """Explicit range wins; otherwise join start and end."""
    if entry.get("date_range"):
        return entry["date_range"]
    bounds = [entry.get("start", ""), entry.get("end", "")]
    return " - ".join(bound for bound in bounds if bound)
