"""
Section Plan

Decides which sections are presented, in what order, and with what text.
Both the HTML renderer and the layout projector render from the same plan,
so HTML and PDF always carry the same sections, content and order.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from srg.contexts.templating.resume_data_structure import (
    CONTACT_PARAGRAPH_FIELDS,
    Education,
    Job,
    Project,
    ResumeDocument,
    SectionKind,
    SkillCategory,
)
from srg.contexts.templating.template_registry import TemplateRules

# Contact fields whose value is a web address
LINK_FIELDS = frozenset({"website", "links", "link", "url", "github", "linkedin", "portfolio"})

WEB_SCHEMES = ("http://", "https://")


@dataclass(frozen=True)
class ContactDetail:
    """One contact item (email, phone, website, ...) with an optional link target."""

    field: str
    value: str
    href: Optional[str] = None


@dataclass(frozen=True)
class EntryView:
    """
    Presentation text of one entry (skill category, job, project, education).

    Attributes:
        heading: Primary identifier
        subheading: Organization or credential
        meta: Dates and location joined by the template's detail separator
        link: Optional link shown under the heading
        link_href: Link target for link
        summary: Optional paragraph
        inline_label: Label in front of inline_items (jobs)
        inline_items: Items shown on one line (skills, technologies)
        bullets: Items shown as a list (highlights, details)
    """

    heading: str
    subheading: str = ""
    meta: str = ""
    link: Optional[str] = None
    link_href: Optional[str] = None
    summary: str = ""
    inline_label: str = ""
    inline_items: Tuple[str, ...] = ()
    bullets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SectionPlan:
    """
    One presented section.

    Attributes:
        kind: Section kind
        heading: Heading text (the person's name for contact)
        css_class: CSS class / layout style hook
        subheading: Contact headline
        details: Contact details in canonical order
        paragraphs: Contact free-text paragraphs (summary)
        entries: Entry views in source order
    """

    kind: SectionKind
    heading: str
    css_class: str
    subheading: str = ""
    details: Tuple[ContactDetail, ...] = ()
    paragraphs: Tuple[str, ...] = ()
    entries: Tuple[EntryView, ...] = ()

    @property
    def id(self) -> str:
        return self.kind.value


def plan_sections(document: ResumeDocument, rules: TemplateRules) -> Tuple[SectionPlan, ...]:
    """
    Plan the presented sections in canonical order, omitting empty ones.

    Args:
        document: Resume to present
        rules: Resolved template rules

    Returns:
        Tuple of SectionPlan, contact first
    """
    plans = []
    for kind in SectionKind.ordered():
        section_rules = rules.section(kind)
        if document.is_empty(kind) and not section_rules.print_when_empty:
            continue

        if kind is SectionKind.CONTACT:
            plans.append(_plan_contact(document, rules))
            continue

        plans.append(
            SectionPlan(
                kind=kind,
                heading=section_rules.heading or kind.value.title(),
                css_class=section_rules.css_class,
                entries=tuple(_entry_view(entry, rules) for entry in document.entries(kind)),
            )
        )
    return tuple(plans)


def contact_href(field: str, value: str) -> Optional[str]:
    """Link target for a contact value, or None when it is plain text."""
    if field == "email":
        return f"mailto:{value}"
    if field == "phone":
        dialable = "".join(ch for ch in value if ch.isdigit() or ch == "+")
        return f"tel:{dialable}" if dialable else None
    if value.lower().startswith(WEB_SCHEMES):
        return value
    if field in LINK_FIELDS:
        return f"https://{value}"
    return None


# ───────────────────────────────────────── helpers ──


def _plan_contact(document: ResumeDocument, rules: TemplateRules) -> SectionPlan:
    section_rules = rules.section(SectionKind.CONTACT)
    details = tuple(
        ContactDetail(field=key, value=value, href=contact_href(key, value))
        for key, value in document.contact_details()
        if key != "headline"
    )
    paragraphs = tuple(
        document.contact[key] for key in CONTACT_PARAGRAPH_FIELDS if key in document.contact
    )
    return SectionPlan(
        kind=SectionKind.CONTACT,
        heading=section_rules.heading or document.name,
        css_class=section_rules.css_class,
        subheading=document.contact.get("headline", ""),
        details=details,
        paragraphs=paragraphs,
    )


def _entry_view(entry, rules: TemplateRules) -> EntryView:
    join = rules.detail_separator.join

    if isinstance(entry, SkillCategory):
        return EntryView(heading=entry.name, inline_items=entry.items)

    if isinstance(entry, Job):
        return EntryView(
            heading=entry.title,
            subheading=entry.organization,
            meta=join(part for part in (entry.date_range, entry.location) if part),
            summary=entry.summary,
            inline_label=rules.technologies_label,
            inline_items=entry.technologies,
            bullets=entry.highlights,
        )

    if isinstance(entry, Project):
        return EntryView(
            heading=entry.name,
            link=entry.link,
            link_href=contact_href("link", entry.link) if entry.link else None,
            summary=entry.summary,
            bullets=entry.highlights,
        )

    if isinstance(entry, Education):
        return EntryView(
            heading=entry.institution,
            subheading=entry.credential,
            meta=join(part for part in (entry.date_range, entry.location) if part),
            bullets=entry.details,
        )

    raise TypeError(f"Unsupported entry type: {type(entry).__name__}")
