"""
Layout Projector

Projects a ResumeDocument into a page-agnostic LayoutTree for the PDF encoder.

The tree is built from the same section plan as the HTML renderer, so both
outputs always contain the same sections with the same content in the same
order. No positions, font metrics or page breaks are computed here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from srg.contexts.templating.resume_data_structure import ResumeDocument
from srg.contexts.templating.section_plan import SectionPlan, plan_sections
from srg.contexts.templating.template_registry import PageRules, TemplateRules


class BlockKind(str, Enum):
    SECTION = "section"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"


@dataclass(frozen=True)
class LayoutBlock:
    """
    One block of the layout tree.

    Attributes:
        kind: Block kind
        role: Style hook, mirrors the CSS class used in HTML output
        text: Text content (headings, paragraphs)
        level: Heading level (1 = document title, 2 = section, 3 = entry)
        items: List items (lists)
        href: Optional link target (paragraphs)
        children: Nested blocks (sections)
    """

    kind: BlockKind
    role: str = ""
    text: str = ""
    level: int = 0
    items: Tuple[str, ...] = ()
    href: Optional[str] = None
    children: Tuple["LayoutBlock", ...] = ()

    def walk(self) -> Iterator["LayoutBlock"]:
        """Yield this block and all descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class LayoutTree:
    """
    Ordered, page-agnostic layout of a resume.

    Attributes:
        title: Document title (the person's name)
        template: Name of the template the tree was projected with
        page: Page geometry for the PDF encoder
        sections: Section blocks in presentation order
    """

    title: str
    template: str
    page: PageRules
    sections: Tuple[LayoutBlock, ...] = ()

    @property
    def section_ids(self) -> Tuple[str, ...]:
        return tuple(section.role for section in self.sections)

    def walk(self) -> Iterator[LayoutBlock]:
        for section in self.sections:
            yield from section.walk()

    def text(self) -> str:
        """All text in reading order, one block per line (for search and tests)."""
        lines = []
        for block in self.walk():
            if block.text:
                lines.append(block.text)
            lines.extend(block.items)
        return "\n".join(lines)


def project_layout(document: ResumeDocument, rules: TemplateRules) -> LayoutTree:
    """
    Project a resume into a layout tree.

    Args:
        document: Resume to lay out
        rules: Resolved template rules

    Returns:
        LayoutTree mirroring the HTML renderer's sections and order
    """
    sections = tuple(_project_section(plan, rules) for plan in plan_sections(document, rules))
    return LayoutTree(title=document.name, template=rules.name, page=rules.page, sections=sections)


def _project_section(plan: SectionPlan, rules: TemplateRules) -> LayoutBlock:
    if plan.id == "contact":
        children = _contact_blocks(plan, rules)
    else:
        children = [LayoutBlock(BlockKind.HEADING, role="section-heading", text=plan.heading, level=2)]
        for entry in plan.entries:
            if plan.id == "skills":
                items = rules.item_separator.join(entry.inline_items)
                children.append(
                    LayoutBlock(BlockKind.PARAGRAPH, role="skills-category", text=f"{entry.heading}: {items}")
                )
                continue

            children.append(LayoutBlock(BlockKind.HEADING, role="entry-heading", text=entry.heading, level=3))
            if entry.subheading:
                children.append(LayoutBlock(BlockKind.PARAGRAPH, role="entry-subheading", text=entry.subheading))
            if entry.meta:
                children.append(LayoutBlock(BlockKind.PARAGRAPH, role="entry-meta", text=entry.meta))
            if entry.link:
                children.append(
                    LayoutBlock(BlockKind.PARAGRAPH, role="entry-link", text=entry.link, href=entry.link_href)
                )
            if entry.summary:
                children.append(LayoutBlock(BlockKind.PARAGRAPH, role="entry-summary", text=entry.summary))
            if entry.bullets:
                children.append(LayoutBlock(BlockKind.LIST, role="entry-highlights", items=entry.bullets))
            if entry.inline_items:
                items = rules.item_separator.join(entry.inline_items)
                text = f"{entry.inline_label}: {items}"
                children.append(LayoutBlock(BlockKind.PARAGRAPH, role="entry-technologies", text=text))

    return LayoutBlock(BlockKind.SECTION, role=plan.id, children=tuple(children))


def _contact_blocks(plan: SectionPlan, rules: TemplateRules) -> List[LayoutBlock]:
    blocks = [LayoutBlock(BlockKind.HEADING, role="contact-name", text=plan.heading, level=1)]
    if plan.subheading:
        blocks.append(LayoutBlock(BlockKind.PARAGRAPH, role="contact-headline", text=plan.subheading))
    if plan.details:
        blocks.append(
            LayoutBlock(
                BlockKind.PARAGRAPH,
                role="contact-details",
                text=rules.detail_separator.join(detail.value for detail in plan.details),
            )
        )
    for paragraph in plan.paragraphs:
        blocks.append(LayoutBlock(BlockKind.PARAGRAPH, role="contact-summary", text=paragraph))
    return blocks
