"""
PDF Encoder

Turns a LayoutTree into PDF bytes with reportlab platypus flowables.
Pagination, line breaking and font metrics are left to reportlab.
"""

from io import BytesIO
from typing import Dict, List

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import ListFlowable, ListItem, Paragraph, SimpleDocTemplate, Spacer

from srg.contexts.templating.layout_projector import BlockKind, LayoutBlock, LayoutTree

TEXT_COLOR = colors.HexColor("#1f2328")
MUTED_COLOR = colors.HexColor("#57606a")
ACCENT_COLOR = colors.HexColor("#0b5cad")


def create_styles() -> Dict[str, ParagraphStyle]:
    """Paragraph styles keyed by layout role."""
    base = getSampleStyleSheet()
    body = ParagraphStyle("body", parent=base["Normal"], fontName="Helvetica", fontSize=10, leading=13, textColor=TEXT_COLOR)
    muted = ParagraphStyle("muted", parent=body, fontSize=9, leading=12, textColor=MUTED_COLOR)

    return {
        "body": body,
        "contact-name": ParagraphStyle(
            "contact-name", parent=body, fontName="Helvetica-Bold", fontSize=22, leading=26, alignment=TA_CENTER
        ),
        "contact-headline": ParagraphStyle(
            "contact-headline", parent=body, fontSize=12, leading=15, alignment=TA_CENTER, textColor=MUTED_COLOR
        ),
        "contact-details": ParagraphStyle("contact-details", parent=muted, alignment=TA_CENTER, spaceAfter=4),
        "contact-summary": ParagraphStyle("contact-summary", parent=body, spaceBefore=6),
        "section-heading": ParagraphStyle(
            "section-heading",
            parent=body,
            fontName="Helvetica-Bold",
            fontSize=12,
            leading=15,
            spaceBefore=10,
            spaceAfter=4,
        ),
        "skills-category": ParagraphStyle("skills-category", parent=body, spaceAfter=2),
        "entry-heading": ParagraphStyle(
            "entry-heading", parent=body, fontName="Helvetica-Bold", fontSize=11, leading=14, spaceBefore=4
        ),
        "entry-subheading": ParagraphStyle("entry-subheading", parent=body, fontName="Helvetica-Oblique"),
        "entry-meta": muted,
        "entry-link": ParagraphStyle("entry-link", parent=muted, textColor=ACCENT_COLOR),
        "entry-summary": ParagraphStyle("entry-summary", parent=body, spaceBefore=2),
        "entry-highlights": ParagraphStyle("entry-highlights", parent=body),
        "entry-technologies": ParagraphStyle("entry-technologies", parent=muted, spaceBefore=2),
    }


def _esc(text: str) -> str:
    """Escape text for reportlab Paragraph markup."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _attr(text: str) -> str:
    return _esc(text).replace('"', "&quot;")


def _flowables(block: LayoutBlock, styles: Dict[str, ParagraphStyle]) -> List:
    style = styles.get(block.role, styles["body"])

    if block.kind is BlockKind.SECTION:
        flowables = []
        for child in block.children:
            flowables.extend(_flowables(child, styles))
        return flowables

    if block.kind is BlockKind.LIST:
        items = [ListItem(Paragraph(_esc(item), style)) for item in block.items]
        return [ListFlowable(items, bulletType="bullet", start="•", leftIndent=12, bulletFontSize=8)]

    markup = _esc(block.text)
    if block.href:
        markup = f'<link href="{_attr(block.href)}">{markup}</link>'
    return [Paragraph(markup, style)]


def encode_pdf(layout: LayoutTree) -> bytes:
    """
    Encode a layout tree as PDF.

    Args:
        layout: Layout projected from a resume

    Returns:
        PDF file content
    """
    buffer = BytesIO()
    page = layout.page
    doc = SimpleDocTemplate(
        buffer,
        pagesize=(page.width_in * inch, page.height_in * inch),
        leftMargin=page.margin_in * inch,
        rightMargin=page.margin_in * inch,
        topMargin=page.margin_in * inch,
        bottomMargin=page.margin_in * inch,
        title=layout.title,
        author=layout.title,
    )

    styles = create_styles()
    story = []
    for index, section in enumerate(layout.sections):
        if index:
            story.append(Spacer(1, 4))
        story.extend(_flowables(section, styles))

    doc.build(story)
    return buffer.getvalue()
