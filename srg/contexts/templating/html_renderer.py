"""
HTML Renderer

Renders a ResumeDocument into a complete HTML page with its stylesheet embedded.

Pure and deterministic: the output depends only on the document and the
template rules (no timestamps, no locale, no unordered iteration). Every value
is autoescaped by Jinja2.
"""

from srg.contexts.templating.logger import log_render_result
from srg.contexts.templating.resume_data_structure import ResumeDocument
from srg.contexts.templating.section_plan import plan_sections
from srg.contexts.templating.template_registry import TemplateRegistry, TemplateRules


def render_html(
    document: ResumeDocument,
    rules: TemplateRules,
    registry: TemplateRegistry = None,
) -> str:
    """
    Render a resume to an HTML string.

    Args:
        document: Resume to render
        rules: Resolved template rules
        registry: Template registry to load the page template from (default: packaged templates)

    Returns:
        Complete HTML document
    """
    registry = registry or TemplateRegistry()
    sections = plan_sections(document, rules)

    html = registry.get_page_template(rules).render(
        title=document.name,
        template_name=rules.name,
        stylesheet=rules.stylesheet,
        item_separator=rules.item_separator,
        sections=sections,
    )

    log_render_result(rules.name, len(html), [section.id for section in sections])
    return html
