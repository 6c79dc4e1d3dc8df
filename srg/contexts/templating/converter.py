"""
Render orchestration.

Resolves a template by name (failing fast on unknown names) and produces the
HTML string and layout tree for one resume.
"""

from dataclasses import dataclass
from typing import Union

from srg.contexts.templating.html_renderer import render_html
from srg.contexts.templating.layout_projector import LayoutTree, project_layout
from srg.contexts.templating.resume_data_structure import ResumeDocument
from srg.contexts.templating.template_registry import TemplateRegistry, TemplateRules, resolve


@dataclass(frozen=True)
class RenderedOutput:
    """
    Derived artifacts for one invocation.

    Attributes:
        html: Complete HTML page (written as index.html)
        layout: Layout tree (encoded as resume.pdf)
    """

    html: str
    layout: LayoutTree


def render_resume(
    document: ResumeDocument,
    template: Union[str, TemplateRules] = "minimal",
    registry: TemplateRegistry = None,
) -> RenderedOutput:
    """
    Render a resume to HTML and a layout tree.

    Args:
        document: Resume to render
        template: Template name or already resolved rules
        registry: Template registry for the HTML page template

    Returns:
        RenderedOutput with html and layout

    Raises:
        TemplateNotFound: If the template name is not registered (before any rendering)
    """
    rules = resolve(template) if isinstance(template, str) else template

    return RenderedOutput(
        html=render_html(document, rules, registry=registry),
        layout=project_layout(document, rules),
    )
