"""
Templating Context

Responsibilities:
- Manages the resume document model shared by every context
- Holds the named template rules (the template registry)
- Renders the document model to HTML and projects it to a page layout

Owns: Resume document model, template rules, HTML and layout rendering
Never: Reads files or encodes PDF bytes
"""

from srg.contexts.templating.converter import RenderedOutput, render_resume
from srg.contexts.templating.exceptions import TemplateNotFound
from srg.contexts.templating.html_renderer import render_html
from srg.contexts.templating.layout_projector import (
    BlockKind,
    LayoutBlock,
    LayoutTree,
    project_layout,
)
from srg.contexts.templating.resume_data_structure import (
    Education,
    Job,
    Project,
    ResumeDocument,
    SectionKind,
    SkillCategory,
)
from srg.contexts.templating.template_registry import (
    BUILTIN_TEMPLATES,
    TemplateRegistry,
    TemplateRules,
    available_templates,
    resolve,
)

__all__ = [
    # Orchestration
    "render_resume",
    "RenderedOutput",
    # Renderers
    "render_html",
    "project_layout",
    "LayoutTree",
    "LayoutBlock",
    "BlockKind",
    # Template registry
    "BUILTIN_TEMPLATES",
    "TemplateRegistry",
    "TemplateRules",
    "TemplateNotFound",
    "available_templates",
    "resolve",
    # Data structure classes
    "ResumeDocument",
    "SectionKind",
    "SkillCategory",
    "Job",
    "Project",
    "Education",
]
