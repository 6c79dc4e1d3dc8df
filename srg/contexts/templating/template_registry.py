"""
Template Registry

Static mapping from template name to rendering rules, plus a registry that
loads and caches the Jinja2 page templates those rules point at.

Adding a template means adding a TemplateRules value to BUILTIN_TEMPLATES and
its files under templates/{name}/.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from srg.contexts.templating.exceptions import TemplateNotFound as UnknownTemplate
from srg.contexts.templating.resume_data_structure import SectionKind

TEMPLATES_PATH = Path(__file__).resolve().parent / "templates"


@dataclass(frozen=True)
class SectionRules:
    """
    Per-section rendering rules.

    Attributes:
        heading: Heading text (None for contact, which is headed by the person's name)
        css_class: CSS class of the section element (also the layout style hook)
        print_when_empty: Whether an empty section is still emitted
    """

    heading: Optional[str]
    css_class: str
    print_when_empty: bool = False


@dataclass(frozen=True)
class PageRules:
    """Page geometry in inches handed to the PDF encoder."""

    width_in: float = 8.5
    height_in: float = 11.0
    margin_in: float = 0.4


@dataclass(frozen=True)
class TemplateRules:
    """
    Complete rule set for one named template.

    Attributes:
        name: Template name
        page_template: Jinja2 template path relative to the templates directory
        stylesheet: Stylesheet path relative to the templates directory
        sections: SectionRules for every SectionKind
        item_separator: Joins inline items (skill lists)
        detail_separator: Joins short details (contact line, dates and location)
        technologies_label: Label in front of a job's technologies
        page: Page geometry for PDF output
    """

    name: str
    page_template: str
    stylesheet: str
    sections: Mapping[SectionKind, SectionRules]
    item_separator: str = ", "
    detail_separator: str = " · "
    technologies_label: str = "Technologies"
    page: PageRules = field(default_factory=PageRules)

    def section(self, kind: SectionKind) -> SectionRules:
        return self.sections[kind]


MINIMAL = TemplateRules(
    name="minimal",
    page_template="minimal/resume.html.jinja",
    stylesheet="minimal/style.css",
    sections=MappingProxyType(
        {
            SectionKind.CONTACT: SectionRules(heading=None, css_class="section-contact"),
            SectionKind.SKILLS: SectionRules(heading="Skills", css_class="section-skills"),
            SectionKind.EXPERIENCE: SectionRules(heading="Experience", css_class="section-experience"),
            SectionKind.PROJECTS: SectionRules(heading="Projects", css_class="section-projects"),
            SectionKind.EDUCATION: SectionRules(heading="Education", css_class="section-education"),
        }
    ),
)

BUILTIN_TEMPLATES: Mapping[str, TemplateRules] = MappingProxyType({MINIMAL.name: MINIMAL})


def available_templates() -> Tuple[str, ...]:
    """Names of the built-in templates, sorted."""
    return tuple(sorted(BUILTIN_TEMPLATES))


def resolve(name: str) -> TemplateRules:
    """
    Look up the rules for a template name.

    Args:
        name: Template name (e.g., "minimal")

    Returns:
        TemplateRules for the template

    Raises:
        TemplateNotFound: If no template is registered under that name
    """
    try:
        return BUILTIN_TEMPLATES[name]
    except KeyError:
        raise UnknownTemplate(name, available_templates()) from None


class TemplateRegistry:
    """
    Registry for loading and caching the Jinja2 templates used for HTML output.

    Templates live in srg/contexts/templating/templates/{template_name}/ and are
    rendered with autoescaping on, so every value coming from a resume is HTML-escaped.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Base path for template directories. Defaults to the
                           templates/ directory shipped with the package
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = templates_path
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def get_template(self, template_path: str) -> Template:
        """
        Get a template by path, loading and caching it if necessary.

        Args:
            template_path: Path relative to the templates directory (e.g., 'minimal/resume.html.jinja')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If the template file doesn't exist
        """
        if template_path in self._cache:
            return self._cache[template_path]

        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template file not found at {self.templates_path / template_path}"
            ) from e

        self._cache[template_path] = template
        return template

    def get_page_template(self, rules: TemplateRules) -> Template:
        """Get the page template a rule set renders with."""
        return self.get_template(rules.page_template)

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, template_path: str) -> bool:
        """
        Check if a template is in the cache.

        Args:
            template_path: Path relative to the templates directory

        Returns:
            True if cached, False otherwise
        """
        return template_path in self._cache
