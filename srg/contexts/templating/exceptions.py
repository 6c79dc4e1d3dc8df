"""Custom exceptions for the templating context."""

from typing import Iterable

from jinja2 import TemplateNotFound as JinjaTemplateNotFound


class TemplateNotFound(JinjaTemplateNotFound):
    """
    Exception raised when a template name is not registered.

    Raised by the registry before any rendering work begins. Subclasses Jinja2's
    TemplateNotFound so callers handling template lookups catch both.

    Attributes:
        name: Requested template name
        available: Names of the registered templates
    """

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.available = tuple(available)

        parts = [f"Unknown template '{name}'"]
        if self.available:
            parts.append(f"Available templates: {', '.join(self.available)}")

        super().__init__(name, ". ".join(parts))
