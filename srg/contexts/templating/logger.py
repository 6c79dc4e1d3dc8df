"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_render_result(template_name: str, html_size: int, section_ids) -> None:
    """Log what a render produced."""
    _log_debug(f"Rendered with '{template_name}': {html_size} bytes of HTML")
    _log_debug(f"  Sections: {', '.join(section_ids) or '(none)'}")
