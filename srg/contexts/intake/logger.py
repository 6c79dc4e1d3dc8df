"""
Intake context logger.

Provides logging interface for the intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from typing import Iterable

from loguru import logger

CONTEXT_PREFIX = "[intake]"


# Wrapper functions with automatic [intake] prefix


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_diagnostics(source_name: str, diagnostics: Iterable) -> None:
    """
    Log parse diagnostics for a source file, one line each.

    Args:
        source_name: File name shown in front of each diagnostic
        diagnostics: Diagnostic values in source order
    """
    for diagnostic in diagnostics:
        if diagnostic.is_fatal:
            _log_error(f"{source_name}:{diagnostic}")
        else:
            _log_warning(f"{source_name}:{diagnostic}")
