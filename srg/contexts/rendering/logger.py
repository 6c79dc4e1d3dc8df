"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from srg.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Optional[Path], template_name: str, verbose: bool = False) -> Optional[Path]:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this build session (None logs to the console only)
        template_name: Template recorded in the provenance header
        verbose: Show DEBUG messages on the console

    Returns:
        Path to log file, or None

    Example:
        from srg.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir, "minimal")
        _log_info("Starting build...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Template": template_name},
        verbose=verbose,
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_build_start(input_path: Path, out_dir: Path, template_name: str) -> None:
    """Log start of a build with context."""
    _log_info(f"Building {input_path.name} with template '{template_name}'")
    _log_debug(f"  Source: {input_path}")
    _log_debug(f"  Output directory: {out_dir}")


def log_build_result(
    result,  # BuildResult
    elapsed_time: float,
) -> None:
    """
    Log build result with written artifacts.

    Args:
        result: BuildResult from build_resume()
        elapsed_time: Time taken
    """
    _log_success(f"Build succeeded ({elapsed_time:.2f}s)")
    if result.warnings:
        _log_warning(f"  {len(result.warnings)} warning(s) reported; output may be incomplete")
    _log_info(f"  HTML: {result.html_path}")
    if result.pdf_path:
        _log_info(f"  PDF:  {result.pdf_path} ({result.page_count} page(s))")
    else:
        _log_debug("  PDF output disabled")


def log_build_failure(input_path: Path, error: Exception, elapsed_time: float) -> None:
    """Log a build aborted before any output was written."""
    _log_error(f"Build failed for {input_path.name} ({elapsed_time:.2f}s)")
    for line in str(error).splitlines():
        _log_error(f"  {line}")
