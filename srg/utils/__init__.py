"""
Shared utilities for SRG.

Common functionality used across contexts:
- Logger setup
- PDF inspection
"""

from srg.utils.logger import setup_logger
from srg.utils.pdf_processing import page_count

__all__ = ["setup_logger", "page_count"]
