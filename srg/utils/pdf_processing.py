"""
PDF processing utilities.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_text: Plain text of every page, for checks on generated output.
"""

from pathlib import Path
from typing import Optional

from PyPDF2 import PdfReader


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def extract_text(pdf_path: Path) -> str:
    """Extract text from every page, pages separated by newlines."""
    reader = PdfReader(str(pdf_path))
    return "\n".join(page.extract_text() or "" for page in reader.pages)
