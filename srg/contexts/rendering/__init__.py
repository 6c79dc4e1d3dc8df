"""
Rendering Context

Responsibilities:
- Encodes the layout tree as PDF
- Orchestrates a full build from a JOBL file to index.html and resume.pdf
- Writes output only after every artifact was produced in memory

Owns: PDF encoding, output files, build logging
Never: Parses JOBL or decides what a section contains
"""

from srg.contexts.rendering.builder import BuildResult, build_resume
from srg.contexts.rendering.pdf_writer import encode_pdf

__all__ = [
    "build_resume",
    "BuildResult",
    "encode_pdf",
]
