"""
SRG - Static Resume Generator

Builds an HTML page and a PDF from a single JOBL resume file.

Architecture:
- Intake Context: JOBL lexing and document building
- Templating Context: Resume document model, template rules, HTML and layout rendering
- Rendering Context: PDF encoding and output management
"""

__version__ = "0.1.0"
