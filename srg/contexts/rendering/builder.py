"""
Build Orchestration

Runs the whole pipeline for one resume file: template lookup, parsing, HTML
rendering, layout projection and PDF encoding.

Every artifact is produced in memory first. The output directory is created
and files are written only once rendering has succeeded, and the files are
renamed into place together, so a failed build never leaves partial output
behind.
"""

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from srg.contexts.intake import Diagnostic, ParseError, parse_file
from srg.contexts.intake.logger import log_diagnostics
from srg.contexts.rendering.logger import (
    _log_debug,
    log_build_failure,
    log_build_result,
    log_build_start,
)
from srg.contexts.rendering.pdf_writer import encode_pdf
from srg.contexts.templating import render_resume, resolve
from srg.utils.pdf_processing import page_count

HTML_FILENAME = "index.html"
PDF_FILENAME = "resume.pdf"


@dataclass
class BuildResult:
    """
    Result of building one resume.

    Attributes:
        success: Whether every requested artifact was written
        html_path: Path to the written HTML page
        pdf_path: Path to the written PDF (None when PDF output is disabled)
        diagnostics: Warnings reported while parsing, in source order
        errors: Error messages (empty on success)
        page_count: Number of pages in the written PDF (None if not available)
    """

    success: bool
    html_path: Optional[Path] = None
    pdf_path: Optional[Path] = None
    diagnostics: Tuple[Diagnostic, ...] = ()
    errors: List[str] = field(default_factory=list)
    page_count: Optional[int] = None

    @property
    def warnings(self) -> Tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if not d.is_fatal)


def build_resume(
    input_path: Path,
    out_dir: Path,
    template_name: str = "minimal",
    write_pdf: bool = True,
    strict: bool = False,
) -> BuildResult:
    """
    Build index.html and resume.pdf from a JOBL file.

    Args:
        input_path: JOBL source file
        out_dir: Directory receiving the artifacts (created if missing)
        template_name: Registered template name
        write_pdf: Also encode and write resume.pdf
        strict: Treat parse warnings as fatal

    Returns:
        BuildResult with written paths, diagnostics and PDF page count

    Raises:
        TemplateNotFound: If the template is not registered (nothing is read or written)
        ParseError: If the input cannot be parsed, including warnings in strict mode
        OSError: If the input cannot be read or the output cannot be written
    """
    input_path = Path(input_path)
    out_dir = Path(out_dir)

    rules = resolve(template_name)
    log_build_start(input_path, out_dir, rules.name)
    start_time = time.time()

    try:
        parsed = parse_file(input_path)
    except ParseError as e:
        log_diagnostics(input_path.name, e.diagnostics)
        log_build_failure(input_path, e, time.time() - start_time)
        raise

    log_diagnostics(input_path.name, parsed.diagnostics)
    if strict and parsed.has_warnings:
        try:
            parsed.raise_for_warnings()
        except ParseError as e:
            log_build_failure(input_path, e, time.time() - start_time)
            raise

    rendered = render_resume(parsed.document, rules)
    artifacts = {HTML_FILENAME: rendered.html.encode("utf-8")}
    if write_pdf:
        artifacts[PDF_FILENAME] = encode_pdf(rendered.layout)
    _log_debug(f"Rendered {len(rendered.html)} bytes of HTML, sections: {', '.join(rendered.layout.section_ids)}")

    written = _write_artifacts(out_dir, artifacts)

    result = BuildResult(success=True, html_path=written[HTML_FILENAME], diagnostics=parsed.diagnostics)
    if PDF_FILENAME in written:
        result.pdf_path = written[PDF_FILENAME]
        result.page_count = page_count(result.pdf_path)

    log_build_result(result, time.time() - start_time)
    return result


def _write_artifacts(out_dir: Path, artifacts: Dict[str, bytes]) -> Dict[str, Path]:
    """
    Write every artifact or none of them.

    Each file is first written under a temporary name, then renamed into place.
    If any step fails, temporary files and already renamed artifacts are removed
    before the error propagates.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    staged = {name: out_dir / f".{name}.tmp" for name in artifacts}
    written: Dict[str, Path] = {}

    try:
        for name, content in artifacts.items():
            staged[name].write_bytes(content)
        for name, temp_path in staged.items():
            target = out_dir / name
            os.replace(temp_path, target)
            written[name] = target
    except OSError:
        for path in list(staged.values()) + list(written.values()):
            path.unlink(missing_ok=True)
        raise

    return written
