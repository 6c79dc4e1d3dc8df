#!/usr/bin/env python3
"""
Resume Build CLI

Builds a static HTML page and a PDF from a JOBL resume file.

Commands:
    build     - Build index.html and resume.pdf from a JOBL file
    check     - Parse a JOBL file and report diagnostics without writing anything
    templates - List the registered templates

Examples:\n

    srg build resume.jobl                          # Writes dist/index.html and dist/resume.pdf

    srg build resume.jobl -o site -t minimal       # Custom output directory and template

    srg build resume.jobl --strict --no-pdf        # Fail on warnings, HTML only

    srg check resume.jobl                          # Report diagnostics only
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from omegaconf.errors import OmegaConfBaseException
from typing_extensions import Annotated

from srg.config import load_settings
from srg.contexts.intake import ParseError, parse_file
from srg.contexts.rendering import build_resume
from srg.contexts.rendering.logger import setup_rendering_logger
from srg.contexts.templating import BUILTIN_TEMPLATES, TemplateNotFound, available_templates
from srg.utils.logger import setup_logger

# Maximum diagnostics echoed before summarizing the rest
MAX_LISTED = 10


def display_path(path: Path) -> str:
    """Return path relative to the working directory for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _echo_diagnostics(diagnostics, source_name: str) -> None:
    for diagnostic in diagnostics[:MAX_LISTED]:
        color = typer.colors.RED if diagnostic.is_fatal else typer.colors.YELLOW
        typer.secho(f"  {source_name}:{diagnostic}", fg=color)
    if len(diagnostics) > MAX_LISTED:
        typer.echo(f"  ... and {len(diagnostics) - MAX_LISTED} more")


app = typer.Typer(
    help="Build a static HTML resume and a PDF from a JOBL file",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("build")
def build_command(
    input_path: Annotated[
        Path,
        typer.Argument(help="JOBL resume file", exists=True, dir_okay=False, readable=True),
    ],
    out_dir: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output directory (default: dist)"),
    ] = None,
    template: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Template name (default: minimal)"),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML file with build settings"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Treat parse warnings as errors"),
    ] = False,
    no_pdf: Annotated[
        bool,
        typer.Option("--no-pdf", help="Only write index.html"),
    ] = False,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Directory for build logs (default: console only)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug output"),
    ] = False,
):
    """
    Build index.html and resume.pdf from a JOBL resume.

    Settings come from defaults, an optional --config file, SRG_* environment
    variables and finally these options.

    Examples:\n

        $ srg build resume.jobl                     # Build into dist/

        $ srg build resume.jobl -o public --no-pdf  # HTML only, into public/

        $ srg build resume.jobl --strict            # Fail on any warning
    """
    try:
        settings = load_settings(
            config_path,
            out_dir=out_dir,
            template=template,
            logs_path=log_dir,
            strict=strict or None,
            write_pdf=False if no_pdf else None,
        )
    except (FileNotFoundError, OmegaConfBaseException) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    session_dir = None
    if settings.log_dir is not None:
        session_dir = settings.log_dir / f"build_{datetime.now():%Y%m%d_%H%M%S}"
    log_file = setup_rendering_logger(session_dir, settings.template, verbose=verbose)

    typer.secho(f"\nBuilding: {input_path}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Template: {settings.template}")
    typer.echo("")

    try:
        result = build_resume(
            input_path=input_path,
            out_dir=settings.out_path,
            template_name=settings.template,
            write_pdf=settings.write_pdf,
            strict=settings.strict,
        )
    except TemplateNotFound as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except ParseError as e:
        typer.secho("✗ Build failed, no files were written", fg=typer.colors.RED, bold=True)
        _echo_diagnostics(e.diagnostics, input_path.name)
        typer.secho(f"Error: {input_path.name}:{e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho("✓ Build succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Warnings: {len(result.warnings)}")
    _echo_diagnostics(result.warnings, input_path.name)
    typer.echo(f"  HTML: {display_path(result.html_path)}")
    if result.pdf_path:
        typer.echo(f"  PDF: {display_path(result.pdf_path)} ({result.page_count} page(s))")
    if log_file:
        typer.echo(f"  Log: {display_path(log_file)}")
    typer.echo("")


@app.command("check")
def check_command(
    input_path: Annotated[
        Path,
        typer.Argument(help="JOBL resume file", exists=True, dir_okay=False, readable=True),
    ],
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with an error when there are warnings"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug output"),
    ] = False,
):
    """
    Parse a JOBL resume and report diagnostics without writing any files.

    Examples:\n

        $ srg check resume.jobl            # List warnings

        $ srg check resume.jobl --strict   # Non-zero exit on warnings
    """
    setup_logger(context_name="intake", verbose=verbose)

    try:
        parsed = parse_file(input_path)
    except ParseError as e:
        typer.secho(f"✗ {input_path.name} cannot be built", fg=typer.colors.RED, bold=True)
        _echo_diagnostics(e.diagnostics, input_path.name)
        typer.secho(f"Error: {input_path.name}:{e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    document = parsed.document
    typer.secho(f"✓ {input_path.name}: resume for {document.name}", fg=typer.colors.GREEN, bold=True)
    typer.echo(
        f"  {len(document.skills)} skill categories, {len(document.experience)} jobs, "
        f"{len(document.projects)} projects, {len(document.education)} education entries"
    )
    typer.echo(f"  Warnings: {len(parsed.warnings)}")
    _echo_diagnostics(parsed.warnings, input_path.name)

    raise typer.Exit(code=1 if strict and parsed.has_warnings else 0)


@app.command("templates")
def templates_command():
    """List the registered templates."""
    for name in available_templates():
        rules = BUILTIN_TEMPLATES[name]
        typer.echo(f"{name}\t{rules.page.width_in}x{rules.page.height_in}in, margin {rules.page.margin_in}in")


if __name__ == "__main__":
    app()
