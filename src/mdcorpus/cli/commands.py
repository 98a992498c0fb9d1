"""mdcorpus command implementations: check, list, show, export"""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdcorpus.config import Settings, load_config
from mdcorpus.core.export import build_record, sort_by_date
from mdcorpus.core.frontmatter import format_date
from mdcorpus.core.load import LoadError, load_dir, load_file
from mdcorpus.core.pipeline import run_check, run_export


def _fail(msg: str, cause: Exception = None) -> None:
    """Report a corpus or config problem on stderr as `Error: ...` and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load mdcorpus settings; an invalid config.yaml or override ends the command."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _source(path: Optional[str], settings: Settings) -> Path:
    """Resolve the PATH argument, defaulting to the configured content directory."""
    src = Path(path or settings.content_dir)
    if not src.exists():
        _fail(f"Path not found: {src}")
    return src


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose logging")] = False,
    ):
    """Configure logging once for every command."""
    level = logging.DEBUG if verbose else _settings().log_level
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def check_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory to validate")] = None,
    ):
    """Validate every document is readable with well-formed front-matter; exit 1 otherwise."""
    src = _source(path, _settings())
    failures = run_check(str(src))
    for p, e in failures:
        typer.echo(f"Error: {p}: {e.message}", err=True)
    if failures:
        typer.echo(f"{len(failures)} invalid document(s)", err=True)
        raise typer.Exit(1)
    typer.echo(f"All documents in {src} are well-formed.")


def list_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory to list")] = None,
    ):
    """List documents newest first: date, slug, and title."""
    settings = _settings()
    src = _source(path, settings)
    try:
        docs = load_dir(src, workers=settings.workers)
    except LoadError as e:
        _fail(str(e))
    if not docs:
        typer.echo(f"No documents found in {src}.")
        raise typer.Exit(1)
    for doc in sort_by_date(docs):
        stamp = format_date(doc.date) if isinstance(doc.date, date) else str(doc.date or '-')
        typer.echo(f"{stamp}\t{doc.slug}\t{doc.title}")


def show_cmd(
    file: Annotated[str, typer.Argument(help="Markdown file to parse")],
    ):
    """Print one parsed document as JSON."""
    src = Path(file)
    if not src.is_file():
        _fail(f"Not a file: {src}")
    try:
        doc = load_file(src)
    except LoadError as e:
        _fail(str(e))
    typer.echo(build_record(doc).model_dump_json(indent=2))


def export_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory to export")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="html or md")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Files parsed in parallel")] = None,
    ):
    """Write rendered pages, sidecar JSON, and index.json to the output dir."""
    settings = _settings(overrides={
        "output_dir": out, "output_format": fmt,
        "parser_config": parser, "workers": workers,
    })
    src = _source(path, settings)
    output_dir = Path(settings.output_dir)
    try:
        results = run_export(
            str(src), output_dir, settings.output_format,
            settings.parser_config, settings.workers,
        )
    except ValueError as e:
        # unreadable or malformed file, or two documents sharing an output slug
        _fail(str(e))
    except OSError as e:
        _fail("Export failed", e)
    for slug, page_path in results:
        typer.echo(f"  {slug} -> {page_path}")
    typer.echo(f"Exported {len(results)} document(s) to {output_dir}/")
