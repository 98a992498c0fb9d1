"""Export: render bodies to HTML, build sidecar JSON records and the corpus index"""

import html
import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from markdown_it import MarkdownIt

from mdcorpus.core.frontmatter import dump, format_date
from mdcorpus.core.models import DocumentRecord, LoadedDoc


PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<article>
{date}{content}</article>
</body>
</html>
"""


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _sort_key(value: Optional[date]) -> datetime:
    """Comparable aware datetime for a metadata date; naive values are read as UTC."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def sort_by_date(docs: list[LoadedDoc]) -> list[LoadedDoc]:
    """Newest first; docs whose date is missing or not a date go last, by slug."""
    dated = [d for d in docs if isinstance(d.date, date)]
    undated = [d for d in docs if not isinstance(d.date, date)]
    dated.sort(key=lambda d: (_sort_key(d.date), d.slug), reverse=True)
    undated.sort(key=lambda d: d.slug)
    return dated + undated


def _iso(value) -> Optional[str]:
    return format_date(value) if isinstance(value, date) else value


def render_html(doc: LoadedDoc, parser_config: str = 'gfm-like') -> str:
    """Render a document body into a standalone HTML page."""
    content = _make_parser(parser_config).render(doc.document.body)
    date_line = ""
    if isinstance(doc.date, date):
        stamp = format_date(doc.date)
        date_line = f'<time datetime="{stamp}">{stamp}</time>\n'
    return PAGE_TEMPLATE.format(title=html.escape(doc.title), date=date_line, content=content)


def build_record(doc: LoadedDoc, root: Optional[Path] = None) -> DocumentRecord:
    """Build the sidecar record; path is relative to root when given."""
    path = doc.path.relative_to(root) if root else doc.path
    return DocumentRecord(
        slug=doc.slug,
        path=path.as_posix(),
        hash=doc.hash,
        metadata=dict(doc.document.metadata),
        body=doc.document.body,
    )


def build_index(docs: list[LoadedDoc], root: Optional[Path] = None) -> list[dict]:
    """Summary entries for every document, newest first."""
    return [
        {
            "slug": d.slug,
            "title": d.title,
            "date": _iso(d.date),
            "path": (d.path.relative_to(root) if root else d.path).as_posix(),
        }
        for d in sort_by_date(docs)
    ]


def write_doc(
    doc: LoadedDoc,
    output_dir: Path,
    fmt: str = 'html',
    parser_config: str = 'gfm-like',
    root: Optional[Path] = None,
    ) -> tuple[Path, Path]:
    """Write the rendered page (or normalized Markdown) plus sidecar JSON for one document.

    Output path mirrors the source directory structure relative to root:
      output_dir / <relative parent> / doc.slug.{fmt|json}

    Returns (page_path, json_path).
    """
    rel_parent = doc.path.parent.relative_to(root) if root else Path()
    dest_dir = output_dir / rel_parent
    dest_dir.mkdir(parents=True, exist_ok=True)

    page_path = dest_dir / f"{doc.slug}.{fmt}"
    json_path = dest_dir / f"{doc.slug}.json"

    if fmt == 'html':
        page_path.write_text(render_html(doc, parser_config), encoding='utf-8')
    else:
        page_path.write_text(dump(doc.document), encoding='utf-8')
    json_path.write_text(build_record(doc, root).model_dump_json(indent=2), encoding='utf-8')
    return page_path, json_path


def write_index(docs: list[LoadedDoc], output_dir: Path, root: Optional[Path] = None) -> Path:
    """Write index.json listing every exported document."""
    output_dir.mkdir(parents=True, exist_ok=True)
    index_path = output_dir / "index.json"
    index_path.write_text(json.dumps(build_index(docs, root), indent=2), encoding='utf-8')
    return index_path
