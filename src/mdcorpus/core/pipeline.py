"""Pipeline step functions: check and export orchestration"""

import logging
from pathlib import Path

from mdcorpus.core.export import write_doc, write_index
from mdcorpus.core.load import check_dir, load_dir
from mdcorpus.core.models import LoadedDoc


LOGGER = logging.getLogger(__name__)


def _root(path: Path) -> Path:
    return path.parent if path.is_file() else path


def run_check(path: str) -> list[tuple[Path, ValueError]]:
    """Validate every document under path. Returns (path, error) for each failure."""
    failures = check_dir(Path(path))
    LOGGER.info("Checked %s: %d invalid file(s)", path, len(failures))
    return failures


def _check_unique_outputs(docs: list[LoadedDoc], root: Path) -> None:
    """Raise ValueError if two documents would be written to the same output file."""
    seen: dict[tuple[Path, str], Path] = {}
    for doc in docs:
        key = (doc.path.parent.relative_to(root), doc.slug)
        if key in seen:
            raise ValueError(
                f"Duplicate slug '{doc.slug}': {seen[key]} and {doc.path} would overwrite each other"
            )
        seen[key] = doc.path


def run_export(
    path: str,
    output_dir: Path,
    fmt: str = 'html',
    parser_config: str = 'gfm-like',
    workers: int = 1,
    ) -> list[tuple[str, Path]]:
    """Load path and write each document plus index.json. Returns (slug, page_path) pairs.

    Loading and the duplicate-slug check happen up front, so a bad corpus aborts
    before anything is written.
    """
    src = Path(path)
    root = _root(src)
    docs = load_dir(src, workers=workers)
    _check_unique_outputs(docs, root)
    results = []
    for doc in docs:
        page_path, _ = write_doc(doc, output_dir, fmt, parser_config, root)
        LOGGER.debug("Wrote %s -> %s", doc.path, page_path)
        results.append((doc.slug, page_path))
    if docs:
        write_index(docs, output_dir, root)
    return results
