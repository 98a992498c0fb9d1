"""File discovery and document loading for a Markdown content corpus"""

import hashlib
import logging
import re
import unicodedata
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from mdcorpus.core.frontmatter import MalformedFrontMatter, parse
from mdcorpus.core.models import LoadedDoc


LOGGER = logging.getLogger(__name__)

MD_EXTENSIONS = {'.md', '.markdown'}


class UnreadableDocument(ValueError):
    """A corpus file could not be decoded as UTF-8 text."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


LoadError = (MalformedFrontMatter, UnreadableDocument)


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 of content, used to detect changed files."""
    return hashlib.sha256(content.encode('utf-8')).hexdigest()


def slugify(text: str) -> str:
    """Lowercase, ASCII-folded, hyphen-separated slug; 'doc' if nothing survives."""
    text = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    text = re.sub(r'[^\w\s-]', '', text.lower())
    text = re.sub(r'[\s_-]+', '-', text).strip('-')
    return text or 'doc'


def discover_files(path: Path) -> list[Path]:
    """Return sorted Markdown files under path, or [path] if it is a single Markdown file."""
    if path.is_file():
        return [path] if path.suffix.lower() in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in MD_EXTENSIONS)


def load_file(path: Path) -> LoadedDoc:
    """Read and parse one file; a leading BOM is dropped. Errors raised here name the file."""
    try:
        raw = path.read_text(encoding='utf-8-sig')
    except UnicodeDecodeError as e:
        raise UnreadableDocument(f"not valid UTF-8 (byte {e.start})", path) from e
    try:
        document = parse(raw)
    except MalformedFrontMatter as e:
        raise e.with_path(path) from e
    slug = document.metadata.get('slug')
    return LoadedDoc(
        path=path,
        slug=slugify(slug) if isinstance(slug, str) and slug else slugify(path.stem),
        raw=raw,
        hash=sha256(raw),
        document=document,
    )


def load_dir(path: Path, workers: int = 1) -> list[LoadedDoc]:
    """Load every Markdown file under path, in discovery order.

    Files are independent, so with workers > 1 they are parsed on a thread pool.
    The first load error encountered in discovery order is raised.
    """
    files = discover_files(path)
    LOGGER.debug("Loading %d file(s) from %s with %d worker(s)", len(files), path, workers)
    if workers <= 1 or len(files) < 2:
        return [load_file(p) for p in files]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(load_file, files))


def check_dir(path: Path) -> list[tuple[Path, ValueError]]:
    """Validate every file under path; return (path, error) for each unreadable or malformed one."""
    failures = []
    for p in discover_files(path):
        try:
            load_file(p)
        except LoadError as e:
            LOGGER.warning("%s", e)
            failures.append((p, e))
    return failures
