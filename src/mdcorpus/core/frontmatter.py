"""TOML-style `+++` front-matter parsing and re-serialization.

A content file may open with a block of ``key = value`` lines fenced by two
``+++`` delimiter lines. Everything after the closing delimiter is the body,
which is returned verbatim and never interpreted here.
"""

import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from mdcorpus.core.models import Document, MetaValue


LOGGER = logging.getLogger(__name__)

DELIMITER = '+++'
QUOTES = ('"', "'")
ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')
ISO_DATETIME_RE = re.compile(
    r'^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?(?:Z|[+-]\d{2}:\d{2})?$'
)


class MalformedFrontMatter(ValueError):
    """An opening `+++` delimiter has no matching closing delimiter."""

    def __init__(self, message: str, line: int = 1, path: Optional[Path] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message

    def with_path(self, path: Path) -> "MalformedFrontMatter":
        """Return a copy of this error attributed to the given file."""
        return MalformedFrontMatter(self.message, self.line, path)


def _is_delimiter(line: str) -> bool:
    return line.strip() == DELIMITER


def _coerce(value: str) -> MetaValue:
    """Unquote quoted strings; convert bare ISO-8601 dates and timestamps."""
    if len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]:
        return value[1:-1]
    try:
        if ISO_DATE_RE.match(value):
            return date.fromisoformat(value)
        if ISO_DATETIME_RE.match(value):
            return datetime.fromisoformat(value)
    except ValueError:
        # shaped like a date but not a real one (e.g. month 13)
        return value
    return value


def _parse_block(lines: list[str]) -> dict[str, MetaValue]:
    """Parse front-matter lines into a mapping; later keys overwrite earlier ones."""
    metadata: dict[str, MetaValue] = {}
    for lineno, line in enumerate(lines, start=2):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue
        if '=' not in stripped:
            LOGGER.debug("Skipping front-matter line %d without '=': %r", lineno, stripped)
            continue
        key, value = stripped.split('=', 1)
        metadata[key.strip()] = _coerce(value.strip())
    return metadata


def parse(text: str) -> Document:
    """Split text into front-matter metadata and body.

    Text that does not open with a `+++` line is all body. Raises
    MalformedFrontMatter if the opening delimiter is never closed.
    """
    lines = text.splitlines(keepends=True)
    if not text.startswith(DELIMITER) or not _is_delimiter(lines[0]):
        return Document(metadata={}, body=text)

    for i in range(1, len(lines)):
        if _is_delimiter(lines[i]):
            return Document(
                metadata=_parse_block(lines[1:i]),
                body=''.join(lines[i + 1:]),
            )
    raise MalformedFrontMatter(
        f"front-matter opened with '{DELIMITER}' on line 1 is never closed"
    )


def format_date(value: date) -> str:
    """ISO-8601 text for a date or datetime, writing a UTC offset as Z."""
    text = value.isoformat()
    if isinstance(value, datetime) and text.endswith('+00:00'):
        return text[:-6] + 'Z'
    return text


def _format_value(value: MetaValue) -> str:
    if isinstance(value, date):
        return format_date(value)
    return f'"{value}"'


def dump(document: Document) -> str:
    """Serialize a Document back to front-matter text; inverse of parse."""
    body = document.body
    body_opens_block = body.startswith(DELIMITER) and _is_delimiter(body.splitlines()[0])
    if not document.metadata and not body_opens_block:
        return body
    fm = ''.join(f"{k} = {_format_value(v)}\n" for k, v in document.metadata.items())
    return f"{DELIMITER}\n{fm}{DELIMITER}\n{body}"
