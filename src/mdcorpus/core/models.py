"""Data models for loaded documents and the JSON export contract"""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel


MetaValue = Union[str, date, datetime]


@dataclass(frozen=True)
class Document:
    """A parsed content file: front-matter metadata plus the verbatim Markdown body."""
    metadata: dict[str, MetaValue] = field(default_factory=dict)
    body: str = ""


@dataclass(frozen=True)
class LoadedDoc:
    """Internal load result for one file on disk; not exported as-is."""
    path:     Path
    slug:     str
    raw:      str              # full file content (includes front-matter)
    hash:     str              # sha256 of raw
    document: Document

    @property
    def title(self) -> str:
        return str(self.document.metadata.get('title') or self.slug)

    @property
    def date(self) -> Optional[MetaValue]:
        return self.document.metadata.get('date')


class DocumentRecord(BaseModel):
    """Public export contract written to the per-document sidecar JSON."""
    slug: str
    path: str
    hash: str
    metadata: dict[str, Any] = {}
    body: str
