"""Pydantic models shared across the scraper."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_TITLE = "unknown title"


class Page(BaseModel):
    """A fetched HTML document. Held in memory only."""

    url: str
    html: str
    status: int = 200


class ExtractedContent(BaseModel):
    """Title and body text extracted from a single page."""

    title: str = UNKNOWN_TITLE
    body: str = ""

    @property
    def is_empty(self) -> bool:
        """Return True when no body strategy matched."""
        return not self.body


class ChapterStatus(str, Enum):
    OK = "ok"
    EXTRACTION_FAILED = "extraction-failed"
    FETCH_FAILED = "fetch-failed"
    WRITE_FAILED = "write-failed"


class ChapterResult(BaseModel):
    """Outcome of one chapter download."""

    model_config = ConfigDict(frozen=True)

    ordinal: int
    url: str
    status: ChapterStatus
    title: Optional[str] = None
    path: Optional[Path] = None
    error: Optional[str] = None


class CrawlResult(BaseModel):
    """The outcome of one run, built once the run has finished."""

    model_config = ConfigDict(frozen=True)

    source: str
    url: str
    title: str
    output_dir: Path
    main_content_saved: bool = False
    chapter_links: List[str] = Field(default_factory=list)
    chapters: List[ChapterResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> List[ChapterResult]:
        return [c for c in self.chapters if c.status is ChapterStatus.OK]

    @property
    def failed(self) -> List[ChapterResult]:
        return [c for c in self.chapters if c.status is not ChapterStatus.OK]
