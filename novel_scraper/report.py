"""End-of-run report: discovered chapters, outcomes, and produced files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .models import ChapterResult, ChapterStatus, CrawlResult
from .storage import OutputTree


@dataclass
class ChapterLine:
    """One row of the per-chapter outcome table."""

    ordinal: int
    url: str
    status: ChapterStatus
    title: str = ""

    @classmethod
    def from_result(cls, r: ChapterResult) -> "ChapterLine":
        return cls(ordinal=r.ordinal, url=r.url, status=r.status, title=r.title or "")

    def summary(self) -> str:
        mark = "OK" if self.status is ChapterStatus.OK else "FAIL"
        line = f"[{mark}] chapter {self.ordinal:03d}: {self.status.value}"
        if self.title:
            line += f" \"{self.title}\""
        return line


@dataclass
class CrawlReport:
    """Aggregated report for a finished crawl."""

    source: str
    title: str
    output_dir: str
    chapter_links: List[str] = field(default_factory=list)
    chapters: List[ChapterLine] = field(default_factory=list)
    files: List[Tuple[str, int]] = field(default_factory=list)

    @classmethod
    def from_result(cls, result: CrawlResult) -> "CrawlReport":
        return cls(
            source=result.source,
            title=result.title,
            output_dir=str(result.output_dir),
            chapter_links=list(result.chapter_links),
            chapters=[ChapterLine.from_result(c) for c in result.chapters],
            files=OutputTree(result.output_dir).files(),
        )

    @property
    def saved_count(self) -> int:
        return sum(1 for c in self.chapters if c.status is ChapterStatus.OK)

    @property
    def failed_count(self) -> int:
        return sum(1 for c in self.chapters if c.status is not ChapterStatus.OK)

    def summary(self) -> str:
        lines = [f"Title: {self.title}"]

        if self.chapter_links:
            lines.append(f"\n=== Chapters ({len(self.chapter_links)} found) ===")
            lines.extend(
                f"{i:>4}: {url}" for i, url in enumerate(self.chapter_links, 1)
            )
        else:
            lines.append("\nNo chapter links found; saved as a single page.")

        if self.chapters:
            lines.append("")
            lines.extend(c.summary() for c in self.chapters)
            lines.append(f"{self.saved_count} saved, {self.failed_count} failed")

        lines.append(f"\nOutput directory: {self.output_dir}")
        lines.append("Files:")
        lines.extend(f"  {name} ({size} bytes)" for name, size in self.files)
        return "\n".join(lines)
