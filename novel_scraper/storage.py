"""Per-source output tree: index.html, content.txt, chapter_NNN.txt."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

logger = logging.getLogger(__name__)

LISTING_NAME = "index.html"
CONTENT_NAME = "content.txt"


def chapter_filename(ordinal: int) -> str:
    """``chapter_001.txt`` for ordinal 1."""
    return f"chapter_{ordinal:03d}.txt"


def _write_text_atomic(path: Path, text: str) -> Path:
    """Write text atomically via tmp-file rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(text, encoding="utf-8", newline="\n")
    tmp.replace(path)
    logger.debug("Wrote %s (%d chars)", path, len(text))
    return path


class OutputTree:
    """Files for one source namespace. Each run overwrites what it produces."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def write_listing(self, html: str) -> Path:
        return _write_text_atomic(self.root / LISTING_NAME, html)

    def write_content(self, text: str) -> Path:
        return _write_text_atomic(self.root / CONTENT_NAME, text)

    def write_chapter(self, ordinal: int, text: str) -> Path:
        return _write_text_atomic(self.root / chapter_filename(ordinal), text)

    def files(self) -> List[Tuple[str, int]]:
        """``(name, size in bytes)`` of every file in the tree, by name."""
        if not self.root.is_dir():
            return []
        return [
            (p.name, p.stat().st_size)
            for p in sorted(self.root.iterdir())
            if p.is_file()
        ]
