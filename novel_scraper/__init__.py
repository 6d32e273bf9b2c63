"""novel-scraper: download web novel chapters as plain text."""

from .adapters import KakuyomuAdapter, NcodeAdapter, SiteAdapter
from .config import Settings, get_settings
from .crawl import Crawler, CrawlState, run_crawl
from .fetch import fetch_page
from .models import (
    UNKNOWN_TITLE,
    ChapterResult,
    ChapterStatus,
    CrawlResult,
    ExtractedContent,
    Page,
)
from .report import CrawlReport
from .sources import (
    InvalidSourceURLError,
    ResolvedRequest,
    Source,
    SourceRegistry,
    default_registry,
)

__all__ = [
    "Settings",
    "get_settings",
    "fetch_page",
    "SiteAdapter",
    "NcodeAdapter",
    "KakuyomuAdapter",
    "Source",
    "SourceRegistry",
    "ResolvedRequest",
    "InvalidSourceURLError",
    "default_registry",
    "Crawler",
    "CrawlState",
    "run_crawl",
    "CrawlReport",
    "Page",
    "ExtractedContent",
    "ChapterStatus",
    "ChapterResult",
    "CrawlResult",
    "UNKNOWN_TITLE",
]
