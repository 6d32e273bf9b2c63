"""Crawl orchestration: listing page, main content, then chapters in order.

One request is in flight at a time. A chapter's fetch is only issued after
the previous chapter has been extracted and written, with a fixed delay in
between.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, List, Optional

import httpx

from .adapters import SiteAdapter
from .config import Settings, get_settings
from .fetch import fetch_page
from .models import ChapterResult, ChapterStatus, CrawlResult, Page
from .sources import ResolvedRequest
from .storage import OutputTree
from .strategies import numeric_order

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Page]


class CrawlState(str, Enum):
    FETCH_LISTING = "FETCH_LISTING"
    EXTRACT_MAIN = "EXTRACT_MAIN"
    DISCOVER_CHAPTERS = "DISCOVER_CHAPTERS"
    DOWNLOAD_CHAPTERS = "DOWNLOAD_CHAPTERS"
    REPORT = "REPORT"
    DONE = "DONE"


class Crawler:
    """Runs one crawl for a resolved request.

    Args:
        settings: Scraper settings. Uses defaults if not provided.
        fetcher: ``url -> Page``. Defaults to :func:`fetch_page` with
            ``settings``.
        sleep: Called with the inter-chapter delay in seconds.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        fetcher: Optional[Fetcher] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings or get_settings()
        self._fetcher = fetcher
        self._sleep = sleep
        self.state = CrawlState.FETCH_LISTING

    def _fetch(self, url: str) -> Page:
        if self._fetcher is not None:
            return self._fetcher(url)
        return fetch_page(url, settings=self.settings)

    def _enter(self, state: CrawlState) -> None:
        logger.debug("State %s -> %s", self.state.value, state.value)
        self.state = state

    def _order(self, links: List[str]) -> List[str]:
        if self.settings.chapter_order == "numeric":
            return numeric_order(links)
        return links

    def run(
        self,
        request: ResolvedRequest,
        *,
        chapter_limit: Optional[int] = None,
        all_chapters: bool = False,
    ) -> CrawlResult:
        """Crawl ``request`` and write its output tree.

        Args:
            request: A URL already bound to its source.
            chapter_limit: Maximum chapters to download. Defaults to the
                source's own limit.
            all_chapters: Download every discovered chapter, ignoring limits.

        Returns:
            CrawlResult describing every attempted chapter.

        Raises:
            httpx.HTTPError: If the listing page cannot be fetched.
            ValueError: If ``chapter_limit`` is negative.
            OSError: If the listing or main content cannot be written.
        """
        if chapter_limit is not None and chapter_limit < 0:
            raise ValueError(f"chapter_limit must be 0 or greater, got {chapter_limit}")
        source = request.source
        adapter = source.adapter
        if all_chapters:
            limit = None
        elif chapter_limit is not None:
            limit = chapter_limit
        else:
            limit = source.chapter_limit

        self.state = CrawlState.FETCH_LISTING
        tree = OutputTree(self.settings.ensure_dir(source.namespace))
        logger.info("Scraping novel: %s", request.url)
        listing = self._fetch(request.url)
        tree.write_listing(listing.html)

        self._enter(CrawlState.EXTRACT_MAIN)
        main = adapter.extract(listing.html)
        logger.info("Title: %s", main.title)
        if main.is_empty:
            logger.error("Failed to extract main content from %s", request.url)
        else:
            tree.write_content(main.body)
            logger.info("Saved main content")

        self._enter(CrawlState.DISCOVER_CHAPTERS)
        links = self._order(adapter.extract_chapter_links(listing.html, work_url=request.url))

        chapters: List[ChapterResult] = []
        if not links:
            logger.info("No chapter links found; treated the listing page as a single page")
        else:
            self._enter(CrawlState.DOWNLOAD_CHAPTERS)
            selected = links if limit is None else links[:limit]
            logger.info(
                "Found %d chapters; downloading %d", len(links), len(selected)
            )
            for ordinal, url in enumerate(selected, 1):
                chapter = self._download_chapter(tree, adapter, ordinal, url)
                chapters.append(chapter)
                if chapter.status is not ChapterStatus.FETCH_FAILED and ordinal < len(selected):
                    self._sleep(self.settings.chapter_delay_seconds)

        self._enter(CrawlState.REPORT)
        result = CrawlResult(
            source=source.namespace,
            url=request.url,
            title=main.title,
            output_dir=tree.root,
            main_content_saved=not main.is_empty,
            chapter_links=links,
            chapters=chapters,
        )
        self._enter(CrawlState.DONE)
        logger.info(
            "Scraping complete: %d/%d chapters saved",
            len(result.succeeded), len(chapters),
        )
        return result

    def _download_chapter(
        self, tree: OutputTree, adapter: SiteAdapter, ordinal: int, url: str
    ) -> ChapterResult:
        """Fetch, extract and write one chapter. Failures are recorded, not raised."""
        logger.info("Downloading chapter %d: %s", ordinal, url)
        try:
            page = self._fetch(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Chapter %d: fetch failed: %s", ordinal, exc)
            return ChapterResult(
                ordinal=ordinal,
                url=url,
                status=ChapterStatus.FETCH_FAILED,
                error=str(exc),
            )

        try:
            content = adapter.extract(page.html)
        except Exception as exc:
            logger.exception("Chapter %d: content extraction raised", ordinal)
            return ChapterResult(
                ordinal=ordinal,
                url=url,
                status=ChapterStatus.EXTRACTION_FAILED,
                error=str(exc),
            )
        if content.is_empty:
            logger.error("Chapter %d: content extraction failed", ordinal)
            return ChapterResult(
                ordinal=ordinal,
                url=url,
                status=ChapterStatus.EXTRACTION_FAILED,
                title=content.title,
            )

        try:
            path = tree.write_chapter(ordinal, content.body)
        except OSError as exc:
            logger.error("Chapter %d: write failed: %s", ordinal, exc)
            return ChapterResult(
                ordinal=ordinal,
                url=url,
                status=ChapterStatus.WRITE_FAILED,
                title=content.title,
                error=str(exc),
            )
        logger.info("Chapter %d \"%s\" saved", ordinal, content.title)
        return ChapterResult(
            ordinal=ordinal,
            url=url,
            status=ChapterStatus.OK,
            title=content.title,
            path=path,
        )


def run_crawl(
    request: ResolvedRequest,
    *,
    settings: Optional[Settings] = None,
    chapter_limit: Optional[int] = None,
    all_chapters: bool = False,
) -> CrawlResult:
    """Crawl with the default fetcher."""
    return Crawler(settings).run(
        request, chapter_limit=chapter_limit, all_chapters=all_chapters
    )
