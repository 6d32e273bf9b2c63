"""Site adapters: per-site title, body and chapter-link extraction.

Each adapter is a bundle of strategies from :mod:`novel_scraper.strategies`
tried in priority order. Nothing here raises on unexpected markup; a miss
falls through to the next strategy and exhaustion yields a sentinel.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Tuple
from urllib.parse import urlsplit

from . import strategies
from .models import UNKNOWN_TITLE, ExtractedContent
from .text import normalize_fragment

logger = logging.getLogger(__name__)

BodyStrategy = Callable[[str], Optional[str]]


class SiteAdapter(ABC):
    """Extraction rules for one site's markup."""

    #: Host the adapter's relative links resolve against.
    domain: str = ""
    #: Text appended to every ``<title>`` by the site.
    title_suffix: str = ""
    #: ``(tag, css_class)`` of the site's title heading.
    title_heading: Tuple[str, str] = ("h1", "")

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}/"

    @abstractmethod
    def body_strategies(self) -> Sequence[Tuple[str, BodyStrategy]]:
        """Named body strategies, highest priority first."""

    @abstractmethod
    def extract_chapter_links(
        self, html: str, work_url: Optional[str] = None
    ) -> List[str]:
        """Absolute chapter URLs found in a listing page, sorted."""

    def extract_title(self, html: str) -> str:
        title = strategies.title_from_title_element(html, self.title_suffix)
        if title is None:
            tag, css_class = self.title_heading
            title = strategies.title_from_heading(html, tag, css_class)
        return title if title is not None else UNKNOWN_TITLE

    def extract_body(self, html: str) -> str:
        """Plain-text body from the first strategy that matches, or ``""``."""
        for name, strategy in self.body_strategies():
            fragment = strategy(html)
            if fragment is not None:
                logger.debug("%s: body matched by %s", self.domain, name)
                return normalize_fragment(fragment)
        logger.warning("%s: no body pattern matched", self.domain)
        return ""

    def extract(self, html: str) -> ExtractedContent:
        return ExtractedContent(
            title=self.extract_title(html),
            body=self.extract_body(html),
        )


class NcodeAdapter(SiteAdapter):
    """小説家になろう (ncode.syosetu.com)."""

    domain = "ncode.syosetu.com"
    title_suffix = " - 小説家になろう"
    title_heading = ("h1", "p-novel__title")

    WORK_CODE_RE = re.compile(r"^n\d{4}[a-z]+$", re.IGNORECASE)
    ANY_WORK_CODE = r"n\d{4}[a-z]+"

    #: Sibling divs that also carry ``p-novel__text`` but are not the chapter.
    ASIDE_CLASSES = ("p-novel__text--preface", "p-novel__text--afterword")

    def body_strategies(self) -> Sequence[Tuple[str, BodyStrategy]]:
        # Chapter text nests further divs, so only a balanced scan is safe.
        return [
            ("balanced p-novel__text",
             lambda html: strategies.balanced_block(
                 html, "div", "p-novel__text", exclude=self.ASIDE_CLASSES
             )),
        ]

    def work_code(self, work_url: Optional[str]) -> Optional[str]:
        """The ``nXXXXyy`` work code in a work URL, if there is one."""
        if not work_url:
            return None
        for segment in urlsplit(work_url).path.split("/"):
            if self.WORK_CODE_RE.match(segment):
                return segment
        return None

    def chapter_link_pattern(self, work_url: Optional[str] = None) -> str:
        code = self.work_code(work_url)
        code_re = re.escape(code) if code else self.ANY_WORK_CODE
        return rf'href="([^"]*{code_re}/\d+[^"]*)"'

    def extract_chapter_links(
        self, html: str, work_url: Optional[str] = None
    ) -> List[str]:
        links = strategies.chapter_links(
            html, self.chapter_link_pattern(work_url), self.base_url
        )
        # Share links elsewhere can embed the work path.
        return [url for url in links if urlsplit(url).netloc == self.domain]


class KakuyomuAdapter(SiteAdapter):
    """カクヨム (kakuyomu.jp)."""

    domain = "kakuyomu.jp"
    title_suffix = " - カクヨム"
    title_heading = ("h1", "widget-workTitle")

    CHAPTER_LINK_RE = re.compile(r'href="(/works/\d+/episodes/\d+)"')

    def body_strategies(self) -> Sequence[Tuple[str, BodyStrategy]]:
        return [
            # episode page
            ("delimited widget-episodeBody",
             lambda html: strategies.delimited_block(html, "div", "widget-episodeBody")),
            # work page
            ("delimited widget-workEpisode",
             lambda html: strategies.delimited_block(html, "div", "widget-workEpisode")),
            ("paragraphs widget-episodeBody-paragraph",
             lambda html: strategies.all_blocks(html, "p", "widget-episodeBody-paragraph")),
        ]

    def extract_chapter_links(
        self, html: str, work_url: Optional[str] = None
    ) -> List[str]:
        return strategies.chapter_links(html, self.CHAPTER_LINK_RE, self.base_url)
