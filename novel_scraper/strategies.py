"""Extraction strategies: independent pure functions over raw HTML.

Every strategy returns ``None`` when it does not match, so adapters can chain
them in priority order. Body strategies return the selected markup fragment;
turning it into text is left to :func:`novel_scraper.text.normalize_fragment`.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Set, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup

DIGITS_RE = re.compile(r"(\d+)")
CLASS_ATTR_RE = re.compile(r"""\bclass\s*=\s*(["'])(.*?)\1""", re.DOTALL)


def _opening_tag_re(tag: str, marker: str) -> re.Pattern[str]:
    """Opening ``tag`` whose attributes contain ``marker`` anywhere."""
    return re.compile(rf"<{tag}\b[^>]*{re.escape(marker)}[^>]*>")


def _class_tokens(opening_tag: str) -> Set[str]:
    m = CLASS_ATTR_RE.search(opening_tag)
    return set(m.group(2).split()) if m else set()


def _find_opening_tag(
    html: str, tag: str, marker: str, exclude: Iterable[str] = ()
) -> Optional[re.Match[str]]:
    """First opening ``tag`` containing ``marker`` and none of the ``exclude`` classes."""
    excluded = set(exclude)
    for m in _opening_tag_re(tag, marker).finditer(html):
        if excluded.isdisjoint(_class_tokens(m.group(0))):
            return m
    return None


# ---------------------------------------------------------------------------
# Title strategies
# ---------------------------------------------------------------------------

def title_from_title_element(html: str, suffix: str = "") -> Optional[str]:
    """Text of the document ``<title>`` with the site-name suffix removed."""
    soup = BeautifulSoup(html, "lxml")
    if soup.title is None:
        return None
    text = soup.title.get_text()
    if suffix:
        text = text.replace(suffix, "")
    return text.strip() or None


def title_from_heading(html: str, tag: str, css_class: str) -> Optional[str]:
    """Text of the first ``tag`` element carrying ``css_class``."""
    soup = BeautifulSoup(html, "lxml")
    el = soup.find(tag, class_=css_class)
    if el is None:
        return None
    return el.get_text(" ", strip=True) or None


# ---------------------------------------------------------------------------
# Body strategies
# ---------------------------------------------------------------------------

def delimited_block(html: str, tag: str, marker: str) -> Optional[str]:
    """Inner markup of the first marked element, up to the first closing tag.

    Nested elements with the same tag name end the block early; use
    :func:`balanced_block` for wrappers that nest.
    """
    m = re.search(
        rf"<{tag}\b[^>]*{re.escape(marker)}[^>]*>(.*?)</{tag}>",
        html,
        re.DOTALL,
    )
    if m is None:
        return None
    return m.group(1)


def balanced_block(
    html: str, tag: str, marker: str, exclude: Iterable[str] = ()
) -> Optional[str]:
    """Inner markup of the first marked element, honoring same-name nesting.

    Counts every opening ``tag`` as +1 and every closing one as -1, starting
    at 1 for the marked element itself; the block ends at the closing tag that
    brings the counter to 0. Self-closing tags, comments and tag-like text in
    attribute values are not understood. Unterminated blocks run to the end of
    the document.

    Elements carrying any class in ``exclude`` are skipped when choosing the
    marked element, e.g. modifier classes that share the marker as a prefix.
    """
    start = _find_opening_tag(html, tag, marker, exclude)
    if start is None:
        return None

    depth = 1
    for m in re.finditer(rf"<(/?){tag}\b[^>]*>", html[start.end():]):
        depth += -1 if m.group(1) else 1
        if depth == 0:
            return html[start.end():start.end() + m.start()]
    return html[start.end():]


def all_blocks(html: str, tag: str, marker: str) -> Optional[str]:
    """Every marked element in document order, one per line."""
    blocks = re.findall(
        rf"<{tag}\b[^>]*{re.escape(marker)}[^>]*>.*?</{tag}>",
        html,
        re.DOTALL,
    )
    if not blocks:
        return None
    return "\n".join(blocks)


# ---------------------------------------------------------------------------
# Chapter links
# ---------------------------------------------------------------------------

def chapter_links(
    html: str, pattern: Union[str, re.Pattern[str]], base_url: str
) -> List[str]:
    """Absolute URLs for every capture of ``pattern``, de-duplicated and sorted.

    The sort is a plain string sort, so ``/episodes/10`` comes before
    ``/episodes/9``. See :func:`numeric_order` for the alternative.
    """
    rx = re.compile(pattern) if isinstance(pattern, str) else pattern
    found = {urljoin(base_url, m.group(1)) for m in rx.finditer(html)}
    return sorted(found)


def _natural_key(url: str) -> list:
    return [int(part) if part.isdigit() else part for part in DIGITS_RE.split(url)]


def numeric_order(links: Iterable[str]) -> List[str]:
    """Sort links comparing embedded digit runs as numbers."""
    return sorted(links, key=_natural_key)
