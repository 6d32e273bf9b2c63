"""Supported sources and URL validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlsplit

from .adapters import KakuyomuAdapter, NcodeAdapter, SiteAdapter
from .config import Settings, get_settings

logger = logging.getLogger(__name__)


class InvalidSourceURLError(ValueError):
    """The URL cannot be bound to a supported source."""


@dataclass(frozen=True)
class Source:
    """One supported site."""

    domain: str
    namespace: str
    adapter: SiteAdapter
    # None downloads every discovered chapter.
    chapter_limit: Optional[int] = None


@dataclass(frozen=True)
class ResolvedRequest:
    """A secure URL bound to exactly one source."""

    url: str
    source: Source


class SourceRegistry:
    """Maps exact domains to sources."""

    def __init__(self, sources: Iterable[Source]) -> None:
        self._sources: Dict[str, Source] = {}
        for source in sources:
            if source.domain in self._sources:
                raise ValueError(f"Duplicate source domain: {source.domain}")
            self._sources[source.domain] = source

    @property
    def domains(self) -> List[str]:
        return list(self._sources)

    def get(self, domain: str) -> Optional[Source]:
        return self._sources.get(domain)

    def resolve(self, url: str) -> ResolvedRequest:
        """Validate ``url`` and bind it to its source.

        Raises:
            InvalidSourceURLError: If the URL doesn't parse, isn't https, or
                its host is not exactly one of the registered domains.
        """
        try:
            parts = urlsplit(url)
            host = parts.hostname
        except ValueError as exc:
            raise InvalidSourceURLError(f"Invalid URL: {url} ({exc})") from exc

        if not parts.scheme or not host:
            raise InvalidSourceURLError(f"Invalid URL: {url}")

        if parts.scheme != "https":
            raise InvalidSourceURLError(f"Only https URLs are supported: {url}")

        # hostname is lower-cased by urlsplit; compare against the raw netloc host.
        raw_host = parts.netloc.rsplit("@", 1)[-1].split(":", 1)[0]
        source = self._sources.get(raw_host)
        if source is None:
            raise InvalidSourceURLError(
                f"Unsupported domain: {raw_host} "
                f"(supported: {', '.join(self.domains)})"
            )

        logger.debug("Resolved %s -> %s", url, source.namespace)
        return ResolvedRequest(url=url, source=source)


def default_registry(settings: Optional[Settings] = None) -> SourceRegistry:
    """The built-in sources: ncode (all chapters) and kakuyomu (sample)."""
    s = settings or get_settings()
    return SourceRegistry([
        Source(
            domain=NcodeAdapter.domain,
            namespace="ncode",
            adapter=NcodeAdapter(),
        ),
        Source(
            domain=KakuyomuAdapter.domain,
            namespace="kakuyomu",
            adapter=KakuyomuAdapter(),
            chapter_limit=s.sample_chapter_limit,
        ),
    ])
