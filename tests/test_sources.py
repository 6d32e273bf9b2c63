"""Unit tests for URL validation and the source registry."""

import pytest

from novel_scraper.adapters import KakuyomuAdapter, NcodeAdapter
from novel_scraper.config import Settings
from novel_scraper.sources import (
    InvalidSourceURLError,
    Source,
    SourceRegistry,
    default_registry,
)


@pytest.fixture
def registry() -> SourceRegistry:
    return default_registry(Settings())


class TestResolve:
    """Tests for SourceRegistry.resolve."""

    def test_ncode(self, registry: SourceRegistry) -> None:
        req = registry.resolve("https://ncode.syosetu.com/n9734kw/")
        assert req.url == "https://ncode.syosetu.com/n9734kw/"
        assert req.source.namespace == "ncode"
        assert isinstance(req.source.adapter, NcodeAdapter)

    def test_kakuyomu(self, registry: SourceRegistry) -> None:
        req = registry.resolve("https://kakuyomu.jp/works/16818792437247508583")
        assert req.source.namespace == "kakuyomu"
        assert isinstance(req.source.adapter, KakuyomuAdapter)

    def test_http_rejected(self, registry: SourceRegistry) -> None:
        with pytest.raises(InvalidSourceURLError, match="https"):
            registry.resolve("http://kakuyomu.jp/works/1")

    def test_unknown_domain_rejected(self, registry: SourceRegistry) -> None:
        with pytest.raises(InvalidSourceURLError, match="Unsupported domain: example.com") as exc:
            registry.resolve("https://example.com/works/1")
        assert "kakuyomu.jp" in str(exc.value)
        assert "ncode.syosetu.com" in str(exc.value)

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.kakuyomu.jp/works/1",
            "https://KAKUYOMU.JP/works/1",
            "https://syosetu.com/n9734kw/",
        ],
    )
    def test_exact_domain_only(self, registry: SourceRegistry, url: str) -> None:
        with pytest.raises(InvalidSourceURLError, match="Unsupported domain"):
            registry.resolve(url)

    @pytest.mark.parametrize(
        "url",
        ["", "not a url", "kakuyomu.jp/works/1", "https://", "https://[::1"],
    )
    def test_malformed(self, registry: SourceRegistry, url: str) -> None:
        with pytest.raises(InvalidSourceURLError):
            registry.resolve(url)

    def test_is_value_error(self, registry: SourceRegistry) -> None:
        with pytest.raises(ValueError):
            registry.resolve("ftp://kakuyomu.jp/")

    def test_port_and_userinfo_ignored(self, registry: SourceRegistry) -> None:
        req = registry.resolve("https://user@kakuyomu.jp:443/works/1")
        assert req.source.namespace == "kakuyomu"


class TestRegistry:
    """Tests for SourceRegistry construction."""

    def test_default_domains(self, registry: SourceRegistry) -> None:
        assert sorted(registry.domains) == ["kakuyomu.jp", "ncode.syosetu.com"]

    def test_default_limits(self) -> None:
        registry = default_registry(Settings(sample_chapter_limit=5))
        assert registry.get("ncode.syosetu.com").chapter_limit is None
        assert registry.get("kakuyomu.jp").chapter_limit == 5

    def test_duplicate_domain_raises(self) -> None:
        adapter = KakuyomuAdapter()
        with pytest.raises(ValueError, match="Duplicate"):
            SourceRegistry([
                Source(domain="kakuyomu.jp", namespace="a", adapter=adapter),
                Source(domain="kakuyomu.jp", namespace="b", adapter=adapter),
            ])

    def test_custom_source(self) -> None:
        registry = SourceRegistry([
            Source(domain="mirror.example", namespace="mirror", adapter=KakuyomuAdapter()),
        ])
        assert registry.resolve("https://mirror.example/works/1").source.namespace == "mirror"
        with pytest.raises(InvalidSourceURLError):
            registry.resolve("https://kakuyomu.jp/works/1")
