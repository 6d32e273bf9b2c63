"""Shared test fixtures for novel-scraper tests."""

from pathlib import Path
from typing import Callable, Iterable

import pytest

from novel_scraper.config import Settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings writing under a temporary output root, with a short delay."""
    return Settings(output_root=tmp_path / "out", chapter_delay_seconds=0.5)


@pytest.fixture
def ncode_listing_html() -> str:
    """ncode table of contents with duplicate links and a foreign work."""
    return """
    <html><head><title>テスト小説 - 小説家になろう</title></head><body>
    <h1 class="p-novel__title">テスト小説</h1>
    <div class="p-eplist">
        <a href="/n9734kw/1/" class="p-eplist__subtitle">第一話</a>
        <a href="/n9734kw/2/" class="p-eplist__subtitle">第二話</a>
        <a href="/n9734kw/2/">第二話（再掲）</a>
        <a href="https://ncode.syosetu.com/n9734kw/3/">第三話</a>
    </div>
    <div class="p-recommend"><a href="/n1111aa/1/">別作品</a></div>
    </body></html>
    """


@pytest.fixture
def ncode_chapter_html() -> str:
    """ncode chapter: preface, main text with a nested div, then afterword."""
    return """
    <html><head><title>第一話 出発 - 小説家になろう</title></head><body>
    <h1 class="p-novel__title p-novel__title--rensai">第一話 出発</h1>
    <div class="js-novel-text p-novel__text p-novel__text--preface">
        <p id="Lp1">前書きです</p>
    </div>
    <div class="js-novel-text p-novel__text">
        <p id="L1">一行目&amp;続き</p>
        <div class="p-novel__ruby"><p>挿話</p></div>
        <p id="L2"><br /></p>
        <p id="L3">最後の行</p>
    </div>
    <div class="js-novel-text p-novel__text p-novel__text--afterword">
        <p id="La1">後書きです</p>
    </div>
    <div class="c-pager">次へ</div>
    </body></html>
    """


@pytest.fixture
def kakuyomu_episode_html() -> str:
    """kakuyomu episode page."""
    return """
    <html><head><title>第1話 - カクヨム</title></head><body>
    <div class="widget-episodeBody js-episode-body">
        <p id="p1" class="widget-episodeBody-paragraph">吾輩は猫である。</p>
        <p id="p2" class="widget-episodeBody-paragraph blank"><br /></p>
        <p id="p3" class="widget-episodeBody-paragraph">名前はまだ無い。</p>
    </div>
    </body></html>
    """


def _kakuyomu_listing(episode_ids: Iterable[int]) -> str:
    links = "\n".join(
        f'<a href="/works/123/episodes/{i}">第{i}話</a>' for i in episode_ids
    )
    return f"""
    <html><head><title>テスト作品 - カクヨム</title></head><body>
    <h1 class="widget-workTitle">テスト作品</h1>
    <div class="widget-workEpisode">あらすじ<br>二行目&nbsp;</div>
    {links}
    </body></html>
    """


@pytest.fixture
def make_kakuyomu_listing() -> Callable[[Iterable[int]], str]:
    """Factory for kakuyomu work pages linking the given episode ids."""
    return _kakuyomu_listing


@pytest.fixture
def kakuyomu_listing_html() -> str:
    """kakuyomu work page with five episodes."""
    return _kakuyomu_listing(range(1, 6))


@pytest.fixture
def empty_html() -> str:
    """Empty HTML document."""
    return "<html><body></body></html>"
