"""Command-line interface for novel-scraper."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

import httpx

from .config import Settings
from .crawl import run_crawl
from .report import CrawlReport
from .sources import InvalidSourceURLError, default_registry

logger = logging.getLogger(__name__)

EPILOG = """\
supported sites:
  ncode.syosetu.com   小説家になろう  (all chapters)
  kakuyomu.jp         カクヨム        (first 3 chapters unless --all/--limit)

examples:
  novel-scraper https://ncode.syosetu.com/n9734kw/
  novel-scraper https://kakuyomu.jp/works/16818792437247508583

output:
  novel_output/ncode/     index.html, content.txt, chapter_NNN.txt
  novel_output/kakuyomu/  index.html, content.txt, chapter_NNN.txt
"""


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater: {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(
        prog="novel-scraper",
        description="Download a web novel's chapters as plain text.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("url", help="Novel URL (https only, supported sites below)")
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    limits = p.add_mutually_exclusive_group()
    limits.add_argument(
        "--all",
        action="store_true",
        help="Download every discovered chapter",
    )
    limits.add_argument(
        "--limit",
        type=_non_negative_int,
        default=None,
        metavar="N",
        help="Download at most N chapters",
    )

    p.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output root (default: novel_output)",
    )
    p.add_argument(
        "--delay",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Delay between chapter requests (default: 1.0)",
    )
    p.add_argument(
        "--order",
        choices=["lexicographic", "numeric"],
        default=None,
        help="Chapter order (default: lexicographic URL order)",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Print the crawl result as JSON instead of a text report",
    )
    return p


def _configure_logging(verbose: bool) -> None:
    """Set up root logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: Dict[str, Any] = {}
    if args.output_dir is not None:
        overrides["output_root"] = args.output_dir
    if args.delay is not None:
        overrides["chapter_delay_seconds"] = args.delay
    if args.order is not None:
        overrides["chapter_order"] = args.order
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    settings = _settings_from_args(args)
    registry = default_registry(settings)

    try:
        request = registry.resolve(args.url)
    except InvalidSourceURLError as exc:
        logger.error("%s", exc)
        return 1

    try:
        result = run_crawl(
            request,
            settings=settings,
            chapter_limit=args.limit,
            all_chapters=args.all,
        )
    except httpx.HTTPError as exc:
        logger.error("Failed to fetch %s: %s", args.url, exc)
        return 1
    except OSError as exc:
        logger.error("Failed to write output: %s", exc)
        return 1

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        print(CrawlReport.from_result(result).summary())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
