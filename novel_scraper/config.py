"""Configuration for novel-scraper using pydantic-settings.

All settings are driven by environment variables with the NOVEL_SCRAPER_
prefix, optionally read from a local .env file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class Settings(BaseSettings):
    """Scraper configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NOVEL_SCRAPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    output_root: Path = Path("novel_output")

    user_agent: str = DEFAULT_USER_AGENT

    chapter_delay_seconds: float = 1.0
    # None means no timeout: a hung connection stalls the run.
    timeout_total: Optional[float] = None

    max_attempts: int = 1
    backoff_multiplier: float = 1.0
    backoff_min: float = 1.0
    backoff_max: float = 30.0

    sample_chapter_limit: int = 3
    chapter_order: Literal["lexicographic", "numeric"] = "lexicographic"

    def output_dir(self, namespace: str) -> Path:
        """Return the output directory for a source namespace."""
        return self.output_root / namespace

    def ensure_dir(self, namespace: str) -> Path:
        """Create the namespace output directory if it doesn't exist."""
        path = self.output_dir(namespace)
        path.mkdir(parents=True, exist_ok=True)
        logger.debug("Ensured directory: %s", path)
        return path


def get_settings() -> Settings:
    """Load settings from the environment."""
    return Settings()
