from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CrawlerSettings:
    """Defaults applied to every crawl unless the caller overrides them."""

    default_max_depth: int
    default_rate_limit: int
    page_timeout_ms: int
    user_agent: str
    fetch_mode: str


@dataclass(frozen=True)
class Settings:
    docs_base_path: str
    crawler: CrawlerSettings
