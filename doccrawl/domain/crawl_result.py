"""Crawl result data model."""
from typing import NamedTuple, Optional


class CrawlStatus(NamedTuple):
    """Counts for a crawl, used for progress snapshots and final stats."""

    discovered: int = 0
    """Distinct normalized links extracted from processed pages"""

    processed: int = 0
    """URLs admitted to processing (visited set size)"""

    saved: int = 0
    """Files written"""

    errors: int = 0
    """Per-page failures recorded"""

    current_url: Optional[str] = None
    """URL in flight when the snapshot was taken (progress callbacks only)"""


class CrawlResult(NamedTuple):
    """Result of one crawl invocation.

    Tuples rather than lists so the result cannot be mutated after return.
    """

    success: bool
    stats: CrawlStatus
    saved_files: tuple[str, ...]
    errors: tuple[str, ...]
    category: str
    name: str

    def to_dict(self) -> dict:
        stats = self.stats._asdict()
        stats.pop("current_url", None)
        return {
            "success": self.success,
            "stats": stats,
            "saved_files": list(self.saved_files),
            "errors": list(self.errors),
            "category": self.category,
            "name": self.name,
        }
