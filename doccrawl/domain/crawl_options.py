from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from doccrawl.domain.crawl_result import CrawlStatus


ProgressCallback = Callable[[CrawlStatus], None]


@dataclass(frozen=True)
class CrawlOptions:
    """Caller-supplied parameters for one crawl.

    ``max_depth`` and ``rate_limit`` left as None fall back to the crawler's
    configured defaults.
    """

    url: str
    max_depth: Optional[int] = None
    force_refresh: bool = False
    rate_limit: Optional[int] = None
    include_patterns: tuple[str, ...] = field(default_factory=tuple)
    exclude_patterns: tuple[str, ...] = field(default_factory=tuple)
    on_progress: Optional[ProgressCallback] = None

    def __post_init__(self):
        # callers may pass lists
        object.__setattr__(self, "include_patterns", tuple(self.include_patterns or ()))
        object.__setattr__(self, "exclude_patterns", tuple(self.exclude_patterns or ()))
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if self.rate_limit is not None and self.rate_limit < 1:
            raise ValueError("rate_limit must be >= 1")
