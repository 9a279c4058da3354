import logging
from typing import Optional

from doccrawl.domain.crawl_options import ProgressCallback
from doccrawl.domain.crawl_result import CrawlResult, CrawlStatus
from doccrawl.domain.visited_tracker import VisitedTracker
from doccrawl.utils.glob_patterns import GlobMatcher

logger = logging.getLogger(__name__)


class CrawlSession:
    """
    State for a single crawl invocation.

    Created fresh by ``DocumentationCrawler.crawl()`` and passed down the
    traversal, so one crawler instance can serve concurrent crawls. Nothing
    in here is shared between invocations.
    """

    def __init__(
        self,
        seed_url: str,
        max_depth: int,
        category: str,
        name: str,
        rate_limiter,
        include: Optional[GlobMatcher] = None,
        exclude: Optional[GlobMatcher] = None,
        on_progress: Optional[ProgressCallback] = None,
    ):
        self.seed_url = seed_url
        self.max_depth = max_depth
        self.category = category
        self.name = name
        self.rate_limiter = rate_limiter
        self.include = include if include is not None else GlobMatcher()
        self.exclude = exclude if exclude is not None else GlobMatcher()
        self.on_progress = on_progress

        self.visited = VisitedTracker()
        self.discovered: set[str] = set()
        self.errors: list[str] = []
        self.saved_files: list[str] = []

    def is_visited(self, normalized_url: str) -> bool:
        return self.visited.is_visited(normalized_url)

    def mark_visited(self, normalized_url: str) -> None:
        self.visited.mark(normalized_url)

    def mark_discovered(self, normalized_url: str) -> bool:
        """Record a harvested link; return False if it was already discovered."""
        if normalized_url in self.discovered:
            return False
        self.discovered.add(normalized_url)
        return True

    def record_error(self, message: str) -> None:
        self.errors.append(message)

    def record_saved(self, path: str) -> None:
        self.saved_files.append(path)

    def snapshot(self, current_url: Optional[str] = None) -> CrawlStatus:
        return CrawlStatus(
            discovered=len(self.discovered),
            processed=len(self.visited),
            saved=len(self.saved_files),
            errors=len(self.errors),
            current_url=current_url,
        )

    def report_progress(self, current_url: str) -> None:
        """Invoke the progress callback; a failing callback never stops the crawl."""
        if self.on_progress is None:
            return
        try:
            self.on_progress(self.snapshot(current_url))
        except Exception:
            logger.exception("Progress callback failed for %s", current_url)

    def to_result(self) -> CrawlResult:
        return CrawlResult(
            success=not self.errors,
            stats=self.snapshot(),
            saved_files=tuple(self.saved_files),
            errors=tuple(self.errors),
            category=self.category,
            name=self.name,
        )
