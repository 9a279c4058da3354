import logging

from doccrawl.domain.crawl_session import CrawlSession
from doccrawl.utils.url_utils import is_same_domain

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Encapsulates crawl admission rules: dedup, depth limit, URL patterns and domain scope.

    Separates policy decisions from crawl orchestration logic. Every check is
    a predicate that never raises; malformed URLs simply fail to qualify.
    """

    def should_skip_due_to_visited(self, normalized_url: str, session: CrawlSession) -> bool:
        if session.is_visited(normalized_url):
            logger.debug("Skipping (visited) %s", normalized_url)
            return True
        return False

    def should_skip_due_to_depth(self, depth: int, max_depth: int) -> bool:
        """Check if URL should be skipped due to max depth reached."""
        if depth > max_depth:
            logger.debug("Skipping (max depth reached) at depth %s", depth)
            return True
        return False

    def should_skip_due_to_patterns(self, url: str, session: CrawlSession) -> bool:
        """Exclude patterns win over include patterns."""
        if session.include and not session.include.matches(url):
            logger.debug("Skipping (not included) %s", url)
            return True
        if session.exclude and session.exclude.matches(url):
            logger.debug("Skipping (excluded) %s", url)
            return True
        return False

    def should_skip_due_to_domain(self, url: str, session: CrawlSession) -> bool:
        if not is_same_domain(url, session.seed_url):
            logger.debug("Skipping (external) %s -> not same host as %s", url, session.seed_url)
            return True
        return False

    def should_skip(self, url: str, normalized_url: str, depth: int, session: CrawlSession) -> bool:
        return (
            self.should_skip_due_to_visited(normalized_url, session)
            or self.should_skip_due_to_depth(depth, session.max_depth)
            or self.should_skip_due_to_patterns(url, session)
            or self.should_skip_due_to_domain(url, session)
        )
