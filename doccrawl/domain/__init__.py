"""Domain objects for doccrawl - explicit re-exports to satisfy linters."""
from .categorization import CategorizationResult as CategorizationResult
from .crawl_options import CrawlOptions as CrawlOptions
from .crawl_result import CrawlResult as CrawlResult
from .crawl_result import CrawlStatus as CrawlStatus
from .crawl_session import CrawlSession as CrawlSession
from .document import DocumentMetadata as DocumentMetadata

__all__ = [
    "CategorizationResult",
    "CrawlOptions",
    "CrawlResult",
    "CrawlStatus",
    "CrawlSession",
    "DocumentMetadata",
]
