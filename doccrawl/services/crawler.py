import logging
from typing import Callable, Optional

from doccrawl.domain.crawl_options import CrawlOptions
from doccrawl.domain.crawl_result import CrawlResult, CrawlStatus
from doccrawl.domain.crawl_session import CrawlSession
from doccrawl.domain.document import DocumentMetadata, render_document
from doccrawl.domain.settings import CrawlerSettings
from doccrawl.exceptions import EmptyContentError
from doccrawl.services.categorizer import DocumentationCategorizer
from doccrawl.services.content_extractor import ContentExtractor
from doccrawl.services.crawl_policy import CrawlPolicy
from doccrawl.services.rate_limiter import RateLimiter
from doccrawl.services.renderer import Renderer, RendererFactory
from doccrawl.services.storage import DocumentStorage
from doccrawl.utils.datetime_utils import utc_now_iso
from doccrawl.utils.glob_patterns import GlobMatcher
from doccrawl.utils.url_utils import extract_domain_name, normalize_url, url_to_filename

logger = logging.getLogger(__name__)

ALREADY_EXISTS_MESSAGE = "Documentation already exists. Use force_refresh to update."


class DocumentationCrawler:
    """Crawl a documentation site from its homepage into categorized markdown files.

    The crawler only holds collaborators and defaults. Everything that changes
    during a crawl lives in a ``CrawlSession`` and a renderer created inside
    ``crawl()``, so concurrent crawls on one instance do not interfere.
    """

    def __init__(
        self,
        *,
        renderer_factory: RendererFactory,
        extractor: ContentExtractor,
        categorizer: DocumentationCategorizer,
        storage: DocumentStorage,
        settings: CrawlerSettings,
        crawl_policy: Optional[CrawlPolicy] = None,
        rate_limiter_factory: Callable[[int], RateLimiter] = RateLimiter,
        clock: Callable[[], str] = utc_now_iso,
    ):
        self.renderer_factory = renderer_factory
        self.extractor = extractor
        self.categorizer = categorizer
        self.storage = storage
        self.settings = settings
        self.crawl_policy = crawl_policy or CrawlPolicy()
        self.rate_limiter_factory = rate_limiter_factory
        self.clock = clock

    def crawl(self, options: CrawlOptions) -> CrawlResult:
        """Crawl ``options.url`` and save every admitted page.

        Only a renderer start-up failure raises; every per-page problem ends
        up in ``CrawlResult.errors``.
        """
        max_depth = options.max_depth if options.max_depth is not None else self.settings.default_max_depth
        rate_limit = options.rate_limit if options.rate_limit is not None else self.settings.default_rate_limit

        renderer = self.renderer_factory.create(self.settings.fetch_mode)
        renderer.start()
        try:
            homepage_text = self._homepage_text(renderer, options.url)
            categorization = self.categorizer.categorize(options.url, homepage_text)
            category = categorization.category
            name = extract_domain_name(options.url)
            logger.info(
                "Crawling %s as %s/%s (confidence %.2f): %s",
                options.url, category, name, categorization.confidence, "; ".join(categorization.reasons),
            )

            if not options.force_refresh and self.storage.exists(self.storage.index_path(category, name)):
                logger.info("Documentation for %s/%s already exists; skipping crawl", category, name)
                return CrawlResult(
                    success=True,
                    stats=CrawlStatus(),
                    saved_files=(),
                    errors=(ALREADY_EXISTS_MESSAGE,),
                    category=category,
                    name=name,
                )

            session = CrawlSession(
                seed_url=options.url,
                max_depth=max_depth,
                category=category,
                name=name,
                rate_limiter=self.rate_limiter_factory(rate_limit),
                include=GlobMatcher(options.include_patterns),
                exclude=GlobMatcher(options.exclude_patterns),
                on_progress=options.on_progress,
            )
            self._crawl_from(options.url, 0, session, renderer)

            result = session.to_result()
            logger.info(
                "Crawl of %s finished: discovered=%s processed=%s saved=%s errors=%s",
                options.url, result.stats.discovered, result.stats.processed,
                result.stats.saved, result.stats.errors,
            )
            return result
        finally:
            renderer.close()

    def _homepage_text(self, renderer: Renderer, url: str) -> Optional[str]:
        """Render the seed page for categorization; None when it cannot be fetched."""
        try:
            html = self._render(renderer, url)
        except Exception as e:
            logger.warning("Could not fetch homepage %s for categorization: %s", url, e)
            return None
        return self.extractor.extract_text(html)

    def _render(self, renderer: Renderer, url: str) -> str:
        return renderer.render(url, self.settings.page_timeout_ms, self.settings.user_agent)

    def _crawl_from(self, url: str, depth: int, session: CrawlSession, renderer: Renderer) -> None:
        normalized = normalize_url(url)
        if self.crawl_policy.should_skip(url, normalized, depth, session):
            return
        session.mark_visited(normalized)

        try:
            session.rate_limiter.run(self._save_page, url, session, renderer)

            if depth < session.max_depth:
                for link in self._harvest_links(url, session, renderer):
                    if session.mark_discovered(normalize_url(link)):
                        self._crawl_from(link, depth + 1, session, renderer)
        except Exception as e:
            message = f"Failed to process {url}: {e}"
            session.record_error(message)
            logger.error(message)

    def _save_page(self, url: str, session: CrawlSession, renderer: Renderer) -> None:
        session.report_progress(url)

        html = self._render(renderer, url)
        title = self.extractor.extract_title(html, url)
        content = self.extractor.extract_content(html, url)
        if not content.strip():
            raise EmptyContentError(url)

        path = self.storage.document_path(session.category, session.name, url_to_filename(url))
        metadata = DocumentMetadata(
            title=title,
            url=url,
            date=self.clock(),
            category=session.category,
            name=session.name,
        )
        self.storage.write_file(path, render_document(metadata, content))
        session.record_saved(str(path))
        logger.info("Saved %s -> %s", url, path)

    def _harvest_links(self, url: str, session: CrawlSession, renderer: Renderer) -> list[str]:
        """Render ``url`` again and return its outbound links; empty on failure."""
        try:
            html = session.rate_limiter.run(self._render, renderer, url)
        except Exception as e:
            logger.warning("Failed to extract links from %s: %s", url, e)
            return []
        return self.extractor.extract_links(html, url)
