"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from doccrawl import config as env
from doccrawl.services.categorizer import DocumentationCategorizer
from doccrawl.services.content_extractor import ContentExtractor
from doccrawl.services.crawl_policy import CrawlPolicy
from doccrawl.services.crawler import DocumentationCrawler
from doccrawl.services.rate_limiter import RateLimiter
from doccrawl.services.renderer import PlaywrightHeadlessOptions, RendererFactory
from doccrawl.services.settings_loader import SettingsLoader
from doccrawl.services.storage import DocumentStorage


# Environment variables used by the container (read via `doccrawl.config` helpers).
#
# DOCS_BASE_PATH (str, default: "./docs")
#   Root folder for saved documentation: {DOCS_BASE_PATH}/{category}/{name}/*.md
#
# USER_AGENT (str, default: doccrawl UA string)
#   User-Agent sent by both renderers.
#
# PAGE_TIMEOUT_MS (int milliseconds, default: 30000)
#   Per-page render timeout.
#
# DEFAULT_MAX_DEPTH (int, default: 3) / DEFAULT_RATE_LIMIT (int per second, default: 2)
#   Used when a crawl request leaves max_depth / rate_limit unset.
#
# FETCH_MODE (str, default: "headless_chromium")
#   "headless_chromium" (Playwright) or "http" (requests). Normalized with `.strip().lower()`.
#
# DOCCRAWL_SETTINGS_FILE (str | optional)
#   YAML settings file merged over the values above; see SettingsLoader.
#
# DOCCRAWL_HOST (str, default: "127.0.0.1") / DOCCRAWL_PORT (int, default: 8000)
#   Bind address for `run.py`.
#
# DOCCRAWL_PLAYWRIGHT_WAIT_UNTIL (str, default: "networkidle")
#   Playwright navigation wait condition.
ENV = {
    "DOCS_BASE_PATH": env.DOCS_BASE_PATH,
    "USER_AGENT": env.USER_AGENT,
    "PAGE_TIMEOUT_MS": env.PAGE_TIMEOUT_MS,
    "DEFAULT_MAX_DEPTH": env.DEFAULT_MAX_DEPTH,
    "DEFAULT_RATE_LIMIT": env.DEFAULT_RATE_LIMIT,
    "FETCH_MODE": env.FETCH_MODE,
    "DOCCRAWL_SETTINGS_FILE": env.get_optional_str_env("DOCCRAWL_SETTINGS_FILE"),
    "DOCCRAWL_HOST": env.get_str_env("DOCCRAWL_HOST", "127.0.0.1"),
    "DOCCRAWL_PORT": env.get_int_env("DOCCRAWL_PORT", 8000),
    "DOCCRAWL_PLAYWRIGHT_WAIT_UNTIL": env.get_str_env("DOCCRAWL_PLAYWRIGHT_WAIT_UNTIL", "networkidle"),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for doccrawl."""

    # Configuration
    config = providers.Configuration(default=ENV)

    settings_loader = providers.Singleton(SettingsLoader)

    # Validated settings; env defaults merged with the optional YAML file
    settings = providers.Singleton(
        lambda loader, path: loader.load(path),
        settings_loader,
        config.DOCCRAWL_SETTINGS_FILE,
    )

    storage = providers.Singleton(
        DocumentStorage,
        base_path=settings.provided.docs_base_path,
    )

    categorizer = providers.Singleton(DocumentationCategorizer)

    content_extractor = providers.Singleton(ContentExtractor)

    crawl_policy = providers.Singleton(CrawlPolicy)

    renderer_factory = providers.Singleton(
        RendererFactory,
        headless_options=providers.Factory(
            PlaywrightHeadlessOptions,
            wait_until=config.DOCCRAWL_PLAYWRIGHT_WAIT_UNTIL.as_(str),
        ),
        http_session_factory=providers.Object(requests.Session),
    )

    crawler = providers.Factory(
        DocumentationCrawler,
        renderer_factory=renderer_factory,
        extractor=content_extractor,
        categorizer=categorizer,
        storage=storage,
        settings=settings.provided.crawler,
        crawl_policy=crawl_policy,
        rate_limiter_factory=providers.Object(RateLimiter),
    )
