"""Renderers turn a URL into the HTML a reader would see.

A renderer is a *session*: ``start()`` acquires its resources (a browser or
an HTTP connection pool), ``render()`` may be called many times, ``close()``
releases everything. Each crawl owns exactly one renderer instance.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

import requests

from doccrawl.exceptions import RendererInitError, RenderError

logger = logging.getLogger(__name__)

HTTP_MODE = "http"
HEADLESS_MODE = "headless_chromium"
FETCH_MODES = (HTTP_MODE, HEADLESS_MODE)


class Renderer(Protocol):
    def start(self) -> None: ...

    def render(self, url: str, timeout_ms: int, user_agent: str) -> str: ...

    def close(self) -> None: ...


@dataclass(frozen=True)
class PlaywrightHeadlessOptions:
    wait_until: str = "networkidle"  # domcontentloaded | load | networkidle


class PlaywrightRenderer:
    """Renderer backed by a headless Chromium browser via Playwright.

    One browser is launched per session and every render opens (and closes)
    its own page, so JavaScript-heavy documentation is fully rendered.

    Playwright is imported lazily so installs without browsers can still use
    the plain HTTP renderer.
    """

    def __init__(self, options: Optional[PlaywrightHeadlessOptions] = None):
        self._options = options or PlaywrightHeadlessOptions()
        self._playwright = None
        self._browser = None

    def start(self) -> None:
        if self._browser is not None:
            return
        try:
            from playwright.sync_api import sync_playwright  # type: ignore
        except Exception as e:
            raise RendererInitError(
                HEADLESS_MODE,
                RuntimeError(
                    "Playwright is not installed. "
                    "Install 'playwright' and run 'python -m playwright install chromium'."
                ),
            ) from e

        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=True)
        except Exception as e:
            self.close()
            raise RendererInitError(HEADLESS_MODE, e) from e
        logger.debug("Headless browser started")

    def render(self, url: str, timeout_ms: int, user_agent: str) -> str:
        if self._browser is None:
            raise RenderError(url, RuntimeError("Browser not initialized"))
        page = self._browser.new_page(user_agent=user_agent)
        try:
            page.goto(url, wait_until=self._options.wait_until, timeout=timeout_ms)
            return page.content()
        except Exception as e:
            raise RenderError(url, e) from e
        finally:
            try:
                page.close()
            except Exception:
                logger.debug("Error closing page for %s", url, exc_info=True)

    def close(self) -> None:
        if self._browser is not None:
            try:
                self._browser.close()
            except Exception:
                logger.debug("Error closing browser", exc_info=True)
            self._browser = None
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception:
                logger.debug("Error stopping playwright", exc_info=True)
            self._playwright = None


class HttpRenderer:
    """Renderer that fetches raw HTML with ``requests`` (no JavaScript).

    Requires a session factory for dependency injection so tests never touch
    the network.
    """

    def __init__(self, session_factory: Callable[[], requests.Session] = requests.Session):
        self._session_factory = session_factory
        self._session: Optional[requests.Session] = None

    def start(self) -> None:
        if self._session is not None:
            return
        try:
            self._session = self._session_factory()
        except Exception as e:
            raise RendererInitError(HTTP_MODE, e) from e

    def render(self, url: str, timeout_ms: int, user_agent: str) -> str:
        if self._session is None:
            raise RenderError(url, RuntimeError("HTTP session not initialized"))
        headers = {"User-Agent": user_agent}
        try:
            resp = self._session.get(url, headers=headers, timeout=timeout_ms / 1000)
        except requests.exceptions.RequestException as e:
            raise RenderError(url, e) from e
        if resp.status_code >= 400:
            raise RenderError(url, RuntimeError(f"HTTP status {resp.status_code}"))
        return resp.text

    def close(self) -> None:
        if self._session is not None:
            try:
                self._session.close()
            except Exception:
                logger.debug("Error closing HTTP session", exc_info=True)
            self._session = None


class RendererFactory:
    """Create a fresh renderer for a fetch mode.

    A new instance per call keeps renderer sessions exclusive to one crawl.
    """

    def __init__(
        self,
        headless_options: Optional[PlaywrightHeadlessOptions] = None,
        http_session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        self.headless_options = headless_options or PlaywrightHeadlessOptions()
        self.http_session_factory = http_session_factory

    def create(self, fetch_mode: str) -> Renderer:
        if fetch_mode is None or (isinstance(fetch_mode, str) and fetch_mode.strip() == ""):
            raise ValueError("fetch_mode is required")
        mode = fetch_mode.strip().lower()
        if mode == HTTP_MODE:
            return HttpRenderer(session_factory=self.http_session_factory)
        if mode == HEADLESS_MODE:
            return PlaywrightRenderer(options=self.headless_options)
        raise ValueError(f"Unknown fetch_mode: {fetch_mode!r}")
