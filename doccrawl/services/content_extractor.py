import logging
import re
from typing import Callable, Optional

from bs4 import BeautifulSoup
from markdownify import markdownify as md_convert

from doccrawl.utils.url_utils import is_valid_url, to_absolute_url

logger = logging.getLogger(__name__)

# Removed before looking for the main content area
UNWANTED_SELECTORS = (
    "nav", "header", "footer", "aside",
    ".navigation", ".nav", ".sidebar", ".menu",
    ".breadcrumb", ".breadcrumbs",
    ".toc", ".table-of-contents",
    "script", "style", "noscript",
    ".ads", ".advertisement",
    ".social", ".share",
    ".comment", ".comments",
    ".related", ".suggestions",
)

CONTENT_SELECTORS = ("main", "article", ".content", ".docs-content", ".markdown-body", "#content")

_LANGUAGE_CLASS = re.compile(r"(?:language|lang)-([a-zA-Z0-9+#-]+)")
_WHITESPACE = re.compile(r"\s+")
_SKIPPED_HREF_PREFIXES = ("javascript:", "mailto:", "tel:", "#")


def _code_language(el) -> Optional[str]:
    """Pick a fence language from ``language-xxx`` classes on a <pre> or its <code>."""
    candidates = [el]
    code = el.find("code")
    if code is not None:
        candidates.insert(0, code)
    for node in candidates:
        for cls in node.get("class") or []:
            m = _LANGUAGE_CLASS.match(cls)
            if m:
                return m.group(1)
    return None


class ContentExtractor:
    """Pull title, markdown body, plain text and links out of rendered HTML."""

    def __init__(
        self,
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
    ):
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def extract_title(self, html: str, url: str) -> str:
        soup = self._soup_factory(html or "")
        title = ""
        h1 = soup.find("h1")
        if h1 is not None:
            title = h1.get_text(" ", strip=True)
        if not title and soup.title is not None:
            title = soup.title.get_text(" ", strip=True)
        if not title:
            fallback = soup.select_one(".page-title, .title, .heading")
            if fallback is not None:
                title = fallback.get_text(" ", strip=True)
        title = _WHITESPACE.sub(" ", title).strip()
        return title or "Untitled"

    def extract_content(self, html: str, url: str) -> str:
        """Return the page's main content converted to markdown."""
        soup = self._soup_factory(html or "")
        self._remove_unwanted(soup)

        container = None
        for selector in CONTENT_SELECTORS:
            container = soup.select_one(selector)
            if container is not None:
                break
        if container is None:
            container = soup.body or soup

        inner = container.decode_contents()
        if not inner.strip():
            return ""
        markdown = md_convert(
            inner,
            heading_style="ATX",
            bullets="-",
            code_language_callback=_code_language,
        )
        # markdownify leaves runs of blank lines between blocks
        return re.sub(r"\n{3,}", "\n\n", markdown).strip()

    def extract_text(self, html: str) -> str:
        """Visible plain text of the page, used for categorization."""
        if not html:
            return ""
        soup = self._soup_factory(html)
        for tag in soup(["script", "style", "noscript"]):
            tag.decompose()
        return soup.get_text(separator=" ", strip=True)

    def extract_links(self, html: str, base_url: str) -> list[str]:
        """Absolute http(s) links in document order, without duplicates."""
        soup = self._soup_factory(html or "")
        links: list[str] = []
        seen: set[str] = set()
        for a in soup.find_all("a", href=True):
            href = (a.get("href") or "").strip()
            if not href or href.lower().startswith(_SKIPPED_HREF_PREFIXES):
                continue
            absolute = to_absolute_url(base_url, href)
            if not is_valid_url(absolute) or absolute in seen:
                continue
            seen.add(absolute)
            links.append(absolute)
        return links

    def _remove_unwanted(self, soup: BeautifulSoup) -> None:
        for selector in UNWANTED_SELECTORS:
            for element in soup.select(selector):
                # nested matches may already be gone with their parent
                if not getattr(element, "decomposed", False):
                    element.decompose()
