"""Decide whether a documentation site is tool docs or API docs.

Two independent heuristics feed the decision: patterns in the URL and
keyword indicators in the page text. Each heuristic may answer ``unknown``;
the combined result is always ``tools`` or ``apis``.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from doccrawl.domain.categorization import CategorizationResult, ContentAnalysis, UrlAnalysis

logger = logging.getLogger(__name__)

# a path segment ends at "/", a query, a fragment or the end of the URL
_SEG_END = r"(?=[/?#]|$)"

# api path segments only count with a trailing "/", so docs.example.com/api
# is left to the docs-host rule
API_URL_PATTERNS: tuple[str, ...] = (
    r"/api/",
    r"/reference/",
    r"/rest/",
    r"/graphql/",
    r"/endpoints?/",
    r"/swagger/",
    r"/openapi/",
    r"(?:^|[/.])api\.",
    r"(?:^|[/.])developers?\.",
    r"/v\d+" + _SEG_END,
)

TOOL_URL_PATTERNS: tuple[str, ...] = (
    r"/docs?" + _SEG_END,
    r"/guide" + _SEG_END,
    r"/tutorial" + _SEG_END,
    r"/getting[-_]?started" + _SEG_END,
    r"/learn" + _SEG_END,
    r"/manual" + _SEG_END,
    r"/handbook" + _SEG_END,
    r"(?:^|[/.])docs\.",
    r"(?:^|[/.])help\.",
    r"(?:^|[/.])support\.",
    r"(?:^|[/.])learn\.",
    r"/install",
    r"/setup",
)

_API_SUBDOMAIN = re.compile(r"^(?:https?://)?(?:api|developers?)\.", re.IGNORECASE)
_API_PATH_SEGMENT = re.compile(r"/(?:api|reference|rest|graphql|endpoints?|swagger|openapi)/", re.IGNORECASE)
_DOCS_HOST_API_PATH = re.compile(r"docs\..*/api(?:/|$)", re.IGNORECASE)
DOCS_HOST_API_LABEL = "docs host with /api path"

API_CONTENT_INDICATORS: tuple[str, ...] = (
    "endpoint",
    "request",
    "response",
    "authentication",
    "authorization",
    "rate limit",
    "api key",
    "access token",
    "http method",
    "status code",
    "query parameter",
    "request body",
    "response body",
    "bearer token",
    "webhook",
    "rest api",
    "graphql",
    "mutation",
    "subscription",
)

TOOL_CONTENT_INDICATORS: tuple[str, ...] = (
    "installation",
    "configuration",
    "workflow",
    "getting started",
    "tutorial",
    "quick start",
    "how to",
    "step by step",
    "user guide",
    "features",
    "requirements",
    "dependencies",
    "cli",
    "command line",
    "desktop app",
    "plugin",
    "extension",
    "interface",
    "settings",
)

_REST_EXAMPLE = re.compile(
    r"curl\s+-X\s+(?:GET|POST|PUT|DELETE|PATCH)"
    r"|fetch\(\s*['\"`][^'\"`]*['\"`]\s*,\s*\{[^}]*method:\s*['\"`](?:GET|POST|PUT|DELETE|PATCH)",
    re.IGNORECASE,
)
_CLI_INSTALL_EXAMPLE = re.compile(
    r"\b(?:npm\s+install|pip\s+install|brew\s+install|yarn\s+add)\b",
    re.IGNORECASE,
)

REST_EXAMPLE_INDICATOR = "REST API examples"
CLI_EXAMPLE_INDICATOR = "CLI installation examples"


@dataclass(frozen=True)
class _UrlSignals:
    url: str
    api_matches: tuple[str, ...]
    tool_matches: tuple[str, ...]

    @property
    def mixed(self) -> bool:
        return bool(self.api_matches) and bool(self.tool_matches)


@dataclass(frozen=True)
class PrecedenceRule:
    """One row of the URL policy: first rule whose predicate holds decides."""

    name: str
    applies: Callable[[_UrlSignals], bool]
    decide: Callable[[_UrlSignals], UrlAnalysis]


def _count_confidence(count: int) -> float:
    return min(0.8 + 0.1 * count, 0.95)


URL_RULES: tuple[PrecedenceRule, ...] = (
    PrecedenceRule(
        "api subdomain with mixed signals",
        lambda s: s.mixed and bool(_API_SUBDOMAIN.search(s.url)),
        lambda s: UrlAnalysis("apis", 0.85, s.api_matches),
    ),
    PrecedenceRule(
        "api path segment with mixed signals",
        lambda s: s.mixed and bool(_API_PATH_SEGMENT.search(s.url)),
        lambda s: UrlAnalysis("apis", 0.85, s.api_matches),
    ),
    PrecedenceRule(
        "more api patterns",
        lambda s: len(s.api_matches) > len(s.tool_matches),
        lambda s: UrlAnalysis("apis", _count_confidence(len(s.api_matches)), s.api_matches),
    ),
    PrecedenceRule(
        "docs host serving an /api path",
        lambda s: len(s.tool_matches) > len(s.api_matches) and bool(_DOCS_HOST_API_PATH.search(s.url)),
        lambda s: UrlAnalysis("apis", 0.8, s.api_matches + (DOCS_HOST_API_LABEL,)),
    ),
    PrecedenceRule(
        "more tool patterns",
        lambda s: len(s.tool_matches) > len(s.api_matches),
        lambda s: UrlAnalysis("tools", _count_confidence(len(s.tool_matches)), s.tool_matches),
    ),
    PrecedenceRule(
        "mixed signals",
        lambda s: s.mixed,
        lambda s: UrlAnalysis("unknown", 0.5, s.api_matches + s.tool_matches),
    ),
)


class DocumentationCategorizer:
    """Categorize documentation from its URL and, optionally, its text.

    Stateless: every method is a pure function of its arguments, so one
    instance can be shared freely between threads.
    """

    def __init__(self):
        self._api_url_patterns = [(p, re.compile(p, re.IGNORECASE)) for p in API_URL_PATTERNS]
        self._tool_url_patterns = [(p, re.compile(p, re.IGNORECASE)) for p in TOOL_URL_PATTERNS]
        self._api_indicators = [(t, re.compile(re.escape(t), re.IGNORECASE)) for t in API_CONTENT_INDICATORS]
        self._tool_indicators = [(t, re.compile(re.escape(t), re.IGNORECASE)) for t in TOOL_CONTENT_INDICATORS]

    def categorize(self, url: str, content: Optional[str] = None) -> CategorizationResult:
        url_analysis = self.analyze_url(url)
        content_analysis = self.analyze_content(content) if isinstance(content, str) and content else None
        result = self.combine(url_analysis, content_analysis)
        logger.debug("Categorized %s as %s (%.2f)", url, result.category, result.confidence)
        return result

    def analyze_url(self, url: str) -> UrlAnalysis:
        text = url.lower() if isinstance(url, str) else ""
        signals = _UrlSignals(
            url=text,
            api_matches=tuple(p for p, rx in self._api_url_patterns if rx.search(text)),
            tool_matches=tuple(p for p, rx in self._tool_url_patterns if rx.search(text)),
        )
        for rule in URL_RULES:
            if rule.applies(signals):
                return rule.decide(signals)
        return UrlAnalysis("unknown", 0.3, ())

    def analyze_content(self, content: str) -> ContentAnalysis:
        api_found = self._count_indicators(content, self._api_indicators)
        tool_found = self._count_indicators(content, self._tool_indicators)

        if _REST_EXAMPLE.search(content):
            api_found.append(REST_EXAMPLE_INDICATOR)
        if _CLI_INSTALL_EXAMPLE.search(content):
            tool_found.append(CLI_EXAMPLE_INDICATOR)

        api_score = len(api_found)
        tool_score = len(tool_found)

        if api_score > tool_score * 1.5:
            return ContentAnalysis("apis", min(0.7 + api_score * 0.03, 0.95), tuple(api_found))
        if tool_score > api_score * 1.5:
            return ContentAnalysis("tools", min(0.7 + tool_score * 0.03, 0.95), tuple(tool_found))
        if api_score > 0 and tool_score > 0:
            return ContentAnalysis("unknown", 0.5, tuple(api_found + tool_found))
        return ContentAnalysis("unknown", 0.3, ())

    @staticmethod
    def _count_indicators(content: str, indicators) -> list[str]:
        found = []
        for term, regex in indicators:
            count = len(regex.findall(content))
            if count:
                found.append(f"{term} ({count}x)")
        return found

    def combine(self, url: UrlAnalysis, content: Optional[ContentAnalysis]) -> CategorizationResult:
        if content is None:
            if url.category != "unknown":
                return CategorizationResult(
                    url.category,
                    url.confidence,
                    (f"URL patterns matched: {', '.join(url.matched_patterns)}",),
                )
            return CategorizationResult("tools", 0.3, ("No clear URL patterns found, defaulting to tools",))

        if url.category == content.category and url.category != "unknown":
            reasons = []
            if url.matched_patterns:
                reasons.append(f"URL patterns: {', '.join(url.matched_patterns)}")
            if content.indicators:
                reasons.append(f"Content indicators: {', '.join(content.indicators[:5])}")
            return CategorizationResult(url.category, max(url.confidence, content.confidence), tuple(reasons))

        if content.confidence > url.confidence and content.category != "unknown":
            return CategorizationResult(
                content.category,
                content.confidence * 0.75,
                (
                    f"Content analysis suggests {content.category}",
                    f"Content indicators: {', '.join(content.indicators[:5])}",
                ),
            )

        if url.category != "unknown":
            return CategorizationResult(
                url.category,
                min(url.confidence * 0.75, 0.79),
                (
                    f"URL analysis suggests {url.category}",
                    f"URL patterns: {', '.join(url.matched_patterns)}",
                ),
            )

        reasons = ["Uncertain categorization, defaulting to tools"]
        if url.matched_patterns:
            reasons.append(f"Mixed URL patterns: {', '.join(url.matched_patterns)}")
        if content.indicators:
            reasons.append(f"Mixed content indicators: {', '.join(content.indicators[:3])}")
        return CategorizationResult("tools", 0.4, tuple(reasons))
