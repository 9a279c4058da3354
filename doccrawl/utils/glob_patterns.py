"""Glob-style URL patterns for include/exclude crawl scoping.

Semantics:
- ``*`` matches any run of characters (including ``/``), ``?`` exactly one.
- Every other character is literal; regex metacharacters are escaped.
- Matching is an unanchored search, so ``/guide/`` matches anywhere in a URL.
"""
import logging
import re
from typing import Iterable, Optional, Pattern

logger = logging.getLogger(__name__)


def compile_glob(pattern: str) -> Optional[Pattern[str]]:
    """Compile a glob pattern into a regex, or None when it is unusable."""
    if not isinstance(pattern, str) or pattern == "":
        logger.debug("Ignoring unusable pattern %r", pattern)
        return None
    parts = []
    for ch in pattern:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts))


class GlobMatcher:
    """A set of precompiled glob patterns; matches if any pattern matches."""

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self.patterns = tuple(patterns or ())
        self._compiled = [c for c in (compile_glob(p) for p in self.patterns) if c is not None]

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def matches(self, url: str) -> bool:
        if not isinstance(url, str):
            return False
        return any(regex.search(url) for regex in self._compiled)


def matches_patterns(url: str, patterns: Optional[Iterable[str]]) -> bool:
    return GlobMatcher(patterns).matches(url)
