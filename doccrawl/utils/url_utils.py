"""URL helpers used for dedup keys, domain scoping, site naming and filenames.

Every function here degrades to a neutral value on malformed input instead of
raising, so a bad seed URL turns into an empty crawl rather than an error.
"""
import logging
import re
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

_HOST_PREFIXES = re.compile(r"^(www\.|docs\.|api\.|developer\.|developers\.)")
_HOST_SUFFIXES = re.compile(r"\.(com|org|io|dev|net|edu)$")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")
_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]+")


def _split_absolute(url: str):
    """Return the urlsplit() result for an absolute http(s) URL, else None."""
    if not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url.strip())
        # .hostname/.port parse lazily and may raise on garbage netlocs
        hostname = parts.hostname
        parts.port
    except ValueError:
        return None
    if parts.scheme.lower() not in ("http", "https") or not hostname:
        return None
    return parts


def is_valid_url(url: str) -> bool:
    return _split_absolute(url) is not None


def normalize_url(url: str) -> str:
    """Canonical dedup key: no fragment, sorted query, no trailing slash.

    The root path collapses to the origin, so ``https://x.test/`` and
    ``https://x.test`` share a key. Input that is not an absolute http(s) URL
    is returned unchanged.
    """
    parts = _split_absolute(url)
    if parts is None:
        return url
    path = parts.path.rstrip("/")
    params = parse_qsl(parts.query, keep_blank_values=True)
    # sorted() is stable, so repeated keys keep their relative order
    query = urlencode(sorted(params, key=lambda kv: kv[0]))
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, query, ""))


def to_absolute_url(base_url: str, relative_url: str) -> str:
    try:
        return urljoin(base_url, relative_url)
    except ValueError:
        return relative_url


def get_hostname(url: str) -> Optional[str]:
    parts = _split_absolute(url)
    return parts.hostname if parts is not None else None


def is_same_domain(url: str, other: str) -> bool:
    """True when both URLs are valid and share exactly the same hostname."""
    a = get_hostname(url)
    b = get_hostname(other)
    return a is not None and a == b


def extract_domain_name(url: str) -> str:
    """Derive the site name used as the storage folder for a seed URL.

    developer.apple.com/documentation/swift -> swift
    github.com/org/project/docs -> project
    docs.example.com -> example
    """
    parts = _split_absolute(url)
    if parts is None:
        return "unknown"

    clean_host = _HOST_SUFFIXES.sub("", _HOST_PREFIXES.sub("", parts.hostname))
    segments = [s for s in parts.path.split("/") if s]

    name = clean_host
    if "documentation" in segments and len(segments) > 1:
        idx = segments.index("documentation")
        if idx < len(segments) - 1:
            name = segments[idx + 1]
    elif "docs" in segments and len(segments) > 1:
        idx = segments.index("docs")
        if idx > 0:
            name = segments[idx - 1]

    name = _UNSAFE_NAME_CHARS.sub("-", name).strip("-.")
    return name or "unknown"


def url_to_filename(url: str) -> str:
    """Flatten a URL path into a safe markdown filename (``guide/intro`` -> ``guide_intro.md``)."""
    parts = _split_absolute(url)
    if parts is None:
        return "unknown.md"
    filename = parts.path.strip("/").replace("/", "_")
    if not filename:
        filename = "index"
    if not filename.endswith(".md"):
        filename += ".md"
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)
