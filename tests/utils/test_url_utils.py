import pytest

from doccrawl.utils.url_utils import (
    extract_domain_name,
    get_hostname,
    is_same_domain,
    is_valid_url,
    normalize_url,
    to_absolute_url,
    url_to_filename,
)


@pytest.mark.parametrize("url", [
    "https://example.com",
    "http://example.com/path?q=1",
    "HTTPS://Example.COM/Docs",
])
def test_valid_urls(url):
    assert is_valid_url(url)


@pytest.mark.parametrize("url", [
    "",
    "not a url",
    "/relative/path",
    "ftp://example.com/file",
    "mailto:someone@example.com",
    "https://",
    "http://[::1",
    None,
    42,
])
def test_invalid_urls(url):
    assert not is_valid_url(url)


def test_normalize_strips_fragment_and_trailing_slash():
    assert normalize_url("https://example.com/docs/#intro") == "https://example.com/docs"


def test_normalize_lowercases_scheme_and_host_only():
    assert normalize_url("HTTPS://Example.COM/Docs/Guide") == "https://example.com/Docs/Guide"


def test_normalize_sorts_query_parameters():
    assert normalize_url("https://example.com/p?b=2&a=1") == "https://example.com/p?a=1&b=2"


def test_normalize_keeps_blank_query_values():
    assert normalize_url("https://example.com/p?z=&a=1") == "https://example.com/p?a=1&z="


def test_normalize_root_collapses_to_origin():
    assert normalize_url("https://example.com/") == normalize_url("https://example.com")
    assert normalize_url("https://example.com/") == "https://example.com"


def test_normalize_is_idempotent():
    once = normalize_url("https://Example.com/a/b/?y=2&x=1#frag")
    assert normalize_url(once) == once


def test_normalize_returns_malformed_input_unchanged():
    assert normalize_url("not a url") == "not a url"
    assert normalize_url("") == ""


def test_to_absolute_url_resolves_relative_links():
    assert to_absolute_url("https://example.com/docs/guide", "intro") == "https://example.com/docs/intro"
    assert to_absolute_url("https://example.com/docs/guide", "/api") == "https://example.com/api"
    assert to_absolute_url("https://example.com/", "https://other.com/x") == "https://other.com/x"


def test_get_hostname():
    assert get_hostname("https://Docs.Example.com:8443/x") == "docs.example.com"
    assert get_hostname("garbage") is None


def test_same_domain_requires_exact_hostname():
    assert is_same_domain("https://example.com/a", "http://example.com/b")
    assert not is_same_domain("https://docs.example.com/a", "https://example.com")
    assert not is_same_domain("https://example.com.evil.test", "https://example.com")


def test_same_domain_false_for_malformed_input():
    assert not is_same_domain("not a url", "https://example.com")
    assert not is_same_domain("not a url", "not a url")


@pytest.mark.parametrize("url,expected", [
    ("https://docs.python.org/3/", "python"),
    ("https://www.example.com", "example"),
    ("https://api.stripe.com/v1", "stripe"),
    ("https://developer.apple.com/documentation/swift", "swift"),
    ("https://github.com/acme/project/docs", "project"),
    ("https://fastapi.tiangolo.com", "fastapi.tiangolo"),
    ("not a url", "unknown"),
])
def test_extract_domain_name(url, expected):
    assert extract_domain_name(url) == expected


def test_extract_domain_name_is_filesystem_safe():
    name = extract_domain_name("https://example.com/documentation/My%20Lib")
    assert "/" not in name
    assert " " not in name
    assert name == "My-20Lib"


@pytest.mark.parametrize("url,expected", [
    ("https://example.com", "index.md"),
    ("https://example.com/", "index.md"),
    ("https://example.com/guide/intro", "guide_intro.md"),
    ("https://example.com/guide/intro/", "guide_intro.md"),
    ("https://example.com/readme.md", "readme.md"),
    ("https://example.com/a b/c?d", "a_b_c.md"),
    ("garbage", "unknown.md"),
])
def test_url_to_filename(url, expected):
    assert url_to_filename(url) == expected
