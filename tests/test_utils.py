"""Tests for URL canonicalization and helpers."""

import pytest
from sitemapgen.utils import (
    extract_host,
    format_duration,
    format_number,
    get_current_date,
    is_html_content,
    is_valid_url,
    normalize_url,
    parse_content_type,
)


def test_url_normalization():
    """Test URL normalization functionality."""
    assert normalize_url("https://example.com/page/") == "https://example.com/page"
    assert normalize_url("https://example.com/page#fragment") == "https://example.com/page"
    assert normalize_url("https://example.com/page/#top") == "https://example.com/page"

    # Root path is kept, an empty path becomes the root
    assert normalize_url("https://example.com/") == "https://example.com/"
    assert normalize_url("https://example.com") == "https://example.com/"

    # Query strings are not reordered
    assert normalize_url("https://example.com/page?b=2&a=1") == "https://example.com/page?b=2&a=1"
    assert normalize_url("https://example.com/dir/?q=1") == "https://example.com/dir?q=1"

    assert normalize_url("HTTPS://Example.COM/Path") == "https://example.com/Path"


@pytest.mark.parametrize("url", [
    "https://example.com",
    "https://example.com/",
    "https://example.com/a//",
    "http://example.com/a/b/?x=1#frag",
    "https://EXAMPLE.com:8080/path/",
    "https://example.com/a/;params",
])
def test_normalization_is_idempotent(url):
    """Normalizing twice gives the same result as normalizing once."""
    once = normalize_url(url)
    assert normalize_url(once) == once


def test_unparseable_url_returned_unchanged():
    """Unparseable input is returned as-is."""
    assert normalize_url("http://[::1") == "http://[::1"


def test_is_valid_url():
    """Only absolute http(s) URLs are valid."""
    assert is_valid_url("https://example.com") is True
    assert is_valid_url("http://example.com/page?q=1") is True

    assert is_valid_url("ftp://example.com/file") is False
    assert is_valid_url("mailto:test@example.com") is False
    assert is_valid_url("javascript:void(0)") is False
    assert is_valid_url("/relative/path") is False
    assert is_valid_url("invalid-url") is False
    assert is_valid_url("http://[::1") is False
    assert is_valid_url("https://example.com/a\x01b") is False
    assert is_valid_url("https://example.com/\ufffe") is False
    assert is_valid_url(None) is False


def test_extract_host():
    """Host is lower-cased and excludes the port."""
    assert extract_host("https://Example.com:8443/path") == "example.com"
    assert extract_host("not a url") == ""


def test_content_type_helpers():
    """Test content type parsing."""
    assert parse_content_type("text/html; charset=utf-8") == "text/html"
    assert parse_content_type("") == "unknown"
    assert is_html_content("TEXT/HTML") is True
    assert is_html_content("application/xhtml+xml") is True
    assert is_html_content("application/pdf") is False
    assert is_html_content(None) is False


def test_formatting_helpers():
    """Test number and duration formatting."""
    assert format_number(120000) == "120,000"
    assert format_duration(12.34) == "12.3s"
    assert format_duration(90) == "1.5m"
    assert format_duration(7200) == "2.0h"


def test_current_date_format():
    """Dates are ISO YYYY-MM-DD."""
    date = get_current_date()
    assert len(date) == 10
    assert date[4] == "-" and date[7] == "-"
