"""Tests for the aiohttp page fetcher."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, Mock
import aiohttp
import pytest
from sitemapgen.fetcher import PageFetcher, create_crawler_session


def make_session(status=200, content_type="text/html", body=""):
    """Create a mock aiohttp session returning a single response."""
    mock_response = Mock()
    mock_response.status = status
    mock_response.headers = {"content-type": content_type}
    mock_response.text = AsyncMock(return_value=body)

    mock_session = Mock()
    mock_session.get = MagicMock()
    mock_session.get.return_value.__aenter__ = AsyncMock(return_value=mock_response)
    mock_session.get.return_value.__aexit__ = AsyncMock(return_value=None)
    return mock_session, mock_response


@pytest.mark.asyncio
async def test_fetch_html_page():
    """HTML pages are read and returned."""
    html = '<html><body><a href="/page1">Page 1</a></body></html>'
    session, _ = make_session(content_type="text/html; charset=utf-8", body=html)

    result = await PageFetcher(session).fetch("https://example.com/")

    assert result.ok is True
    assert result.status_code == 200
    assert result.html == html
    assert result.error is None
    session.get.assert_called_once_with("https://example.com/", allow_redirects=True)


@pytest.mark.asyncio
async def test_fetch_non_html_skips_body():
    """Non-HTML bodies are not read."""
    session, response = make_session(content_type="application/pdf")

    result = await PageFetcher(session).fetch("https://example.com/file.pdf")

    assert result.ok is True
    assert result.html == ""
    assert result.content_type == "application/pdf"
    response.text.assert_not_awaited()


@pytest.mark.asyncio
async def test_fetch_error_status():
    """Non-2xx responses are reported as failures."""
    session, _ = make_session(status=404)

    result = await PageFetcher(session).fetch("https://example.com/missing")

    assert result.ok is False
    assert result.status_code == 404
    assert result.error == "HTTP 404"


@pytest.mark.asyncio
@pytest.mark.parametrize("exception, message", [
    (aiohttp.ClientConnectionError("connection refused"), "connection refused"),
    (asyncio.TimeoutError(), "Request timed out"),
])
async def test_fetch_network_failures(exception, message):
    """Network errors and timeouts never propagate."""
    session = Mock()
    session.get = MagicMock(side_effect=exception)

    result = await PageFetcher(session).fetch("https://example.com/")

    assert result.ok is False
    assert result.status_code == 0
    assert result.error == message


@pytest.mark.asyncio
async def test_fetch_with_timeout_override():
    """A per-fetcher timeout is passed to each request."""
    session, _ = make_session()

    await PageFetcher(session, timeout=1.5).fetch("https://example.com/")

    kwargs = session.get.call_args.kwargs
    assert kwargs["timeout"].total == 1.5


@pytest.mark.asyncio
async def test_create_crawler_session():
    """Sessions carry the timeout and user agent."""
    session = create_crawler_session(timeout=3.0, user_agent="TestAgent/1.0")
    try:
        assert session.timeout.total == 3.0
        assert session.headers["User-Agent"] == "TestAgent/1.0"
    finally:
        await session.close()
