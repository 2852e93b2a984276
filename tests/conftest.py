"""Shared fixtures for sitemapgen tests."""

from typing import Dict, List, Union
import pytest
from sitemapgen.types import CrawlPolicy, FetchResult
from sitemapgen.utils import normalize_url


class FakeFetcher:
    """In-memory stand-in for PageFetcher, keyed by canonical URL."""

    def __init__(self, pages: Dict[str, Union[str, FetchResult]]):
        self.pages = {normalize_url(url): page for url, page in pages.items()}
        self.fetched: List[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.fetched.append(url)
        page = self.pages.get(normalize_url(url))

        if page is None:
            return FetchResult(url=url, status_code=404, error="HTTP 404")
        if isinstance(page, FetchResult):
            return page
        return FetchResult(
            url=url,
            status_code=200,
            content_type="text/html; charset=utf-8",
            html=page
        )


def links_page(*hrefs: str) -> str:
    """Build a minimal HTML page linking to hrefs."""
    anchors = "\n".join(f'<a href="{href}">{href}</a>' for href in hrefs)
    return f"<html><body>{anchors}</body></html>"


@pytest.fixture
def fast_policy():
    """Factory for crawl policies without the politeness delay."""
    def _make(**kwargs) -> CrawlPolicy:
        kwargs.setdefault("request_delay", 0)
        return CrawlPolicy(**kwargs)
    return _make
