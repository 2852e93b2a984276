"""Depth-first crawler that turns a site's reachable pages into sitemap entries."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from tqdm import tqdm
from .types import CrawlPolicy, CrawlState, CrawlStatistics, SitemapEntry
from .config import CRAWLED_CHANGEFREQ, depth_priority, is_allowed_by_patterns
from .fetcher import PageFetcher, create_crawler_session
from .link_extractor import extract_links
from .utils import (
    extract_host,
    format_duration,
    format_number,
    get_current_date,
    is_html_content,
    is_valid_url,
    normalize_url,
)

logger = logging.getLogger(__name__)


class SitemapCrawler:
    """
    Crawls a site from a seed URL, one request at a time.

    Traversal is depth-first with links followed in the order they appear on
    each page. The recursion is kept on an explicit stack so very deep link
    chains do not grow the call stack.
    """

    def __init__(
        self,
        seed_url: str,
        policy: Optional[CrawlPolicy] = None,
        fetcher: Optional[PageFetcher] = None,
        show_progress: bool = False
    ):
        if not is_valid_url(seed_url):
            raise ValueError(f"Invalid seed URL: {seed_url}")

        self.seed_url = seed_url
        self.seed_host = extract_host(seed_url)
        self.policy = policy or CrawlPolicy()
        self.fetcher = fetcher
        self.show_progress = show_progress
        self.statistics = CrawlStatistics()

    async def crawl(self) -> List[SitemapEntry]:
        """
        Run the crawl to completion.

        Returns:
            Entries in traversal order. Network failures never propagate.
        """
        logger.info(f"Starting crawl of {self.seed_url}")
        logger.info(
            f"Max depth: {self.policy.max_depth if self.policy.max_depth is not None else 'unlimited'}, "
            f"max URLs: {format_number(self.policy.max_urls)}"
        )

        self.statistics = CrawlStatistics(start_time=datetime.now(timezone.utc))
        state = CrawlState(crawl_date=get_current_date())

        try:
            if self.fetcher is not None:
                await self._crawl_loop(self.fetcher, state)
            else:
                async with create_crawler_session(
                    timeout=self.policy.request_timeout,
                    user_agent=self.policy.user_agent
                ) as session:
                    await self._crawl_loop(PageFetcher(session), state)
        finally:
            self.statistics.end_time = datetime.now(timezone.utc)
            self.statistics.total_urls_collected = len(state.collected)

        logger.info(
            f"Crawl complete: {format_number(len(state.collected))} URLs discovered "
            f"in {format_duration(self.statistics.duration_seconds)}"
        )
        return state.collected

    async def _crawl_loop(self, fetcher: PageFetcher, state: CrawlState) -> None:
        stack: List[Tuple[str, int]] = [(self.seed_url, 0)]

        with tqdm(
            total=self.policy.max_urls,
            desc="Crawling",
            unit="url",
            disable=not self.show_progress
        ) as pbar:
            while stack:
                url, depth = stack.pop()

                if self.policy.max_depth is not None and depth > self.policy.max_depth:
                    continue
                if len(state.collected) >= self.policy.max_urls:
                    logger.info(f"Reached max URLs ({format_number(self.policy.max_urls)}), stopping crawl")
                    break

                canonical_url = normalize_url(url)
                if canonical_url in state.visited:
                    continue
                state.visited.add(canonical_url)

                if not self._is_allowed(url):
                    self.statistics.rejected_by_policy += 1
                    continue

                state.collected.append(SitemapEntry(
                    loc=canonical_url,
                    lastmod=state.crawl_date,
                    changefreq=CRAWLED_CHANGEFREQ,
                    priority=depth_priority(depth)
                ))
                pbar.update(1)
                logger.debug(f"[{depth}] {canonical_url}")

                if not self._can_follow_links(depth, state):
                    continue

                links = await self._fetch_links(fetcher, url)

                # Reversed so that links pop in document order
                stack.extend((link, depth + 1) for link in reversed(links))

    def _is_allowed(self, url: str) -> bool:
        """Apply the domain policy and the include/exclude patterns to a raw URL."""
        if not self.policy.follow_external and extract_host(url) != self.seed_host:
            logger.debug(f"Skipping external URL: {url}")
            return False

        if not is_allowed_by_patterns(
            url,
            self.policy.exclude_patterns,
            self.policy.include_patterns
        ):
            logger.debug(f"Skipping URL filtered by patterns: {url}")
            return False

        return True

    def _can_follow_links(self, depth: int, state: CrawlState) -> bool:
        """Whether any link found on a page at this depth could still be recorded."""
        if len(state.collected) >= self.policy.max_urls:
            return False
        if self.policy.max_depth is not None and depth >= self.policy.max_depth:
            return False
        return True

    async def _fetch_links(self, fetcher: PageFetcher, url: str) -> List[str]:
        """Fetch url and return its links; failures make the page a leaf."""
        result = await fetcher.fetch(url)
        self.statistics.pages_fetched += 1

        if self.policy.request_delay > 0:
            await asyncio.sleep(self.policy.request_delay)

        if not result.ok:
            self.statistics.failed_fetches += 1
            logger.warning(f"Failed to crawl {url}: {result.error}")
            return []

        if not is_html_content(result.content_type):
            self.statistics.non_html_pages += 1
            logger.debug(f"Not HTML ({result.content_type}), not following links: {url}")
            return []

        links = extract_links(result.html, url, parser=self.policy.link_parser)
        logger.debug(f"Found {len(links)} links on {url}")
        return links


async def crawl(
    seed_url: str,
    policy: Optional[CrawlPolicy] = None,
    fetcher: Optional[PageFetcher] = None,
    show_progress: bool = False
) -> List[SitemapEntry]:
    """
    Crawl a site and return its sitemap entries.

    Args:
        seed_url: Absolute http(s) URL to start from (depth 0)
        policy: Crawl limits and filters
        fetcher: Page fetcher to use; a new aiohttp session is created if omitted
        show_progress: Show a tqdm progress bar

    Returns:
        List of SitemapEntry in traversal order
    """
    crawler = SitemapCrawler(seed_url, policy, fetcher=fetcher, show_progress=show_progress)
    return await crawler.crawl()
