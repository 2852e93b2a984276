"""Configuration and constants for the sitemap generator."""

import os
import re
from functools import lru_cache
from typing import List, Optional, Pattern
from .types import CrawlPolicy, ChangeFrequency

# Sitemap protocol
SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
DEFAULT_MAX_URLS_PER_SITEMAP = 50000  # sitemaps.org limit

# Crawling configuration
DEFAULT_MAX_URLS = DEFAULT_MAX_URLS_PER_SITEMAP
DEFAULT_REQUEST_TIMEOUT = 5.0  # seconds
DEFAULT_REQUEST_DELAY = 0.2  # seconds, about 5 requests per second
DEFAULT_LINK_PARSER = "pattern"

# Crawled entry defaults
CRAWLED_CHANGEFREQ = ChangeFrequency.WEEKLY
ROOT_PRIORITY = 1.0
PRIORITY_DECAY_PER_LEVEL = 0.2
MIN_PRIORITY = 0.1

# Manual entry defaults
DEFAULT_PRIORITY = 0.5
DEFAULT_CHANGEFREQ = ChangeFrequency.WEEKLY

# File paths
DEFAULT_OUTPUT_FILENAME = "sitemap.xml"
OUTPUT_DIR_ENV = "SITEMAPGEN_OUTPUT_DIR"

# HTTP configuration
DEFAULT_USER_AGENT = "sitemapgen/1.0"
DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Pattern[str]:
    """
    Compile a glob-style pattern into an unanchored regular expression.

    ``*`` matches any sequence and ``?`` any single character; everything else
    matches literally. The result is used with ``search`` so a pattern matches
    anywhere inside the URL.
    """
    regex = re.escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")
    return re.compile(regex)


def matches_pattern(url: str, pattern: str) -> bool:
    """Check if URL matches a glob-style pattern."""
    return compile_pattern(pattern).search(url) is not None


def is_allowed_by_patterns(
    url: str,
    exclude_patterns: List[str],
    include_patterns: List[str]
) -> bool:
    """Exclude patterns win; a non-empty include list must match at least once."""
    if any(matches_pattern(url, pattern) for pattern in exclude_patterns):
        return False

    if include_patterns:
        return any(matches_pattern(url, pattern) for pattern in include_patterns)

    return True


def get_default_output_path() -> str:
    """Default sitemap path, honouring the output directory environment variable."""
    return os.path.join(os.getenv(OUTPUT_DIR_ENV, "./"), DEFAULT_OUTPUT_FILENAME)


def _split_env_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def get_policy_from_env() -> CrawlPolicy:
    """Create crawl policy from environment variables with defaults."""
    max_depth = os.getenv("SITEMAPGEN_MAX_DEPTH")

    return CrawlPolicy(
        max_depth=int(max_depth) if max_depth else None,
        max_urls=int(os.getenv("SITEMAPGEN_MAX_URLS", DEFAULT_MAX_URLS)),
        exclude_patterns=_split_env_list(os.getenv("SITEMAPGEN_EXCLUDE")),
        include_patterns=_split_env_list(os.getenv("SITEMAPGEN_INCLUDE")),
        follow_external=os.getenv("SITEMAPGEN_FOLLOW_EXTERNAL", "false").lower() == "true",
        request_timeout=float(os.getenv("SITEMAPGEN_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
        request_delay=float(os.getenv("SITEMAPGEN_DELAY", DEFAULT_REQUEST_DELAY)),
        user_agent=os.getenv("SITEMAPGEN_USER_AGENT", DEFAULT_USER_AGENT),
        link_parser=os.getenv("SITEMAPGEN_LINK_PARSER", DEFAULT_LINK_PARSER),
    )


def depth_priority(depth: int) -> float:
    """Priority for a crawled page: decays with distance from the seed, never below the floor."""
    if depth == 0:
        return ROOT_PRIORITY
    return round(max(MIN_PRIORITY, ROOT_PRIORITY - depth * PRIORITY_DECAY_PER_LEVEL), 1)
