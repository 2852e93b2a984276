"""
sitemapgen

Crawls a website and writes sitemaps.org compliant XML sitemaps.

Key Features:
- Depth-first crawl with depth, URL count, domain and glob pattern limits
- Priority that decays with distance from the start page
- Merges manually listed URLs, which take precedence over crawled ones
- Splits large sites into several sitemaps plus a sitemap index
- Optional gzip output
"""

__version__ = "1.0.0"

from .types import (
    ChangeFrequency,
    CrawlPolicy,
    CrawlStatistics,
    GenerateOptions,
    GenerationResult,
    SitemapEntry,
    SitemapLocation,
)
from .assembler import EmptySitemapError, assemble
from .crawler import SitemapCrawler, crawl
from .config import get_policy_from_env
from .generator import generate_sitemap
from .link_extractor import extract_links
from .renderer import render_sitemap_index, render_urlset, validate_sitemap
from .utils import is_valid_url, normalize_url

__all__ = [
    "ChangeFrequency",
    "CrawlPolicy",
    "CrawlStatistics",
    "GenerateOptions",
    "GenerationResult",
    "SitemapEntry",
    "SitemapLocation",
    "EmptySitemapError",
    "assemble",
    "SitemapCrawler",
    "crawl",
    "get_policy_from_env",
    "generate_sitemap",
    "extract_links",
    "render_sitemap_index",
    "render_urlset",
    "validate_sitemap",
    "is_valid_url",
    "normalize_url",
]
