"""Type definitions for the sitemap generator."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Set
from enum import Enum


class ChangeFrequency(Enum):
    """Sitemap change frequency values."""
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


@dataclass
class SitemapEntry:
    """Entry in a sitemap XML file."""
    loc: str
    lastmod: Optional[str] = None
    changefreq: Optional[ChangeFrequency] = None
    priority: Optional[float] = None


@dataclass(frozen=True)
class CrawlPolicy:
    """Limits and filters applied to a single crawl run."""
    max_depth: Optional[int] = None
    max_urls: int = 50000
    exclude_patterns: List[str] = field(default_factory=list)
    include_patterns: List[str] = field(default_factory=list)
    follow_external: bool = False
    request_timeout: float = 5.0
    request_delay: float = 0.2
    user_agent: str = "sitemapgen/1.0"
    link_parser: str = "pattern"

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("Max depth cannot be negative")
        if self.max_urls < 1:
            raise ValueError("Max URLs must be at least 1")
        if self.request_timeout <= 0:
            raise ValueError("Request timeout must be positive")
        if self.request_delay < 0:
            raise ValueError("Request delay cannot be negative")
        if self.link_parser not in ("pattern", "html"):
            raise ValueError(f"Unknown link parser: {self.link_parser}")


@dataclass
class CrawlState:
    """Mutable state owned by one crawl run."""
    crawl_date: str
    visited: Set[str] = field(default_factory=set)
    collected: List[SitemapEntry] = field(default_factory=list)


@dataclass
class FetchResult:
    """Result of fetching a single URL."""
    url: str
    status_code: int = 0
    content_type: Optional[str] = None
    html: str = ""
    error: Optional[str] = None
    response_time: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status_code < 300


@dataclass
class CrawlStatistics:
    """Statistics about the crawling process."""
    total_urls_collected: int = 0
    pages_fetched: int = 0
    failed_fetches: int = 0
    non_html_pages: int = 0
    rejected_by_policy: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def duration_seconds(self) -> float:
        """Calculate crawling duration in seconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0

    @property
    def success_rate(self) -> float:
        """Calculate success rate as percentage."""
        if self.pages_fetched == 0:
            return 0.0
        return ((self.pages_fetched - self.failed_fetches) / self.pages_fetched) * 100


@dataclass
class SitemapLocation:
    """A published sitemap file as listed in a sitemap index."""
    loc: str
    lastmod: str


@dataclass
class AssemblyResult:
    """Merged entries split into sitemap-sized chunks."""
    chunks: List[List[SitemapEntry]]
    index_needed: bool = False

    @property
    def total_entries(self) -> int:
        return sum(len(chunk) for chunk in self.chunks)


@dataclass
class GenerateOptions:
    """Options for a complete generation run."""
    file: Optional[str] = None
    crawl: bool = True
    policy: CrawlPolicy = field(default_factory=CrawlPolicy)
    priority: Optional[float] = 0.5
    changefreq: Optional[ChangeFrequency] = ChangeFrequency.WEEKLY
    lastmod: Optional[str] = None
    output: Optional[str] = None
    max_urls_per_sitemap: int = 50000
    index: bool = False
    compress: bool = False
    pretty: bool = True
    sitemap_base_url: Optional[str] = None
    show_progress: bool = False


@dataclass
class GenerationResult:
    """Files written by a generation run."""
    sitemap_files: List[str]
    index_file: Optional[str] = None
    total_urls: int = 0
    crawled_urls: int = 0
    manual_urls: int = 0
    statistics: Optional[CrawlStatistics] = None
