"""Reading manually curated URL lists."""

import logging
import os
from typing import Iterable, List, Optional
from .types import ChangeFrequency, SitemapEntry
from .utils import is_valid_url, normalize_url

logger = logging.getLogger(__name__)


def _parse_priority(value: str, default: Optional[float]) -> Optional[float]:
    try:
        priority = float(value)
    except ValueError:
        logger.warning(f"Invalid priority '{value}', using default")
        return default
    return min(1.0, max(0.0, priority))


def _parse_changefreq(
    value: str,
    default: Optional[ChangeFrequency]
) -> Optional[ChangeFrequency]:
    try:
        return ChangeFrequency(value.lower())
    except ValueError:
        logger.warning(f"Invalid change frequency '{value}', using default")
        return default


def parse_url_line(
    line: str,
    default_priority: Optional[float] = None,
    default_changefreq: Optional[ChangeFrequency] = None,
    default_lastmod: Optional[str] = None
) -> Optional[SitemapEntry]:
    """
    Parse one ``URL [priority [changefreq [lastmod]]]`` line.

    Returns None for blank lines, comments and invalid URLs.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    parts = stripped.split()
    url = parts[0]
    if not is_valid_url(url):
        logger.warning(f"Skipping invalid URL: {url}")
        return None

    return SitemapEntry(
        loc=normalize_url(url),
        priority=_parse_priority(parts[1], default_priority) if len(parts) > 1 else default_priority,
        changefreq=_parse_changefreq(parts[2], default_changefreq) if len(parts) > 2 else default_changefreq,
        lastmod=parts[3] if len(parts) > 3 else default_lastmod,
    )


def parse_url_lines(
    lines: Iterable[str],
    default_priority: Optional[float] = None,
    default_changefreq: Optional[ChangeFrequency] = None,
    default_lastmod: Optional[str] = None
) -> List[SitemapEntry]:
    """Parse URL list lines, skipping comments and invalid URLs."""
    entries = []
    for line in lines:
        entry = parse_url_line(line, default_priority, default_changefreq, default_lastmod)
        if entry is not None:
            entries.append(entry)
    return entries


def parse_urls_file(
    file_path: str,
    default_priority: Optional[float] = None,
    default_changefreq: Optional[ChangeFrequency] = None,
    default_lastmod: Optional[str] = None
) -> List[SitemapEntry]:
    """
    Read sitemap entries from a text file, one URL per line.

    Raises:
        FileNotFoundError: if file_path does not exist
    """
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        entries = parse_url_lines(f, default_priority, default_changefreq, default_lastmod)

    logger.info(f"Read {len(entries)} URLs from {file_path}")
    return entries
