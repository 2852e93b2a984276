"""Merging manual and crawled entries and splitting them into sitemap files."""

import logging
from dataclasses import replace
from typing import Dict, List, Sequence
from .config import DEFAULT_MAX_URLS_PER_SITEMAP
from .types import AssemblyResult, SitemapEntry
from .utils import format_number, normalize_url

logger = logging.getLogger(__name__)


class EmptySitemapError(ValueError):
    """Raised when there is no entry left to put in a sitemap."""


def merge_entries(
    manual_entries: Sequence[SitemapEntry],
    crawled_entries: Sequence[SitemapEntry]
) -> List[SitemapEntry]:
    """
    Merge entries keyed by canonical loc.

    Manual entries go in first and always win over a crawled entry for the
    same URL. Order is first-insertion order.
    """
    merged: Dict[str, SitemapEntry] = {}

    for entry in manual_entries:
        loc = normalize_url(entry.loc)
        merged[loc] = entry if entry.loc == loc else replace(entry, loc=loc)

    for entry in crawled_entries:
        loc = normalize_url(entry.loc)
        if loc not in merged:
            merged[loc] = entry if entry.loc == loc else replace(entry, loc=loc)

    return list(merged.values())


def chunk_entries(entries: List[SitemapEntry], chunk_size: int) -> List[List[SitemapEntry]]:
    """Split entries into consecutive chunks of at most chunk_size."""
    if chunk_size < 1:
        raise ValueError("Chunk size must be at least 1")
    return [entries[i:i + chunk_size] for i in range(0, len(entries), chunk_size)]


def assemble(
    manual_entries: Sequence[SitemapEntry],
    crawled_entries: Sequence[SitemapEntry],
    max_per_file: int = DEFAULT_MAX_URLS_PER_SITEMAP,
    build_index: bool = False
) -> AssemblyResult:
    """
    Merge entries and partition them for output.

    The result is split into several chunks only when indexing is requested
    and the merged set is larger than max_per_file; otherwise one chunk holds
    everything.

    Raises:
        EmptySitemapError: if neither input yields an entry
    """
    merged = merge_entries(manual_entries, crawled_entries)

    if not merged:
        raise EmptySitemapError(
            "No URLs to generate sitemap. Provide URLs via file, CLI, or enable crawling."
        )

    logger.info(
        f"Merged {format_number(len(manual_entries))} manual and "
        f"{format_number(len(crawled_entries))} crawled URLs into {format_number(len(merged))}"
    )

    if build_index and len(merged) > max_per_file:
        chunks = chunk_entries(merged, max_per_file)
        logger.info(f"Split into {len(chunks)} sitemaps of at most {format_number(max_per_file)} URLs")
        return AssemblyResult(chunks=chunks, index_needed=True)

    if len(merged) > max_per_file:
        logger.warning(
            f"{format_number(len(merged))} URLs exceed the per-file limit of "
            f"{format_number(max_per_file)}; enable the sitemap index to split them"
        )

    return AssemblyResult(chunks=[merged], index_needed=False)
