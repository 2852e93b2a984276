"""End-to-end sitemap generation: manual URLs, crawl, assemble, write."""

import logging
from typing import List, Optional, Sequence
from .types import GenerateOptions, GenerationResult, SitemapEntry
from .assembler import assemble
from .config import get_default_output_path
from .crawler import SitemapCrawler
from .fetcher import PageFetcher
from .sitemap_writer import SitemapWriter
from .url_file import parse_urls_file
from .utils import format_number, is_valid_url, normalize_url

logger = logging.getLogger(__name__)


def _manual_entries(urls: Sequence[str], options: GenerateOptions) -> List[SitemapEntry]:
    if options.file:
        logger.info(f"Reading URLs from file: {options.file}")
        return parse_urls_file(
            options.file,
            default_priority=options.priority,
            default_changefreq=options.changefreq,
            default_lastmod=options.lastmod
        )

    entries = []
    for url in urls:
        if not is_valid_url(url):
            logger.warning(f"Skipping invalid URL: {url}")
            continue
        entries.append(SitemapEntry(
            loc=normalize_url(url),
            lastmod=options.lastmod,
            changefreq=options.changefreq,
            priority=options.priority
        ))
    return entries


async def generate_sitemap(
    urls: Sequence[str],
    options: Optional[GenerateOptions] = None,
    fetcher: Optional[PageFetcher] = None
) -> GenerationResult:
    """
    Generate sitemap file(s) from manual URLs and an optional crawl.

    URLs come from options.file when given, otherwise from urls. The first
    of urls is crawled when crawling is enabled or no file was given; crawled
    entries never override manual ones.

    Raises:
        EmptySitemapError: if no URL is left to write
        FileNotFoundError: if options.file does not exist
    """
    options = options or GenerateOptions()
    manual = _manual_entries(urls, options)

    crawled: List[SitemapEntry] = []
    statistics = None
    if urls and (options.crawl or not options.file):
        seed_url = urls[0]
        if is_valid_url(seed_url):
            crawler = SitemapCrawler(
                seed_url,
                options.policy,
                fetcher=fetcher,
                show_progress=options.show_progress
            )
            crawled = await crawler.crawl()
            statistics = crawler.statistics
        else:
            logger.warning(f"Not crawling invalid seed URL: {seed_url}")

    assembly = assemble(
        manual,
        crawled,
        max_per_file=options.max_urls_per_sitemap,
        build_index=options.index
    )
    logger.info(f"Total URLs: {format_number(assembly.total_entries)}")

    writer = SitemapWriter(
        output_path=options.output or get_default_output_path(),
        compress=options.compress,
        pretty=options.pretty,
        sitemap_base_url=options.sitemap_base_url
    )
    sitemap_files, index_file = writer.write(assembly)

    return GenerationResult(
        sitemap_files=sitemap_files,
        index_file=index_file,
        total_urls=assembly.total_entries,
        crawled_urls=len(crawled),
        manual_urls=len(manual),
        statistics=statistics
    )
