"""Main CLI entry point for the sitemap generator."""

import asyncio
import logging
import os
import sys
from typing import Optional, Tuple
import click
from . import __version__
from .assembler import EmptySitemapError
from .config import (
    DEFAULT_CHANGEFREQ,
    DEFAULT_LINK_PARSER,
    DEFAULT_MAX_URLS,
    DEFAULT_PRIORITY,
    DEFAULT_REQUEST_DELAY,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from .generator import generate_sitemap
from .types import ChangeFrequency, CrawlPolicy, GenerateOptions, GenerationResult
from .utils import format_duration, format_number, get_file_size_mb, setup_logging

logger = logging.getLogger(__name__)

CHANGEFREQ_CHOICES = [freq.value for freq in ChangeFrequency]


@click.command()
@click.argument('urls', nargs=-1)
@click.option('--file', 'file_path', type=click.Path(), help='Path to file with URLs (one per line)')
@click.option('--crawl/--no-crawl', default=True, help='Crawl the first URL', show_default=True)
@click.option('--depth', type=click.IntRange(min=0), help='Maximum crawl depth (unlimited if omitted)')
@click.option(
    '--max-urls',
    default=DEFAULT_MAX_URLS,
    type=click.IntRange(min=1),
    help='Maximum URLs to crawl and per sitemap file',
    show_default=True
)
@click.option(
    '--priority',
    default=DEFAULT_PRIORITY,
    type=click.FloatRange(0.0, 1.0),
    help='Default priority for listed URLs',
    show_default=True
)
@click.option(
    '--changefreq',
    default=DEFAULT_CHANGEFREQ.value,
    type=click.Choice(CHANGEFREQ_CHOICES),
    help='Default change frequency for listed URLs',
    show_default=True
)
@click.option('--lastmod', help='Default last modified date for listed URLs (YYYY-MM-DD)')
@click.option('--output', type=click.Path(), help='Output path  [default: ./sitemap.xml]')
@click.option('--index', is_flag=True, help='Split into several sitemaps with an index when needed')
@click.option('--compress', is_flag=True, help='Compress output to .xml.gz')
@click.option('--pretty/--compact', default=True, help='Indent XML output', show_default=True)
@click.option('--exclude', multiple=True, help='Exclude URL glob pattern (repeatable)')
@click.option('--include', multiple=True, help='Include URL glob pattern (repeatable)')
@click.option('--follow-external', is_flag=True, help='Follow links to other hosts')
@click.option(
    '--timeout',
    default=DEFAULT_REQUEST_TIMEOUT,
    type=click.FloatRange(min=0, min_open=True),
    help='Request timeout in seconds',
    show_default=True
)
@click.option(
    '--delay',
    default=DEFAULT_REQUEST_DELAY,
    type=click.FloatRange(min=0),
    help='Delay after each request in seconds',
    show_default=True
)
@click.option('--user-agent', default=DEFAULT_USER_AGENT, help='User-Agent header', show_default=True)
@click.option(
    '--link-parser',
    default=DEFAULT_LINK_PARSER,
    type=click.Choice(['pattern', 'html']),
    help='Link extraction strategy',
    show_default=True
)
@click.option('--sitemap-base-url', help='Base URL where sitemap files are published')
@click.option(
    '--log-level',
    default='INFO',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
    help='Logging level',
    show_default=True
)
@click.option('--log-file', type=click.Path(), help='Log file path (optional)')
@click.option('--progress/--no-progress', default=True, help='Show crawl progress bar', show_default=True)
@click.version_option(__version__, prog_name='sitemapgen')
def main(
    urls: Tuple[str, ...],
    file_path: Optional[str],
    crawl: bool,
    depth: Optional[int],
    max_urls: int,
    priority: float,
    changefreq: str,
    lastmod: Optional[str],
    output: Optional[str],
    index: bool,
    compress: bool,
    pretty: bool,
    exclude: Tuple[str, ...],
    include: Tuple[str, ...],
    follow_external: bool,
    timeout: float,
    delay: float,
    user_agent: str,
    link_parser: str,
    sitemap_base_url: Optional[str],
    log_level: str,
    log_file: Optional[str],
    progress: bool
) -> None:
    """
    Generate XML sitemaps by crawling a website and/or from a list of URLs.

    The first URL is crawled (unless --no-crawl is given together with
    --file). URLs read from --file take precedence over crawled ones.
    """
    setup_logging(log_level, log_file)

    if not urls and not file_path:
        click.echo("Error: Provide URLs via arguments or --file", err=True)
        sys.exit(1)

    try:
        options = GenerateOptions(
            file=file_path,
            crawl=crawl,
            policy=CrawlPolicy(
                max_depth=depth,
                max_urls=max_urls,
                exclude_patterns=list(exclude),
                include_patterns=list(include),
                follow_external=follow_external,
                request_timeout=timeout,
                request_delay=delay,
                user_agent=user_agent,
                link_parser=link_parser
            ),
            priority=priority,
            changefreq=ChangeFrequency(changefreq),
            lastmod=lastmod,
            output=output,
            max_urls_per_sitemap=max_urls,
            index=index,
            compress=compress,
            pretty=pretty,
            sitemap_base_url=sitemap_base_url,
            show_progress=progress
        )

        result = asyncio.run(generate_sitemap(list(urls), options))

    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        sys.exit(130)  # Standard exit code for SIGINT

    except EmptySitemapError as e:
        logger.error(str(e))
        sys.exit(1)

    except (OSError, ValueError) as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)

    print_final_summary(result)


def print_final_summary(result: GenerationResult) -> None:
    """Print the written files and how to publish them."""
    click.echo("\n" + "=" * 60)
    click.echo("SITEMAP GENERATION SUMMARY")
    click.echo("=" * 60)

    click.echo(f"Total URLs: {format_number(result.total_urls)}")
    click.echo(f"  From list: {format_number(result.manual_urls)}")
    click.echo(f"  Crawled: {format_number(result.crawled_urls)}")

    stats = result.statistics
    if stats is not None:
        click.echo(f"Pages fetched: {format_number(stats.pages_fetched)}")
        click.echo(f"Failed fetches: {format_number(stats.failed_fetches)}")
        click.echo(f"Crawl duration: {format_duration(stats.duration_seconds)}")

    click.echo("\nGenerated files:")
    for path in result.sitemap_files:
        click.echo(f"  • {path} ({get_file_size_mb(path):.2f} MB)")
    if result.index_file:
        click.echo(f"  • {result.index_file} (index)")

    published = result.index_file or result.sitemap_files[0]
    click.echo("\nNext steps:")
    click.echo("  1. Upload the sitemap files to your website root")
    click.echo("  2. Submit them to search engines")
    click.echo("  3. Add the sitemap location to robots.txt:")
    click.echo(f"     Sitemap: https://your-domain.com/{os.path.basename(published)}")
    click.echo("=" * 60)


if __name__ == '__main__':
    main()
