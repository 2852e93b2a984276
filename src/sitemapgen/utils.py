"""Utility functions for the sitemap generator."""

import logging
import os
import re
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlparse, urlunparse

logger = logging.getLogger(__name__)

# Characters XML 1.0 cannot represent, even as character references
INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def is_valid_url(url: str) -> bool:
    """Check if URL is valid, uses HTTP/HTTPS and is representable in XML."""
    if not isinstance(url, str) or INVALID_XML_CHARS.search(url):
        return False
    try:
        parsed = urlparse(url)
        return parsed.scheme in ("http", "https") and bool(parsed.hostname)
    except (ValueError, TypeError):
        return False


def normalize_url(url: str) -> str:
    """
    Canonicalize URL for deduplication.

    Drops the fragment, lower-cases scheme and host, turns an empty path into
    "/" and strips a trailing slash from any other path. The query string is
    kept as-is. Unparseable input is returned unchanged.
    """
    try:
        parsed = urlparse(url)
    except (ValueError, TypeError):
        return url

    # Remove trailing slash from path (except for root)
    path = parsed.path.rstrip("/") or "/"

    parsed = parsed._replace(
        scheme=parsed.scheme.lower(),
        netloc=parsed.netloc.lower(),
        path=path,
        fragment="",
    )
    return urlunparse(parsed)


def extract_host(url: str) -> str:
    """Extract the lower-cased host name (without port) from URL."""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Set up logging configuration."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        create_directory_if_not_exists(os.path.dirname(log_file))
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human-readable string."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = seconds / 60
        return f"{minutes:.1f}m"
    else:
        hours = seconds / 3600
        return f"{hours:.1f}h"


def format_number(number: int) -> str:
    """Format number with thousands separators."""
    return f"{number:,}"


def get_current_date() -> str:
    """Get the current UTC date as used in <lastmod> (YYYY-MM-DD)."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def parse_content_type(content_type: Optional[str]) -> str:
    """Parse content type header to extract main type."""
    if not content_type:
        return "unknown"

    # Split on semicolon to remove charset and other parameters
    return content_type.split(";")[0].strip().lower()


def is_html_content(content_type: Optional[str]) -> bool:
    """Check if content type indicates HTML content."""
    return parse_content_type(content_type) in ("text/html", "application/xhtml+xml")


def create_directory_if_not_exists(directory: str) -> None:
    """Create directory if it doesn't exist."""
    if directory:
        os.makedirs(directory, exist_ok=True)


def get_file_size_mb(file_path: str) -> float:
    """Get file size in megabytes."""
    try:
        return os.path.getsize(file_path) / (1024 * 1024)
    except OSError:
        return 0.0
