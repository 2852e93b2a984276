"""Extract outbound hyperlinks from fetched page markup."""

import html
import logging
import re
from typing import Iterable, List
from urllib.parse import urljoin
from bs4 import BeautifulSoup, SoupStrainer
from .utils import is_valid_url

logger = logging.getLogger(__name__)

# Lightweight anchor scan; script-generated or malformed anchors are missed.
ANCHOR_HREF_PATTERN = re.compile(r"""<a[^>]+href=["']([^"']+)["']""", re.IGNORECASE)

_ANCHORS_ONLY = SoupStrainer("a")


def _pattern_hrefs(markup: str) -> Iterable[str]:
    for match in ANCHOR_HREF_PATTERN.finditer(markup):
        yield html.unescape(match.group(1))


def _soup_hrefs(markup: str) -> Iterable[str]:
    soup = BeautifulSoup(markup, "html.parser", parse_only=_ANCHORS_ONLY)
    for link in soup.find_all("a", href=True):
        href = link.get("href")
        if isinstance(href, str):
            yield href


def _resolve(href: str, base_url: str) -> str:
    try:
        return urljoin(base_url, href.strip())
    except ValueError:
        return ""


def extract_links(markup: str, base_url: str, parser: str = "pattern") -> List[str]:
    """
    Extract absolute http(s) links from anchor elements.

    Args:
        markup: Raw page markup
        base_url: Absolute URL of the page, used to resolve relative hrefs
        parser: "pattern" for the regex anchor scan, "html" for BeautifulSoup

    Returns:
        Absolute URLs in document order, without duplicates
    """
    hrefs = _soup_hrefs if parser == "html" else _pattern_hrefs

    links: List[str] = []
    try:
        for href in hrefs(markup):
            absolute_url = _resolve(href, base_url)
            if is_valid_url(absolute_url):
                links.append(absolute_url)
            elif absolute_url.lower().startswith(("http://", "https://")):
                logger.warning(f"Skipping invalid link on {base_url}: {href!r}")
            else:
                logger.debug(f"Skipping non-http link on {base_url}: {href!r}")
    except Exception as e:
        logger.warning(f"Could not extract links from {base_url}: {e}")
        return []

    return list(dict.fromkeys(links))
