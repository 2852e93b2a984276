"""Rendering sitemaps and sitemap indexes as sitemaps.org 0.9 XML."""

import logging
from typing import List, Sequence, Union
from lxml import etree
from .config import DEFAULT_MAX_URLS_PER_SITEMAP, SITEMAP_NAMESPACE
from .types import SitemapEntry, SitemapLocation
from .utils import INVALID_XML_CHARS

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_xml(value: str) -> str:
    """Escape the five XML reserved characters and drop characters XML cannot hold."""
    value = INVALID_XML_CHARS.sub("", value)
    for char, entity in _XML_ESCAPES:
        value = value.replace(char, entity)
    return value


def _element(name: str, text: str, level: int, pretty: bool) -> str:
    indent = "  " * level if pretty else ""
    return f"{indent}<{name}>{escape_xml(text)}</{name}>"


def _join(lines: List[str], pretty: bool) -> str:
    return ("\n" if pretty else "").join(lines)


def render_urlset(entries: Sequence[SitemapEntry], pretty: bool = False) -> str:
    """
    Render a <urlset> document.

    Optional fields are only emitted when set; priority is written with one
    decimal place. With pretty=False the document has no indentation or
    newlines.
    """
    lines = [XML_DECLARATION, f'<urlset xmlns="{SITEMAP_NAMESPACE}">']

    for entry in entries:
        lines.append(("  " if pretty else "") + "<url>")
        lines.append(_element("loc", entry.loc, 2, pretty))

        if entry.lastmod:
            lines.append(_element("lastmod", entry.lastmod, 2, pretty))

        if entry.changefreq:
            lines.append(_element("changefreq", entry.changefreq.value, 2, pretty))

        if entry.priority is not None:
            lines.append(_element("priority", f"{entry.priority:.1f}", 2, pretty))

        lines.append(("  " if pretty else "") + "</url>")

    lines.append("</urlset>")
    return _join(lines, pretty)


def render_sitemap_index(locations: Sequence[SitemapLocation], pretty: bool = False) -> str:
    """Render a <sitemapindex> document listing published sitemap files."""
    lines = [XML_DECLARATION, f'<sitemapindex xmlns="{SITEMAP_NAMESPACE}">']

    for location in locations:
        lines.append(("  " if pretty else "") + "<sitemap>")
        lines.append(_element("loc", location.loc, 2, pretty))
        lines.append(_element("lastmod", location.lastmod, 2, pretty))
        lines.append(("  " if pretty else "") + "</sitemap>")

    lines.append("</sitemapindex>")
    return _join(lines, pretty)


def _parse_sitemap(source: Union[str, bytes]) -> etree._Element:
    # XML text is told apart from a file path by its leading "<"
    if isinstance(source, bytes):
        return etree.fromstring(source)
    if source.lstrip().startswith("<"):
        return etree.fromstring(source.encode("utf-8"))
    return etree.parse(source).getroot()


def validate_sitemap(
    source: Union[str, bytes],
    max_urls_per_sitemap: int = DEFAULT_MAX_URLS_PER_SITEMAP
) -> bool:
    """
    Validate a sitemap or sitemap index.

    Args:
        source: Path of an uncompressed or gzip file, or the XML document itself
        max_urls_per_sitemap: Maximum number of <url>/<sitemap> children

    Returns:
        True when the document is well-formed and structurally valid
    """
    try:
        root = _parse_sitemap(source)
    except (etree.XMLSyntaxError, OSError) as e:
        logger.error(f"Could not parse sitemap: {e}")
        return False

    if root.tag == f"{{{SITEMAP_NAMESPACE}}}urlset":
        child_tag = "url"
    elif root.tag == f"{{{SITEMAP_NAMESPACE}}}sitemapindex":
        child_tag = "sitemap"
    else:
        logger.error(f"Invalid root element: {root.tag}")
        return False

    children = root.findall(f"{{{SITEMAP_NAMESPACE}}}{child_tag}")
    if len(children) > max_urls_per_sitemap:
        logger.error(f"Too many entries in sitemap: {len(children)}")
        return False

    for child in children:
        loc_elem = child.find(f"{{{SITEMAP_NAMESPACE}}}loc")
        if loc_elem is None or not loc_elem.text:
            logger.error("Entry missing location")
            return False

        if not loc_elem.text.startswith(("http://", "https://")):
            logger.error(f"Invalid URL format: {loc_elem.text}")
            return False

        priority_elem = child.find(f"{{{SITEMAP_NAMESPACE}}}priority")
        if priority_elem is not None:
            try:
                priority = float(priority_elem.text)
            except (TypeError, ValueError):
                logger.error(f"Invalid priority: {priority_elem.text}")
                return False
            if not 0.0 <= priority <= 1.0:
                logger.error(f"Priority out of range: {priority}")
                return False

    return True


def get_sitemap_stats(source: Union[str, bytes]) -> dict:
    """Get statistics about a <urlset> sitemap."""
    root = _parse_sitemap(source)
    urls = root.findall(f"{{{SITEMAP_NAMESPACE}}}url")

    stats = {
        "total_urls": len(urls),
        "has_lastmod": 0,
        "has_changefreq": 0,
        "has_priority": 0,
        "priority_distribution": {},
        "changefreq_distribution": {},
    }

    for url_elem in urls:
        if url_elem.find(f"{{{SITEMAP_NAMESPACE}}}lastmod") is not None:
            stats["has_lastmod"] += 1

        changefreq_elem = url_elem.find(f"{{{SITEMAP_NAMESPACE}}}changefreq")
        if changefreq_elem is not None:
            stats["has_changefreq"] += 1
            freq = changefreq_elem.text
            stats["changefreq_distribution"][freq] = stats["changefreq_distribution"].get(freq, 0) + 1

        priority_elem = url_elem.find(f"{{{SITEMAP_NAMESPACE}}}priority")
        if priority_elem is not None:
            stats["has_priority"] += 1
            priority = priority_elem.text
            stats["priority_distribution"][priority] = stats["priority_distribution"].get(priority, 0) + 1

    return stats
