"""Sitemap writer for persisting rendered XML sitemaps and sitemap indexes."""

import gzip
import logging
import os
from typing import List, Optional, Sequence, Tuple
from urllib.parse import urlparse
from .types import AssemblyResult, SitemapEntry, SitemapLocation
from .renderer import render_sitemap_index, render_urlset
from .utils import create_directory_if_not_exists, format_number, get_current_date

logger = logging.getLogger(__name__)


def write_output(content: str, output_path: str, compress: bool = False) -> str:
    """
    Write content as UTF-8, optionally gzip-compressed.

    Compressed output gets a ``.gz`` suffix unless output_path already has one.
    A path ending in ``.gz`` is always compressed.

    Returns:
        The path actually written
    """
    create_directory_if_not_exists(os.path.dirname(output_path))
    data = content.encode("utf-8")

    if compress or output_path.endswith(".gz"):
        gz_path = output_path if output_path.endswith(".gz") else f"{output_path}.gz"
        with gzip.open(gz_path, "wb") as f:
            f.write(data)
        logger.info(f"Saved compressed sitemap: {gz_path}")
        return gz_path

    with open(output_path, "wb") as f:
        f.write(data)
    logger.info(f"Saved sitemap: {output_path}")
    return output_path


class SitemapWriter:
    """Writes assembled sitemap chunks, plus an index when there are several."""

    def __init__(
        self,
        output_path: str,
        compress: bool = False,
        pretty: bool = True,
        sitemap_base_url: Optional[str] = None
    ):
        self.output_path = output_path
        self.compress = compress or output_path.endswith(".gz")
        self.pretty = pretty
        self.sitemap_base_url = sitemap_base_url.rstrip("/") if sitemap_base_url else None

        self.output_dir = os.path.dirname(output_path)
        filename = os.path.basename(output_path)
        if filename.endswith(".gz"):
            filename = filename[:-3]
        self.base_name = filename[:-4] if filename.endswith(".xml") else filename

    def write(self, assembly: AssemblyResult) -> Tuple[List[str], Optional[str]]:
        """
        Write sitemap files for an assembly result.

        Returns:
            (sitemap file paths, index file path or None)
        """
        if not assembly.index_needed:
            entries = assembly.chunks[0] if assembly.chunks else []
            path = write_output(render_urlset(entries, self.pretty), self.output_path, self.compress)
            logger.info(f"Generated sitemap with {format_number(len(entries))} URLs")
            return [path], None

        sitemap_files: List[str] = []
        locations: List[SitemapLocation] = []
        lastmod = get_current_date()

        for i, chunk in enumerate(assembly.chunks, 1):
            path = write_output(render_urlset(chunk, self.pretty), self.chunk_path(i), self.compress)
            sitemap_files.append(path)
            locations.append(SitemapLocation(
                loc=self.chunk_location(chunk, os.path.basename(path)),
                lastmod=lastmod
            ))

        index_file = write_output(
            render_sitemap_index(locations, self.pretty),
            self.index_path(),
            self.compress
        )
        logger.info(f"Generated sitemap index with {len(sitemap_files)} sitemaps")
        return sitemap_files, index_file

    def chunk_path(self, number: int) -> str:
        """Path of chunk file number (1-based): ``{base}_{N}.xml``."""
        return os.path.join(self.output_dir, f"{self.base_name}_{number}.xml")

    def index_path(self) -> str:
        """Path of the index file: ``{base}_index.xml``."""
        return os.path.join(self.output_dir, f"{self.base_name}_index.xml")

    def chunk_location(self, chunk: Sequence[SitemapEntry], filename: str) -> str:
        """URL at which a chunk file is published."""
        if self.sitemap_base_url:
            return f"{self.sitemap_base_url}/{filename}"

        parsed = urlparse(chunk[0].loc)
        return f"{parsed.scheme}://{parsed.hostname}/{filename}"
