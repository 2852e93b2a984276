"""Tests for sitemap writer functionality."""

import gzip
import os
from lxml import etree
import pytest
from sitemapgen.assembler import assemble
from sitemapgen.renderer import validate_sitemap
from sitemapgen.sitemap_writer import SitemapWriter, write_output
from sitemapgen.types import AssemblyResult, SitemapEntry
from sitemapgen.utils import get_current_date

NS = "{http://www.sitemaps.org/schemas/sitemap/0.9}"


@pytest.fixture
def sample_entries():
    """Create sample sitemap entries for testing."""
    return [SitemapEntry(loc=f"https://www.example.com/page{i}", priority=0.5) for i in range(5)]


def test_write_output_creates_directory(tmp_path):
    """Missing parent directories are created."""
    path = tmp_path / "nested" / "dir" / "sitemap.xml"

    written = write_output("<urlset/>", str(path))

    assert written == str(path)
    assert path.read_text(encoding="utf-8") == "<urlset/>"


def test_write_output_compressed(tmp_path):
    """Compressed output gets a .gz suffix and gunzips to the content."""
    content = "<urlset>ü</urlset>"

    written = write_output(content, str(tmp_path / "sitemap.xml"), compress=True)

    assert written.endswith("sitemap.xml.gz")
    assert not os.path.exists(tmp_path / "sitemap.xml")
    with gzip.open(written, "rb") as f:
        assert f.read().decode("utf-8") == content


def test_write_output_keeps_existing_gz_suffix(tmp_path):
    """A path already ending in .gz is not suffixed again."""
    written = write_output("<urlset/>", str(tmp_path / "sitemap.xml.gz"), compress=True)
    assert written == str(tmp_path / "sitemap.xml.gz")


def test_write_output_gz_path_is_compressed(tmp_path):
    """A .gz path is gzipped even when compression was not requested."""
    written = write_output("<urlset/>", str(tmp_path / "sitemap.xml.gz"))

    assert written == str(tmp_path / "sitemap.xml.gz")
    with gzip.open(written, "rb") as f:
        assert f.read() == b"<urlset/>"


def test_gz_output_path_compresses_chunks(tmp_path, sample_entries):
    """An index written to a .gz output compresses every chunk too."""
    writer = SitemapWriter(str(tmp_path / "sitemap.xml.gz"))

    files, index_file = writer.write(assemble([], sample_entries, max_per_file=2, build_index=True))

    assert writer.compress is True
    assert [os.path.basename(f) for f in files] == [
        "sitemap_1.xml.gz", "sitemap_2.xml.gz", "sitemap_3.xml.gz"
    ]
    assert os.path.basename(index_file) == "sitemap_index.xml.gz"


def test_single_sitemap_generation(tmp_path, sample_entries):
    """A single chunk is written to the output path."""
    output = str(tmp_path / "sitemap.xml")
    writer = SitemapWriter(output)

    files, index_file = writer.write(assemble([], sample_entries))

    assert files == [output]
    assert index_file is None
    assert validate_sitemap(output) is True

    root = etree.parse(output).getroot()
    assert len(root.findall(f"{NS}url")) == 5


def test_multiple_sitemap_generation(tmp_path, sample_entries):
    """Chunks are written as {base}_{N}.xml plus {base}_index.xml."""
    writer = SitemapWriter(str(tmp_path / "sitemap.xml"))

    files, index_file = writer.write(assemble([], sample_entries, max_per_file=2, build_index=True))

    assert [os.path.basename(f) for f in files] == ["sitemap_1.xml", "sitemap_2.xml", "sitemap_3.xml"]
    assert os.path.basename(index_file) == "sitemap_index.xml"
    assert not os.path.exists(tmp_path / "sitemap.xml")

    for path in files:
        assert validate_sitemap(path, max_urls_per_sitemap=2) is True

    root = etree.parse(index_file).getroot()
    assert root.tag == f"{NS}sitemapindex"
    assert [e.text for e in root.iter(f"{NS}loc")] == [
        "https://www.example.com/sitemap_1.xml",
        "https://www.example.com/sitemap_2.xml",
        "https://www.example.com/sitemap_3.xml",
    ]
    assert {e.text for e in root.iter(f"{NS}lastmod")} == {get_current_date()}


def test_sitemap_base_url(tmp_path, sample_entries):
    """Chunk locations can be published under a custom base URL."""
    writer = SitemapWriter(
        str(tmp_path / "maps.xml"),
        sitemap_base_url="https://cdn.example.com/sitemaps/"
    )

    _, index_file = writer.write(assemble([], sample_entries, max_per_file=3, build_index=True))

    root = etree.parse(index_file).getroot()
    assert [e.text for e in root.iter(f"{NS}loc")] == [
        "https://cdn.example.com/sitemaps/maps_1.xml",
        "https://cdn.example.com/sitemaps/maps_2.xml",
    ]


def test_compressed_index(tmp_path, sample_entries):
    """Compressed chunks are listed in the index under their .gz names."""
    writer = SitemapWriter(str(tmp_path / "sitemap.xml.gz"), compress=True)

    files, index_file = writer.write(assemble([], sample_entries, max_per_file=3, build_index=True))

    assert [os.path.basename(f) for f in files] == ["sitemap_1.xml.gz", "sitemap_2.xml.gz"]
    assert index_file.endswith("sitemap_index.xml.gz")

    with gzip.open(index_file, "rb") as f:
        root = etree.fromstring(f.read())
    assert [e.text for e in root.iter(f"{NS}loc")] == [
        "https://www.example.com/sitemap_1.xml.gz",
        "https://www.example.com/sitemap_2.xml.gz",
    ]


def test_compact_output(tmp_path, sample_entries):
    """pretty=False writes a single-line document."""
    output = tmp_path / "sitemap.xml"

    SitemapWriter(str(output), pretty=False).write(AssemblyResult(chunks=[sample_entries]))

    assert "\n" not in output.read_text(encoding="utf-8")


def test_chunk_paths(tmp_path):
    """Test chunk and index file naming."""
    writer = SitemapWriter(os.path.join(str(tmp_path), "out", "site.xml"))

    assert writer.chunk_path(1) == os.path.join(str(tmp_path), "out", "site_1.xml")
    assert writer.chunk_path(12) == os.path.join(str(tmp_path), "out", "site_12.xml")
    assert writer.index_path() == os.path.join(str(tmp_path), "out", "site_index.xml")
