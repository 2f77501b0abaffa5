# File: tests/test_sitemap.py
import pytest

from site_mapper.parser.sitemap_parser import parse_sitemap, read_sitemap
from site_mapper.report.xml_report import SitemapWriteError, render_sitemap, write_sitemap

NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def test_render_layout():
    expected = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'  <urlset xmlns="{NS}">\n'
        "      <url>\n"
        "          <loc>https://a.example/x</loc>\n"
        "      </url>\n"
        "  </urlset>"
    )
    assert render_sitemap(["https://a.example/x"]) == expected


def test_render_empty_set():
    text = render_sitemap([])
    assert text.endswith(f'  <urlset xmlns="{NS}"></urlset>')
    assert parse_sitemap(text) == []


def test_render_is_sorted_and_unique():
    text = render_sitemap(["https://a.example/b", "https://a.example/a", "https://a.example/b"])
    assert parse_sitemap(text) == ["https://a.example/a", "https://a.example/b"]


def test_round_trip_preserves_set():
    urls = {
        "https://a.example/x",
        "https://a.example/search?q=1&page=2",
        "https://cdn.example//p",
        "https://a.example/%D0%BF%D1%83%D1%82%D1%8C",
    }
    assert set(parse_sitemap(render_sitemap(urls))) == urls


def test_write_replaces_existing_file(tmp_path):
    out = tmp_path / "sitemap.xml"
    out.write_text("stale content that is much longer than the new sitemap " * 100, encoding="utf-8")
    saved = write_sitemap(out, ["https://a.example/x"])
    assert saved == out
    assert "stale" not in out.read_text(encoding="utf-8")
    assert read_sitemap(out) == ["https://a.example/x"]


def test_write_empty_path_fails():
    with pytest.raises(SitemapWriteError):
        write_sitemap("", ["https://a.example/x"])


def test_write_to_missing_directory_fails(tmp_path):
    with pytest.raises(SitemapWriteError):
        write_sitemap(tmp_path / "missing" / "sitemap.xml", ["https://a.example/x"])
