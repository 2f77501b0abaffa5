# File: site_mapper/report/__init__.py
"""site_mapper.report: запись результатов обхода (sitemap.xml) для CLI и тестов."""

from __future__ import annotations

from .xml_report import SITEMAP_NS, SitemapWriteError, render_sitemap, write_sitemap

__all__ = ["SITEMAP_NS", "SitemapWriteError", "render_sitemap", "write_sitemap"]
