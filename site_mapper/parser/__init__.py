"""site_mapper.parser: чтение ранее сгенерированных sitemap-файлов."""

from .sitemap_parser import parse_sitemap, read_sitemap

__all__ = ["parse_sitemap", "read_sitemap"]
