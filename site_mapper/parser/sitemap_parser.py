# File: site_mapper/parser/sitemap_parser.py
"""site_mapper.parser.sitemap_parser: Модуль для парсинга sitemap.xml и извлечения URL."""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from lxml import etree


def parse_sitemap(xml_content: Union[str, bytes]) -> List[str]:
    """Разбирает XML content sitemap и возвращает список URL из тегов <loc>.

    Args:
        xml_content: строка или байты с содержимым sitemap.xml.

    Returns:
        Список URL, найденных в <loc> тегах, в порядке документа.

    Пример:
    ```python
    from site_mapper.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', encoding='utf-8') as f:
        content = f.read()
    urls = parse_sitemap(content)
    print(urls)
    ```
    """
    if isinstance(xml_content, str):
        xml_content = xml_content.encode("utf-8")
    parser = etree.XMLParser(ns_clean=True, recover=True)
    root = etree.fromstring(xml_content, parser=parser)
    if root is None:
        return []
    locs = root.findall(".//{*}loc")
    return [loc.text.strip() for loc in locs if loc.text]


def read_sitemap(path: Union[str, Path]) -> List[str]:
    """Читает sitemap-файл с диска и возвращает его <loc> URL."""
    return parse_sitemap(Path(path).read_bytes())
