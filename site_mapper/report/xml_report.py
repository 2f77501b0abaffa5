# site_mapper/report/xml_report.py

"""
Генерация sitemap.xml (схема sitemaps.org 0.9) для проекта SiteMapper.

Формат повторяет эталонный вывод: заголовок XML, затем документ, каждая
строка которого начинается с двух пробелов, а вложенность даёт ещё четыре.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

from lxml import etree

__all__ = ["SITEMAP_NS", "XML_HEADER", "SitemapWriteError", "render_sitemap", "write_sitemap"]

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

_PREFIX = "  "
_INDENT = "    "


class SitemapWriteError(OSError):
    """Не удалось удалить или записать файл sitemap."""


def _build_tree(urls: Iterable[str]) -> etree._Element:
    root = etree.Element(f"{{{SITEMAP_NS}}}urlset", nsmap={None: SITEMAP_NS})
    for loc in sorted(set(urls)):
        url_el = etree.SubElement(root, f"{{{SITEMAP_NS}}}url")
        etree.SubElement(url_el, f"{{{SITEMAP_NS}}}loc").text = loc
    if len(root):
        etree.indent(root, space=_INDENT)
    else:
        # пустой urlset пишется парой тегов, а не <urlset/>
        root.text = ""
    return root


def render_sitemap(urls: Iterable[str]) -> str:
    """
    Возвращает текст sitemap для набора URL.

    URL сортируются, чтобы вывод был воспроизводимым; потребитель
    трактует их как множество.
    """
    body = etree.tostring(_build_tree(urls), encoding="unicode")
    lines = [_PREFIX + line for line in body.splitlines()]
    return XML_HEADER + "\n".join(lines)


def write_sitemap(output_path: Union[Path, str], urls: Iterable[str]) -> Path:
    """
    Сохраняет sitemap по указанному пути, предварительно удалив старый файл.

    :param output_path: путь к XML-файлу
    :param urls: канонические URL
    :return: Path сохранённого файла
    :raises SitemapWriteError: пустой путь или ошибка файловой системы

    Пример:
    ```python
    from site_mapper.report.xml_report import write_sitemap
    path = write_sitemap('sitemap.xml', result.locations())
    print(f"Sitemap saved to: {path}")
    ```
    """
    if not str(output_path):
        raise SitemapWriteError("output path is empty")
    output = Path(output_path)
    content = render_sitemap(urls)
    try:
        if output.exists():
            output.unlink()
        output.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise SitemapWriteError(f"cannot write sitemap to {output}: {exc}") from exc
    return output
