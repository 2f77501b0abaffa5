# cli.py

"""
Точка входа для запуска SiteMapper без установки пакета.

Пример запуска:
    python cli.py --url https://example.com/ --max-depth 2 --parallel 4 --output-file sitemap.xml
"""
from site_mapper.cli import cli


if __name__ == '__main__':
    cli()
