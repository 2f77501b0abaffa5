# === FILE: site_mapper/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SiteMapper через командную строку.

Опции обхода:
  --url URL           Стартовый URL (seed)
  --parallel INT      Число параллельных загрузок (и лимит соединений)
  --output-file PATH  Куда записать sitemap (default: sitemap.xml)
  --max-depth INT     Глубина обхода ссылок
  --config PATH       YAML/JSON-конфиг с теми же настройками
  --timeout SEC       Таймаут одного запроса
  --user-agent TEXT   Заголовок User-Agent

Логирование:
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stdout, если не указан)

Дополнительно:
  --version, -v       Показать версию SiteMapper

Пример:
  site_mapper --url https://example.com/ --max-depth 2 --parallel 4 --output-file sitemap.xml
"""
import asyncio
import sys
from pathlib import Path

import click

from site_mapper import __version__
from site_mapper.config import load_config
from site_mapper.engine import start_crawl
from site_mapper.logger import init_logging
from site_mapper.report.xml_report import SitemapWriteError, write_sitemap

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.option('--url', 'url', default=None, help='Стартовый URL для обхода.')
@click.option(
    '--parallel', 'parallel',
    type=int, default=None,
    help='Число параллельных загрузок [1].'
)
@click.option(
    '--output-file', 'output_file',
    default=None,
    type=click.Path(dir_okay=False),
    help='Путь для сохранения sitemap [sitemap.xml].'
)
@click.option('--max-depth', 'max_depth', type=int, default=None, help='Максимальная глубина обхода [1].')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option('--timeout', 'timeout', type=float, default=None, help='Таймаут одного запроса (секунд) [10].')
@click.option('--user-agent', 'user_agent', default=None, help='Заголовок User-Agent.')
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
def cli(url, parallel, output_file, max_depth, config_path, timeout, user_agent, log_level, log_file):
    """Построить sitemap.xml, рекурсивно обойдя ссылки сайта."""
    logger = init_logging(level=log_level, log_file=str(log_file) if log_file else None)

    # 1. Конфигурация: файл + флаги
    try:
        cfg = load_config(
            config_path,
            url=url,
            parallel=parallel,
            output_file=output_file,
            max_depth=max_depth,
            timeout=timeout,
            user_agent=user_agent,
        )
    except Exception as e:
        print_error(f'Ошибка конфигурации: {e}')

    # 2. Обход
    try:
        result = asyncio.run(start_crawl(cfg))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    # 3. Запись sitemap
    try:
        saved = write_sitemap(cfg.output_file, result.locations())
    except SitemapWriteError as e:
        print_error(f'Ошибка при сохранении sitemap: {e}')

    logger.info("SiteMapper завершил работу.")
    click.echo(f'Sitemap: {saved} ({len(result.urls)} URLs, {len(result.errors)} errors)')


main = cli

if __name__ == "__main__":
    cli()
