# File: site_mapper/engine.py
"""site_mapper.engine: Orchestration layer для запуска обхода."""

from __future__ import annotations

from typing import Optional

from site_mapper.aggregator import CrawlResult, ErrorSink
from site_mapper.config import CrawlConfig
from site_mapper.crawler.crawler import SitemapCrawler

__all__ = ["start_crawl"]


async def start_crawl(cfg: CrawlConfig, on_error: Optional[ErrorSink] = None) -> CrawlResult:
    """
    Запускает краулер в контексте (с собственной HTTP-сессией) и возвращает результат.

    Parameters
    ----------
    cfg : CrawlConfig
        Конфигурация обхода.
    on_error : callable, optional
        Получатель некритичных ошибок обхода.
    """
    crawler = SitemapCrawler(
        cfg.url,
        cfg.max_depth,
        cfg.parallel,
        timeout=cfg.timeout,
        user_agent=cfg.user_agent,
        on_error=on_error,
    )
    async with crawler:
        return await crawler.crawl()
