# === FILE: site_mapper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import Dict, List, Optional

from aiohttp import ClientSession, ClientTimeout, TCPConnector

from site_mapper.aggregator import Aggregator, CrawlResult, ErrorSink
from site_mapper.crawler.fetcher import Fetcher, FetchError
from site_mapper.crawler.link_extractor import extract
from site_mapper.crawler.models import PageTask
from site_mapper.crawler.resolver import InvalidURLError, PageLinks, canonical_url

__all__ = ("SitemapCrawler", "run")

DEFAULT_TIMEOUT: float = 10.0
DEFAULT_USER_AGENT: str = "SiteMapper/1.0"


class SitemapCrawler:
    """
    Depth-bounded concurrent link discovery from a single seed URL.

    A pool of ``parallel`` workers drains a queue of :class:`PageTask`. Each
    task streams its page, resolves the anchors and hands every in-scope URL
    to the :class:`Aggregator`; children get the parent's depth minus one.
    The crawl is over when the queue has no unfinished tasks.
    """

    def __init__(
        self,
        seed: Optional[str],
        max_depth: int,
        parallel: int = 1,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        on_error: Optional[ErrorSink] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if parallel < 1:
            raise ValueError("parallel must be >= 1")
        self.seed = seed
        self.max_depth = max_depth
        self.parallel = parallel
        self.timeout = timeout
        self.user_agent = user_agent
        self.on_error = on_error
        self.session = session
        self._owns_session = session is None
        self.logger = logging.getLogger(__name__)
        # highest remaining depth each URL has been queued with
        self._scheduled: Dict[str, int] = {}
        self.aggregator: Optional[Aggregator] = None
        self._pages_fetched = 0

    async def __aenter__(self) -> SitemapCrawler:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.user_agent},
                connector=TCPConnector(limit=self.parallel),
                raise_for_status=False,
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlResult:
        start = time.monotonic()
        aggregator = self.aggregator = Aggregator(self.on_error)
        self._scheduled.clear()
        self._pages_fetched = 0

        seed = self._validate_seed()
        if seed is None or self.max_depth == 0:
            self.logger.info("Nothing to crawl (seed=%r, max_depth=%d)", self.seed, self.max_depth)
            return aggregator.result
        if self.session is None:
            raise RuntimeError("Session not initialized")

        self.logger.info("Crawl started: %s (max depth %d, parallel %d)", seed, self.max_depth, self.parallel)
        fetcher = Fetcher(self.session)
        queue: asyncio.Queue[PageTask] = asyncio.Queue()
        aggregator.start()
        self._schedule(queue, PageTask(seed, self.max_depth))

        workers: List[asyncio.Task[None]] = [
            asyncio.create_task(self._worker(queue, fetcher, aggregator)) for _ in range(self.parallel)
        ]
        completed = False
        try:
            await queue.join()
            completed = True
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            if not completed:
                await aggregator.abort()

        result = await aggregator.close()
        result.pages_fetched = self._pages_fetched
        result.duration = time.monotonic() - start
        self.logger.info(
            "Crawl finished: %d URLs, %d errors, %d pages fetched in %.2f s",
            len(result.urls), len(result.errors), result.pages_fetched, result.duration,
        )
        return result

    def _validate_seed(self) -> Optional[str]:
        if not self.seed:
            self.logger.error("No seed URL given")
            return None
        try:
            return canonical_url(self.seed)
        except InvalidURLError as exc:
            self.logger.error("Invalid seed: %s", exc)
            return None

    def _schedule(self, queue: asyncio.Queue[PageTask], task: PageTask) -> None:
        """Queue *task* unless the URL was already queued with at least as much depth left."""
        if task.depth <= 0:
            return
        if self._scheduled.get(task.url, 0) >= task.depth:
            return
        self._scheduled[task.url] = task.depth
        queue.put_nowait(task)

    async def _worker(self, queue: asyncio.Queue[PageTask], fetcher: Fetcher, aggregator: Aggregator) -> None:
        while True:
            task = await queue.get()
            try:
                await self._visit(task, queue, fetcher, aggregator)
            except (FetchError, InvalidURLError) as exc:
                await aggregator.report(exc)
            except Exception as exc:
                self.logger.exception("Unexpected failure while crawling %s", task.url)
                await aggregator.report(exc)
            finally:
                queue.task_done()

    async def _visit(
        self,
        task: PageTask,
        queue: asyncio.Queue[PageTask],
        fetcher: Fetcher,
        aggregator: Aggregator,
    ) -> None:
        if task.depth <= 0:
            return
        page = PageLinks(task.url)
        child_depth = task.depth - 1

        async def on_href(raw: str) -> None:
            try:
                link = page.resolve(raw)
            except InvalidURLError as exc:
                await aggregator.report(exc)
                return
            if link is None:
                return
            await aggregator.record(link)
            self._schedule(queue, PageTask(link, child_depth))

        async def on_base(raw: str) -> None:
            try:
                if page.set_base(raw):
                    self.logger.debug("Found base element on %s: %s", task.url, page.active_base)
            except InvalidURLError as exc:
                await aggregator.report(exc)

        async with fetcher.get(task.url) as stream:
            self._pages_fetched += 1
            await extract(stream, on_href, on_base)


async def run(
    seed: Optional[str],
    max_depth: int,
    parallel: int = 1,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    on_error: Optional[ErrorSink] = None,
) -> CrawlResult:
    """Crawl from *seed* and return the discovered URLs and the error stream."""
    crawler = SitemapCrawler(
        seed, max_depth, parallel, timeout=timeout, user_agent=user_agent, on_error=on_error
    )
    async with crawler:
        return await crawler.crawl()
