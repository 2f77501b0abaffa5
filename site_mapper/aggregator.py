# File: site_mapper/aggregator.py
"""site_mapper.aggregator: агрегатор найденных URL и ошибок обхода."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Union

from site_mapper.crawler.models import DiscoveredURL

__all__ = ["CrawlResult", "Aggregator", "ErrorSink"]

logger = logging.getLogger(__name__)

ErrorSink = Callable[[Exception], None]

_Event = Union[DiscoveredURL, Exception]
_CLOSED = object()


@dataclass(slots=True)
class CrawlResult:
    """Итог обхода: уникальные URL (ключ — каноническая строка) и поток ошибок."""

    urls: Dict[str, DiscoveredURL] = field(default_factory=dict)
    errors: List[Exception] = field(default_factory=list)
    pages_fetched: int = 0
    duration: float = 0.0

    def locations(self) -> List[str]:
        """Отсортированный список канонических URL для записи в sitemap."""
        return sorted(self.urls)


class Aggregator:
    """
    Единственный владелец множества найденных URL.

    Задачи обхода отправляют события через очередь размером 1: отправитель
    ждёт, пока агрегатор заберёт предыдущее событие. Состояние меняется
    только в корутине :meth:`_consume`, поэтому блокировки не нужны.
    """

    def __init__(self, on_error: Optional[ErrorSink] = None) -> None:
        self.result = CrawlResult()
        self._on_error = on_error
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=1)
        self._consumer: Optional[asyncio.Task[None]] = None

    def start(self) -> None:
        """Запускает корутину-потребителя событий."""
        if self._consumer is None:
            self._consumer = asyncio.create_task(self._consume())

    @property
    def running(self) -> bool:
        return self._consumer is not None and not self._consumer.done()

    async def record(self, loc: str) -> None:
        """Передаёт найденный канонический URL."""
        await self._queue.put(DiscoveredURL(loc))

    async def report(self, error: Exception) -> None:
        """Передаёт некритичную ошибку в поток ошибок."""
        await self._queue.put(error)

    async def close(self) -> CrawlResult:
        """Сообщает об окончании событий, дожидается разбора очереди и возвращает результат."""
        if self._consumer is None:
            return self.result
        await self._queue.put(_CLOSED)
        await self._consumer
        return self.result

    async def abort(self) -> None:
        """Останавливает потребителя, не дожидаясь оставшихся событий (отмена обхода)."""
        if not self.running:
            return
        self._consumer.cancel()  # type: ignore[union-attr]
        await asyncio.gather(self._consumer, return_exceptions=True)  # type: ignore[arg-type]

    async def _consume(self) -> None:
        while True:
            event = await self._queue.get()
            if event is _CLOSED:
                return
            self._handle(event)  # type: ignore[arg-type]

    def _handle(self, event: _Event) -> None:
        if isinstance(event, Exception):
            self.result.errors.append(event)
            logger.warning("error creating sitemap: %s", event)
            if self._on_error is not None:
                try:
                    self._on_error(event)
                except Exception:
                    logger.exception("Error sink failed for %s", event)
            return
        if event.loc not in self.result.urls:
            self.result.urls[event.loc] = event
            logger.info("found sitemap URL: %s", event.loc)
