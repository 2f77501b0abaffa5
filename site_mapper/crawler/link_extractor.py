"""
Streaming link extraction for SiteMapper.

The page body is fed chunk by chunk into lxml's recovering HTML pull parser,
so anchors are reported in document order while the response is still
downloading. Malformed markup is repaired by libxml2 the way browsers do.
Elements are discarded as soon as they end, so memory stays bounded by the
depth of the open element stack rather than by the page size.
"""
from __future__ import annotations

import logging
from typing import AsyncIterable, Awaitable, Callable, Iterable, Tuple

from lxml import etree

__all__ = ("extract", "is_candidate_href")

logger = logging.getLogger(__name__)

HrefCallback = Callable[[str], Awaitable[None]]


def is_candidate_href(value: str | None) -> bool:
    """Anchor hrefs worth resolving: non-empty, not ``/`` and not a fragment."""
    return bool(value) and value != "/" and not value.startswith("#")


def _prune(elem: etree._Element) -> None:
    """Drop a finished element and its already finished siblings from the tree."""
    elem.clear(keep_tail=True)
    parent = elem.getparent()
    if parent is None:
        return
    while elem.getprevious() is not None:
        del parent[0]


async def _dispatch(
    events: Iterable[Tuple[str, etree._Element]],
    on_href: HrefCallback,
    on_base: HrefCallback,
) -> None:
    for action, elem in events:
        if action == "end":
            _prune(elem)
            continue
        tag = elem.tag
        if not isinstance(tag, str):
            continue
        tag = tag.lower()
        if tag == "a":
            href = (elem.get("href") or "").strip()
            if is_candidate_href(href):
                await on_href(href)
        elif tag == "base":
            href = elem.get("href")
            if href is not None:
                await on_base(href)


async def extract(
    stream: AsyncIterable[bytes],
    on_href: HrefCallback,
    on_base: HrefCallback,
) -> None:
    """
    Tokenise *stream* as HTML, calling back for anchors and base elements.

    ``on_href`` receives the ``href`` of every ``<a>`` start tag, stripped of
    surrounding whitespace, that passes :func:`is_candidate_href`;
    ``on_base`` receives the raw ``href`` of every ``<base>`` start tag. Both
    are awaited before tokenising further.
    """
    parser = etree.HTMLPullParser(events=("start", "end"))
    async for chunk in stream:
        if not chunk:
            continue
        parser.feed(chunk)
        await _dispatch(parser.read_events(), on_href, on_base)
    try:
        parser.close()
    except etree.LxmlError as exc:
        # an empty body has no root element; that is just end of input
        logger.debug("Tokeniser stopped: %s", exc)
    await _dispatch(parser.read_events(), on_href, on_base)
