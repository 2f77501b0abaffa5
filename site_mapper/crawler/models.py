"""
Data models for the SiteMapper crawler.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class PageTask:
    """One unit of crawl work: fetch *url* and follow its links with *depth* hops left."""

    url: str
    depth: int


@dataclass(slots=True, frozen=True)
class DiscoveredURL:
    """A resolved, in-scope URL found on some page; ``loc`` is its canonical string."""

    loc: str
