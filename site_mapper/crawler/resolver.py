"""
URL parsing, link resolution and scope filtering for SiteMapper.

Links are composed by plain string concatenation of the effective base and
the raw ``href`` value, so ``/p`` under a ``<base href="https://cdn.example/">``
becomes ``https://cdn.example//p``. No path normalisation is applied and two
URLs are the same only when their canonical strings are equal.
"""
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import SplitResult, urljoin, urlsplit, urlunsplit

__all__ = ("InvalidURLError", "parse_url", "canonical_url", "base_scope", "PageLinks")

_ALLOWED_SCHEMES = ("http", "https")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


class InvalidURLError(ValueError):
    """Raised when a string cannot be turned into an absolute http(s) URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


def parse_url(raw: str) -> SplitResult:
    """
    Parse *raw* as an absolute http(s) URL.

    Raises InvalidURLError for control characters, surrounding whitespace,
    a missing or unsupported scheme, an empty host or a malformed port.
    """
    if not isinstance(raw, str) or not raw:
        raise InvalidURLError(str(raw), "empty URL")
    if _CONTROL_RE.search(raw):
        raise InvalidURLError(raw, "control character in URL")
    if raw != raw.strip():
        raise InvalidURLError(raw, "surrounding whitespace in URL")
    try:
        parts = urlsplit(raw)
        # accessing .port validates it
        parts.port
    except ValueError as exc:
        raise InvalidURLError(raw, str(exc)) from exc
    if parts.scheme not in _ALLOWED_SCHEMES:
        raise InvalidURLError(raw, f"unsupported scheme {parts.scheme!r}")
    if not parts.hostname:
        raise InvalidURLError(raw, "missing host")
    return parts


def canonical_url(raw: str) -> str:
    """Return the canonical string form of the absolute URL *raw*."""
    return urlunsplit(parse_url(raw))


def base_scope(url: SplitResult) -> str:
    """``scheme://host`` of a parsed URL: the prefix every in-scope link must carry."""
    return f"{url.scheme}://{url.netloc}"


class PageLinks:
    """
    Per-page link resolution state.

    Holds the page URL and the active ``<base>`` element. The first base href
    that parses successfully wins; later ones are ignored. A relative base
    href is resolved against the page URL. The state never leaves the page
    it was created for.
    """

    def __init__(self, page_url: str) -> None:
        self.page_url: SplitResult = parse_url(page_url)
        self.active_base: Optional[str] = None

    @property
    def effective_base(self) -> str:
        return self.active_base or base_scope(self.page_url)

    def set_base(self, raw_href: str) -> bool:
        """
        Record *raw_href* as the page's base element.

        Returns True if it became the active base, False if a base was
        already set. Raises InvalidURLError when the href does not parse.
        """
        if self.active_base is not None:
            return False
        try:
            absolute = urljoin(urlunsplit(self.page_url), raw_href.strip())
        except ValueError as exc:
            raise InvalidURLError(raw_href, str(exc)) from exc
        self.active_base = canonical_url(absolute)
        return True

    def resolve(self, raw_href: str) -> Optional[str]:
        """
        Turn a raw anchor href into a canonical absolute URL.

        Returns None for links that are rejected (self links to the page
        path and absolute links outside the effective base). Raises
        InvalidURLError when the composed link does not parse. Surrounding
        whitespace is stripped first, as browsers do.
        """
        raw_href = raw_href.strip()
        if raw_href == self.page_url.path:
            return None
        base = self.effective_base
        if raw_href.startswith("http"):
            if not raw_href.startswith(base):
                return None
            return canonical_url(raw_href)
        return canonical_url(base + raw_href)
