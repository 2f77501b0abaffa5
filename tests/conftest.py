# File: tests/conftest.py
from __future__ import annotations

from typing import Callable, Dict

import pytest
from aiohttp import web

from servers import html_page


@pytest.fixture()
def make_site() -> Callable[[Dict[str, str]], tuple[web.Application, Dict[str, int]]]:
    """
    Build an aiohttp app from a ``{path: html body}`` mapping.

    Returns the app and a hit counter per path, so tests can tell which
    pages were actually fetched.
    """

    def _make(pages: Dict[str, str]) -> tuple[web.Application, Dict[str, int]]:
        app = web.Application()
        hits: Dict[str, int] = {path: 0 for path in pages}

        def handler_for(path: str, body: str):
            async def handler(_):
                hits[path] += 1
                return html_page(body)

            return handler

        for path, body in pages.items():
            app.router.add_get(path, handler_for(path, body))
        return app, hits

    return _make
