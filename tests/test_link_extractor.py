# File: tests/test_link_extractor.py
from __future__ import annotations

from typing import AsyncIterator, List

import pytest
from lxml import etree

from site_mapper.crawler.link_extractor import _prune, extract, is_candidate_href

PAGE = (
    b"<!DOCTYPE html><html><head><title>t</title>"
    b'<base href="https://cdn.example/"></head><body>'
    b'<a href="/a">A</a><a href="#top">top</a><a href="/">root</a><a href="">empty</a>'
    b'<a name="anchor">no href</a><p><A HREF="/b">B</A></p>'
    b'<div><a href="https://a.example/c?x=1&amp;y=2">C</a>'
    b"</body></html>"
)


async def chunked(data: bytes, size: int) -> AsyncIterator[bytes]:
    for i in range(0, len(data), size):
        yield data[i : i + size]


async def collect(data: bytes, size: int) -> tuple[List[str], List[str]]:
    hrefs: List[str] = []
    bases: List[str] = []

    async def on_href(value: str) -> None:
        hrefs.append(value)

    async def on_base(value: str) -> None:
        bases.append(value)

    await extract(chunked(data, size), on_href, on_base)
    return hrefs, bases


@pytest.mark.parametrize(
    "value,expected",
    [("/a", True), ("a.html", True), ("", False), (None, False), ("/", False), ("#top", False)],
)
def test_is_candidate_href(value, expected):
    assert is_candidate_href(value) is expected


@pytest.mark.asyncio()
@pytest.mark.parametrize("chunk_size", [7, 64, len(PAGE)])
async def test_extract_in_document_order(chunk_size):
    hrefs, bases = await collect(PAGE, chunk_size)
    assert hrefs == ["/a", "/b", "https://a.example/c?x=1&y=2"]
    assert bases == ["https://cdn.example/"]


@pytest.mark.asyncio()
async def test_extract_tolerates_broken_markup():
    html = b'<div><a href="/one">one<span>text<p>unclosed <a href=/two>x</div></span><a href="/three">'
    hrefs, _ = await collect(html, 5)
    assert hrefs == ["/one", "/two", "/three"]


@pytest.mark.asyncio()
async def test_extract_empty_body():
    hrefs, bases = await collect(b"", 10)
    assert hrefs == []
    assert bases == []


@pytest.mark.asyncio()
async def test_extract_strips_href_whitespace():
    html = b'<a href=" /x ">x</a><a href="   ">blank</a><a href=" / ">root</a><a href="\t#top">top</a>'
    hrefs, _ = await collect(html, 4)
    assert hrefs == ["/x"]


@pytest.mark.asyncio()
async def test_extract_large_page_in_small_chunks():
    body = b"".join(b'<div><p><a href="/p%d">%d</a></p></div>' % (i, i) for i in range(5000))
    hrefs, _ = await collect(b"<html><body>" + body + b"</body></html>", 50)
    assert hrefs == [f"/p{i}" for i in range(5000)]


def test_finished_elements_are_pruned():
    parser = etree.HTMLPullParser(events=("start", "end"))
    parser.feed(b"<html><body>" + b'<p><a href="/x">x</a></p>' * 1000)
    body = None
    for action, elem in parser.read_events():
        if action == "start" and elem.tag == "body":
            body = elem
        elif action == "end":
            _prune(elem)
    assert body is not None
    # only the most recent paragraphs may still be attached
    assert len(body) <= 2
