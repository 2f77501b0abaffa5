# File: tests/test_aggregator.py
import asyncio

import pytest

from site_mapper.aggregator import Aggregator, CrawlResult


@pytest.mark.asyncio()
async def test_duplicates_are_collapsed():
    agg = Aggregator()
    agg.start()
    for loc in ("https://a.example/x", "https://a.example/y", "https://a.example/x"):
        await agg.record(loc)
    result = await agg.close()
    assert isinstance(result, CrawlResult)
    assert result.locations() == ["https://a.example/x", "https://a.example/y"]
    assert result.errors == []


@pytest.mark.asyncio()
async def test_errors_are_forwarded_to_sink():
    seen = []
    agg = Aggregator(on_error=seen.append)
    agg.start()
    err = RuntimeError("boom")
    await agg.report(err)
    await agg.record("https://a.example/x")
    result = await agg.close()
    assert seen == [err]
    assert result.errors == [err]
    assert list(result.urls) == ["https://a.example/x"]


@pytest.mark.asyncio()
async def test_failing_sink_does_not_stop_aggregation():
    def sink(_):
        raise RuntimeError("sink is broken")

    agg = Aggregator(on_error=sink)
    agg.start()
    await agg.report(ValueError("bad link"))
    await agg.record("https://a.example/x")
    result = await agg.close()
    assert len(result.errors) == 1
    assert "https://a.example/x" in result.urls


@pytest.mark.asyncio()
async def test_concurrent_senders():
    agg = Aggregator()
    agg.start()

    async def sender(n: int) -> None:
        for i in range(20):
            await agg.record(f"https://a.example/{i % 10}")
            if i == n:
                await agg.report(ValueError(str(n)))

    await asyncio.gather(*(sender(n) for n in range(5)))
    result = await agg.close()
    assert len(result.urls) == 10
    assert len(result.errors) == 5


@pytest.mark.asyncio()
async def test_close_without_start_returns_empty_result():
    result = await Aggregator().close()
    assert result.urls == {}
    assert result.errors == []


@pytest.mark.asyncio()
async def test_abort_stops_consumer():
    agg = Aggregator()
    agg.start()
    assert agg.running
    await agg.abort()
    assert not agg.running
    # aborting twice is harmless
    await agg.abort()
