"""Tests for detail page loading and stale-result handling."""

import asyncio
from datetime import datetime, timezone

import pytest

from crypto_news.core.types import NewsResponse, RawArticle
from crypto_news.page import DetailPageLoader
from crypto_news.resolver import ArticleResolver

NOW = datetime(2026, 10, 17, 15, 4, tzinfo=timezone.utc)

POOL = [RawArticle(id=f"a{i}", title=f"Headline {i}") for i in range(6)]


class FakeSource:
    def __init__(self, response: NewsResponse):
        self.response = response
        self.limits: list[int] = []
        self.on_fetch = None

    async def aget_latest_news(self, limit: int = 12, page: int = 1) -> NewsResponse:
        self.limits.append(limit)
        if self.on_fetch is not None:
            self.on_fetch()
        await asyncio.sleep(0)
        return NewsResponse(
            success=self.response.success,
            data=self.response.data[:limit],
            error=self.response.error,
        )


def _loader(source: FakeSource, section: str = "news") -> DetailPageLoader:
    return DetailPageLoader(
        ArticleResolver(section),
        source,
        pool_size=50,
        related_pool_size=6,
        clock=lambda: NOW,
    )


def test_load_resolves_article_and_related():
    source = FakeSource(NewsResponse(success=True, data=POOL))
    view = asyncio.run(_loader(source).load("5"))

    assert view is not None
    assert view.article.id == "a5"
    assert [item.id for item in view.related] == ["a0", "a1", "a2"]
    assert view.error is None
    assert view.epoch == 1
    assert sorted(source.limits) == [6, 50]


def test_failed_fetch_renders_mock_with_advisory():
    source = FakeSource(NewsResponse(success=False, error="NewsAPI error: 500"))
    view = asyncio.run(_loader(source, "opinion").load("xyz"))

    assert view.article.id == "xyz"
    assert view.article.title.startswith("Cryptocurrency Market Analysis")
    assert view.error == "NewsAPI error: 500"
    assert len(view.related) == 3


def test_stale_load_is_discarded():
    source = FakeSource(NewsResponse(success=True, data=POOL))
    loader = _loader(source)
    source.on_fetch = loader.invalidate

    assert asyncio.run(loader.load("a1")) is None


def test_newer_navigation_wins():
    source = FakeSource(NewsResponse(success=True, data=POOL))
    loader = _loader(source)

    async def navigate_twice():
        first = asyncio.create_task(loader.load("a1"))
        await asyncio.sleep(0)
        second = asyncio.create_task(loader.load("a2"))
        return await asyncio.gather(first, second)

    first, second = asyncio.run(navigate_twice())
    assert first is None
    assert second.article.id == "a2"
    assert second.epoch == 2


def test_retry_reruns_last_navigation():
    source = FakeSource(NewsResponse(success=False, error="offline"))
    loader = _loader(source)
    failed = loader.load_sync("a4")
    assert failed.error == "offline"

    source.response = NewsResponse(success=True, data=POOL)
    view = asyncio.run(loader.retry())
    assert view.error is None
    assert view.article.id == "a4"


def test_retry_without_load_raises():
    with pytest.raises(RuntimeError):
        asyncio.run(_loader(FakeSource(NewsResponse(success=True))).retry())


class RaisingSource(FakeSource):
    def __init__(self, response: NewsResponse, failing_limit: int):
        super().__init__(response)
        self.failing_limit = failing_limit

    async def aget_latest_news(self, limit: int = 12, page: int = 1) -> NewsResponse:
        if limit == self.failing_limit:
            raise RuntimeError("boom")
        return await super().aget_latest_news(limit, page)


def test_raising_related_fetch_keeps_primary_article():
    source = RaisingSource(NewsResponse(success=True, data=POOL), failing_limit=6)
    view = asyncio.run(_loader(source).load("5"))

    assert view.article.id == "a5"
    assert view.error is None
    assert [item.id for item in view.related] == ["related_1", "related_2", "related_3"]


def test_raising_primary_fetch_renders_mock_with_advisory():
    source = RaisingSource(NewsResponse(success=True, data=POOL), failing_limit=50)
    view = asyncio.run(_loader(source).load("5"))

    assert view.article.id == "5"
    assert view.article.title == "Bitcoin Reaches New All-Time High Above $95,000"
    assert view.error == "RuntimeError: boom"
    assert [item.id for item in view.related] == ["a0", "a1", "a2"]
