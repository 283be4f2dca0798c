"""Tests for the NewsAPI client using httpx.MockTransport."""

import asyncio
from datetime import datetime, timezone

import httpx

from crypto_news.config import NewsApiConfig
from crypto_news.fetch.news_client import NewsClient, fallback_articles, transform_article

PAYLOAD = {
    "status": "ok",
    "totalResults": 2,
    "articles": [
        {
            "source": {"id": None, "name": "CoinDesk"},
            "author": "Jane Doe",
            "title": "Bitcoin climbs",
            "description": "BTC rallies past resistance.",
            "url": "https://example.com/btc",
            "urlToImage": "https://example.com/btc.png",
            "publishedAt": "2026-10-17T12:00:00Z",
            "content": "Bitcoin rose on Friday...",
        },
        {
            "source": {"id": None, "name": "The Block"},
            "author": None,
            "title": "Ether steady",
            "description": None,
            "url": "https://example.com/eth",
            "urlToImage": None,
            "publishedAt": "2026-10-17T10:00:00Z",
            "content": None,
        },
    ],
}


def _cfg(**overrides) -> NewsApiConfig:
    cfg = NewsApiConfig(retries=0)
    for key, value in overrides.items():
        setattr(cfg, key, value)
    return cfg


def test_get_latest_news_transforms_articles():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["key"] = request.headers.get("X-Api-Key")
        return httpx.Response(200, json=PAYLOAD)

    client = NewsClient(_cfg(), api_key="secret", transport=httpx.MockTransport(handler))
    resp = client.get_latest_news(limit=2)

    assert resp.success
    assert resp.total_results == 2
    assert seen["path"] == "/v2/everything"
    assert seen["params"]["pageSize"] == "2"
    assert seen["params"]["sortBy"] == "publishedAt"
    assert seen["key"] == "secret"

    first = resp.data[0]
    assert first.id == "https://example.com/btc"
    assert first.summary == "BTC rallies past resistance."
    assert first.image_url == "https://example.com/btc.png"
    assert first.published_at == "2026-10-17T12:00:00Z"
    assert first.source == "CoinDesk"
    assert resp.data[1].summary is None


def test_get_latest_news_reports_http_errors():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={}))
    client = NewsClient(_cfg(), api_key="k", transport=transport)
    resp = client.get_latest_news()

    assert not resp.success
    assert resp.data == []
    assert resp.status_code == 500
    assert resp.error == "NewsAPI error: 500"


def test_get_latest_news_reports_network_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    client = NewsClient(_cfg(), api_key="k", transport=httpx.MockTransport(handler))
    resp = client.get_latest_news()

    assert not resp.success
    assert resp.error.startswith("ConnectError")


def test_api_error_payload_is_a_failure():
    payload = {"status": "error", "code": "apiKeyInvalid", "message": "Your API key is invalid."}
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
    resp = NewsClient(_cfg(), api_key="bad", transport=transport).get_latest_news()

    assert not resp.success
    assert "Your API key is invalid." in resp.error


def test_fallback_feed_replaces_failures():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    client = NewsClient(_cfg(use_fallback_feed=True), api_key="k", transport=transport)
    resp = client.get_latest_news(limit=4)

    assert resp.success
    assert [article.id for article in resp.data] == ["news_1", "news_2", "news_3", "news_4"]


def test_async_variant_matches_sync():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=PAYLOAD))
    client = NewsClient(_cfg(), api_key="k", transport=transport)
    resp = asyncio.run(client.aget_latest_news(limit=2))

    assert resp.success
    assert [article.title for article in resp.data] == ["Bitcoin climbs", "Ether steady"]


def test_api_key_comes_from_environment(monkeypatch):
    monkeypatch.setenv("NEWS_API_KEY", "from-env")
    assert NewsClient(_cfg()).api_key == "from-env"


def test_fallback_articles_are_two_hours_apart():
    now = datetime(2026, 10, 17, 15, 0, tzinfo=timezone.utc)
    articles = fallback_articles(now)

    assert len(articles) == 6
    assert articles[0].published_at == "2026-10-17T13:00:00+00:00"
    assert articles[5].published_at == "2026-10-17T03:00:00+00:00"
    assert articles[0].url == "#"


def test_transform_article_handles_missing_source():
    raw = transform_article({"url": "https://example.com/x", "title": "X"})
    assert raw.id == "https://example.com/x"
    assert raw.source is None
