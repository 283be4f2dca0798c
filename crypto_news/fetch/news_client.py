"""
NewsAPI client returning raw articles for resolution.

Both the synchronous and the async entry points share the same contract:
they never raise. Network errors, non-2xx statuses and malformed payloads all
come back as NewsResponse(success=False, error=...), with retries and a
linear backoff between attempts. When use_fallback_feed is enabled a failed
request is replaced by the canned fallback articles.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
import logging
import time
from typing import Any

import httpx

from ..config import NewsApiConfig, get_api_key
from ..core.types import NewsResponse, RawArticle

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 12

_FALLBACK_ARTICLES: tuple[dict[str, str], ...] = (
    {
        "id": "news_1",
        "title": "Bitcoin Reaches New All-Time High Above $115,000",
        "summary": (
            "Bitcoin surges to unprecedented levels as institutional adoption accelerates "
            "and ETF inflows continue."
        ),
        "description": (
            "Bitcoin has reached a new all-time high above $115,000, driven by continued "
            "institutional adoption and record ETF inflows."
        ),
        "content": (
            "Bitcoin has reached a new all-time high above $115,000, marking a significant "
            "milestone in the cryptocurrency's price history. The surge comes amid continued "
            "institutional adoption and record inflows into Bitcoin exchange-traded funds."
        ),
        "source": "Crypto News",
        "author": "Market Analyst",
    },
    {
        "id": "news_2",
        "title": "Ethereum Layer 2 Solutions See Record Transaction Volume",
        "summary": (
            "Layer 2 scaling solutions process unprecedented transaction volumes as DeFi "
            "activity surges."
        ),
        "description": (
            "Ethereum Layer 2 solutions are experiencing record transaction volumes as "
            "decentralized finance activity continues to grow."
        ),
        "content": (
            "Ethereum Layer 2 scaling solutions have recorded unprecedented transaction volumes "
            "this week, with Arbitrum and Optimism leading the charge. The surge in activity is "
            "attributed to growing decentralized finance (DeFi) adoption and lower transaction costs."
        ),
        "source": "DeFi Daily",
        "author": "Tech Reporter",
    },
    {
        "id": "news_3",
        "title": "Regulatory Clarity Boosts Cryptocurrency Market Sentiment",
        "summary": (
            "Clear regulatory frameworks in major markets provide confidence for institutional "
            "investors."
        ),
        "description": (
            "New regulatory clarity in key markets is boosting confidence among institutional "
            "cryptocurrency investors."
        ),
        "content": (
            "Recent regulatory developments in the United States and European Union have provided "
            "much-needed clarity for institutional cryptocurrency investors. The clear frameworks "
            "are expected to accelerate mainstream adoption and institutional investment flows."
        ),
        "source": "Regulatory Watch",
        "author": "Policy Expert",
    },
    {
        "id": "news_4",
        "title": "Solana Ecosystem Continues Rapid Growth Trajectory",
        "summary": (
            "Solana's total value locked increases significantly as new projects launch on the "
            "network."
        ),
        "description": (
            "The Solana ecosystem is experiencing rapid growth with increasing total value locked "
            "and new project launches."
        ),
        "content": (
            "The Solana blockchain ecosystem continues its rapid growth trajectory, with total value "
            "locked (TVL) increasing significantly over the past month. New decentralized "
            "applications and DeFi protocols are choosing Solana for its high throughput and low "
            "transaction costs."
        ),
        "source": "Solana Times",
        "author": "Blockchain Reporter",
    },
    {
        "id": "news_5",
        "title": "Central Bank Digital Currencies Gain Global Momentum",
        "summary": "Multiple countries accelerate CBDC development programs with pilot testing phases.",
        "description": (
            "Central banks worldwide are accelerating their digital currency development programs "
            "with expanded pilot testing."
        ),
        "content": (
            "Central Bank Digital Currencies (CBDCs) are gaining momentum globally, with multiple "
            "countries accelerating their development programs. Pilot testing phases are expanding "
            "as central banks explore the potential benefits and challenges of digital national "
            "currencies."
        ),
        "source": "CBDC Report",
        "author": "Financial Analyst",
    },
    {
        "id": "news_6",
        "title": "NFT Market Shows Signs of Recovery",
        "summary": "Non-fungible token trading volumes increase as new utility-focused projects emerge.",
        "description": (
            "The NFT market is showing signs of recovery with increased trading volumes and "
            "utility-focused projects."
        ),
        "content": (
            "The non-fungible token (NFT) market is showing signs of recovery after a prolonged "
            "downturn. Trading volumes have increased significantly, driven by new utility-focused "
            "projects and renewed interest from collectors and investors."
        ),
        "source": "NFT Weekly",
        "author": "Digital Art Reporter",
    },
)


def fallback_articles(now: datetime | None = None, limit: int | None = None) -> list[RawArticle]:
    """Return the canned feed, each entry two hours older than the previous one."""
    now = now or datetime.now(timezone.utc)
    articles = []
    for index, entry in enumerate(_FALLBACK_ARTICLES):
        stamp = (now - timedelta(hours=2 * (index + 1))).isoformat()
        articles.append(
            RawArticle.from_dict(
                {**entry, "published_at": stamp, "created_at": stamp, "url": "#"}
            )
        )
    if limit is not None:
        articles = articles[:limit]
    return articles


def transform_article(article: dict[str, Any]) -> RawArticle:
    """Map one NewsAPI article onto the feed record shape (the url doubles as id)."""
    source = article.get("source")
    source_name = source.get("name") if isinstance(source, dict) else source
    return RawArticle.from_dict(
        {
            "id": article.get("url"),
            "title": article.get("title"),
            "summary": article.get("description"),
            "description": article.get("description"),
            "content": article.get("content"),
            "url": article.get("url"),
            "image_url": article.get("urlToImage"),
            "thumbnail": article.get("urlToImage"),
            "published_at": article.get("publishedAt"),
            "created_at": article.get("publishedAt"),
            "source": source_name,
            "author": article.get("author"),
        }
    )


class NewsClient:
    """Fetch the latest crypto headlines from NewsAPI.

    Attributes:
        cfg: Endpoint, query and retry settings
        api_key: Key sent as the X-Api-Key header; resolved from cfg when omitted
    """

    def __init__(
        self,
        cfg: NewsApiConfig | None = None,
        api_key: str | None = None,
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
    ):
        self.cfg = cfg or NewsApiConfig()
        self.api_key = api_key or get_api_key(self.cfg)
        self._transport = transport

    def _params(self, limit: int, page: int) -> dict[str, Any]:
        params: dict[str, Any] = {
            "q": self.cfg.query,
            "sortBy": self.cfg.sort_by,
            "pageSize": limit,
            "page": page,
        }
        if self.cfg.language:
            params["language"] = self.cfg.language
        return params

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": self.cfg.user_agent}
        if self.api_key:
            headers["X-Api-Key"] = self.api_key
        return headers

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "base_url": self.cfg.base_url,
            "timeout": self.cfg.timeout_seconds,
            "headers": self._headers(),
            "follow_redirects": True,
            "trust_env": self.cfg.trust_env,
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    def get_latest_news(self, limit: int = DEFAULT_LIMIT, page: int = 1) -> NewsResponse:
        """Fetch up to limit articles; never raises."""
        last_error: str | None = None
        status_code: int | None = None

        for attempt in range(self.cfg.retries + 1):
            try:
                with httpx.Client(**self._client_kwargs()) as client:
                    resp = client.get("/everything", params=self._params(limit, page))
                return self._parse(resp)
            except Exception as exc:  # noqa: BLE001
                last_error, status_code = _describe(exc)
                if attempt < self.cfg.retries:
                    time.sleep(0.5 * (attempt + 1))

        return self._failure(last_error, status_code, limit)

    async def aget_latest_news(self, limit: int = DEFAULT_LIMIT, page: int = 1) -> NewsResponse:
        """Async variant of get_latest_news."""
        last_error: str | None = None
        status_code: int | None = None

        for attempt in range(self.cfg.retries + 1):
            try:
                async with httpx.AsyncClient(**self._client_kwargs()) as client:
                    resp = await client.get("/everything", params=self._params(limit, page))
                return self._parse(resp)
            except Exception as exc:  # noqa: BLE001
                last_error, status_code = _describe(exc)
                if attempt < self.cfg.retries:
                    await asyncio.sleep(0.5 * (attempt + 1))

        return self._failure(last_error, status_code, limit)

    def _parse(self, resp: httpx.Response) -> NewsResponse:
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, dict) or payload.get("status") == "error":
            message = payload.get("message") if isinstance(payload, dict) else None
            raise ValueError(f"NewsAPI error: {message or 'unexpected payload'}")
        articles = [
            transform_article(item)
            for item in payload.get("articles") or []
            if isinstance(item, dict)
        ]
        logger.debug("Fetched %d articles", len(articles))
        return NewsResponse(
            success=True,
            data=articles,
            status_code=resp.status_code,
            total_results=payload.get("totalResults"),
        )

    def _failure(self, error: str | None, status_code: int | None, limit: int) -> NewsResponse:
        if self.cfg.use_fallback_feed:
            logger.warning("News feed unavailable (%s); using fallback feed", error)
            articles = fallback_articles(limit=limit)
            return NewsResponse(success=True, data=articles, total_results=len(articles))
        logger.warning("News feed unavailable: %s", error)
        return NewsResponse(success=False, error=error, status_code=status_code)


def _describe(exc: Exception) -> tuple[str, int | None]:
    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        return f"NewsAPI error: {code}", code
    return f"{type(exc).__name__}: {exc}", None
