"""
Core data types for crypto-news.

This module defines the records that flow through the article pipeline:
- RawArticle: Untrusted article record from the news feed (every field optional)
- ResolvedArticle: Fully populated article ready for display
- RelatedArticle: Lightweight summary shown under a detail page
- PredictionDetails: Price panel attached to prediction articles
- NewsResponse: Outcome of a news fetch (never raised, always returned)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


_RAW_FIELDS = (
    "title",
    "summary",
    "description",
    "content",
    "image_url",
    "thumbnail",
    "published_at",
    "created_at",
    "source",
    "author",
    "url",
)


def stringify_id(value: Any) -> str | None:
    """Render an article id the way it appears in a route segment."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class RawArticle:
    """Article record as returned by the news feed.

    No field is guaranteed present. Timestamps are kept as the ISO 8601
    strings the feed delivered; parsing happens during enrichment.

    Attributes:
        id: Feed identifier, stringified
        title: Headline
        summary: Short summary
        description: Alternate summary field used by some feeds
        content: Long-form body text
        image_url: Primary image URL
        thumbnail: Alternate image URL
        published_at: Publication timestamp
        created_at: Alternate timestamp used when published_at is absent
        source: Publication name
        author: Byline
        url: Link to the original story
    """

    id: str | None = None
    title: str | None = None
    summary: str | None = None
    description: str | None = None
    content: str | None = None
    image_url: str | None = None
    thumbnail: str | None = None
    published_at: str | None = None
    created_at: str | None = None
    source: str | None = None
    author: str | None = None
    url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawArticle":
        """Build a RawArticle from an arbitrary mapping.

        Unknown keys are ignored, non-string values are coerced to strings
        and empty strings become None.
        """
        values: dict[str, str | None] = {"id": stringify_id(data.get("id"))}
        for name in _RAW_FIELDS:
            value = data.get(name)
            if isinstance(value, dict):
                # NewsAPI nests the source as {"id": ..., "name": ...}
                value = value.get("name")
            if value is None or value == "":
                values[name] = None
            else:
                values[name] = str(value)
        return cls(**values)

    @property
    def timestamp(self) -> str | None:
        return self.published_at or self.created_at

    @property
    def lead(self) -> str | None:
        return self.summary or self.description

    @property
    def image(self) -> str | None:
        return self.image_url or self.thumbnail


@dataclass(frozen=True)
class PredictionDetails:
    """Price panel shown beside a prediction article."""

    symbol: str
    current_price: str
    price_change: str
    market_cap: str
    volume_24h: str
    summary: tuple[tuple[str, str], ...] = ()
    table_of_contents: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class ResolvedArticle:
    """Article fully populated for display.

    title, time_ago, read_time, author and tags are always set; sections
    fall back to fixed defaults when the feed omitted them.
    """

    id: str
    section: str
    title: str
    category: str
    time_ago: str
    published_at: str
    author: str
    excerpt: str
    content: str
    tags: tuple[str, ...]
    read_time: str
    source: str
    image: str | None = None
    url: str | None = None
    symbol: str | None = None
    prediction: PredictionDetails | None = None

    @property
    def has_external_link(self) -> bool:
        return bool(self.url) and self.url != "#"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "section": self.section,
            "title": self.title,
            "category": self.category,
            "timeAgo": self.time_ago,
            "publishedAt": self.published_at,
            "author": self.author,
            "excerpt": self.excerpt,
            "content": self.content,
            "tags": list(self.tags),
            "readTime": self.read_time,
            "image": self.image,
            "url": self.url,
            "source": self.source,
        }
        if self.symbol:
            data["symbol"] = self.symbol
        if self.prediction:
            data["prediction"] = {
                "symbol": self.prediction.symbol,
                "currentPrice": self.prediction.current_price,
                "priceChange": self.prediction.price_change,
                "marketCap": self.prediction.market_cap,
                "volume24h": self.prediction.volume_24h,
                "summary": [
                    {"type": kind, "text": text} for kind, text in self.prediction.summary
                ],
                "tableOfContents": [
                    {"title": title, "id": anchor}
                    for title, anchor in self.prediction.table_of_contents
                ],
            }
        return data


@dataclass(frozen=True)
class RelatedArticle:
    """Summary entry in the related-articles list."""

    id: str
    title: str
    time_ago: str
    category: str
    url: str | None = None
    symbol: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "timeAgo": self.time_ago,
            "category": self.category,
            "url": self.url,
        }
        if self.symbol:
            data["symbol"] = self.symbol
        return data


@dataclass
class NewsResponse:
    """Result of a news fetch.

    success is False when the request failed; data is then empty and error
    holds the message to surface as an advisory. status_code may be None for
    network-level failures.
    """

    success: bool
    data: list[RawArticle] = field(default_factory=list)
    error: str | None = None
    status_code: int | None = None
    total_results: int | None = None
