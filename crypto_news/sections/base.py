"""Section profile interface shared by every detail-page section."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.formatting import MINUTE_GRANULARITY
from ..core.tags import article_text, infer_tags
from ..core.types import PredictionDetails, RawArticle

LONG_FORM_MIN_CHARS = 200


@dataclass(frozen=True)
class MockArticle:
    """Canned article shown for fallback ids and empty pools."""

    title: str
    time_ago: str
    author: str
    excerpt: str
    tags: tuple[str, ...]
    read_time: str


@dataclass(frozen=True)
class MockRelated:
    id: str
    title: str
    time_ago: str
    symbol: str | None = None


class SectionProfile:
    """Per-section settings and hooks used by the article resolver.

    Subclasses set the class attributes and override the hooks whose
    behavior differs from the defaults below.
    """

    name: str = ""
    category: str = ""
    related_category: str | None = None
    default_title: str = "Cryptocurrency News Update"
    default_author: str = "Crypto Reporter"
    default_excerpt: str = ""
    default_source: str = "Crypto News"
    mock_source: str = "crypto.news"
    default_read_time: str = "3 min read"
    time_granularity: str = MINUTE_GRANULARITY
    fallback_prefixes: tuple[str, ...] = ("fallback_",)
    vocabulary: tuple[str, ...] = ()
    default_tags: tuple[str, ...] = ()
    max_tags: int = 4
    template: str = ""
    mock: MockArticle
    mock_related: tuple[MockRelated, ...] = ()

    def is_fallback_id(self, route_id: str) -> bool:
        return route_id.startswith(self.fallback_prefixes)

    def title_for(self, raw: RawArticle) -> str:
        return raw.title or self.default_title

    def category_for(self, raw: RawArticle) -> str:
        return self.category

    def related_category_for(self, raw: RawArticle) -> str:
        return self.related_category or self.category

    def tags_for(self, raw: RawArticle) -> list[str]:
        return infer_tags(article_text(raw), self.vocabulary, self.max_tags, self.default_tags)

    def symbol_for(self, raw: RawArticle) -> str | None:
        return None

    def prediction_for(self, raw: RawArticle, article_id: str) -> PredictionDetails | None:
        return None

    def mock_prediction(self) -> PredictionDetails | None:
        return None

    def mock_symbol(self) -> str | None:
        return None

    def content_context(self, raw: RawArticle) -> dict[str, Any]:
        """Template variables for a resolved article's content block."""
        content = raw.content or ""
        return {
            "mock": False,
            "long_form": len(content) > LONG_FORM_MIN_CHARS,
            "summary": raw.lead or "",
            "body": content,
            "title": raw.title or "",
        }

    def mock_context(self) -> dict[str, Any]:
        return {"mock": True, "long_form": False, "summary": "", "body": "", "title": ""}
