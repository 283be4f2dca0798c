"""
Article resolution and enrichment.

ArticleResolver maps a route id and a pool of raw feed articles onto exactly
one ResolvedArticle for a section:

1. Fallback-prefixed ids skip the pool and get the section's mock article
2. An entry whose id equals the route id wins
3. Otherwise the route id picks a pool slot (numeric ids by their leading
   integer modulo the pool size, anything else through the 32-bit rolling
   hash)
4. An empty pool, or a numeric id with no slot, yields the mock article
   under the route id
5. The chosen record is enriched with section tags, content and display fields

Resolution is pure: the same route id, pool and clock reading always produce
an equal record.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
import logging
from typing import Sequence

from .content import ContentRenderer
from .core.formatting import format_published_date, read_time, time_ago
from .core.hashing import pick
from .core.types import RawArticle, RelatedArticle, ResolvedArticle
from .sections import SectionProfile, get_section

logger = logging.getLogger(__name__)

RELATED_LIMIT = 3


def _aware(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def select_raw_article(
    route_id: str,
    pool: Sequence[RawArticle],
) -> RawArticle | None:
    """Pick the pool entry a route id stands for.

    Returns None for an empty pool and for numeric ids that map to no slot
    (blank, negative or non-finite).
    """
    for article in pool:
        if article.id == route_id:
            return article
    if not pool:
        return None
    return pick(route_id, pool)


class ArticleResolver:
    """Resolve detail-page articles for one section.

    Attributes:
        section: The section profile supplying vocabulary, defaults and templates
        tz: Timezone used for absolute publication dates
    """

    def __init__(
        self,
        section: SectionProfile | str,
        tz: tzinfo | None = None,
        renderer: ContentRenderer | None = None,
        related_limit: int = RELATED_LIMIT,
    ):
        self.section = get_section(section) if isinstance(section, str) else section
        self.tz = tz or timezone.utc
        self.related_limit = related_limit
        self._renderer = renderer or ContentRenderer()

    def resolve(
        self,
        route_id: str,
        pool: Sequence[RawArticle],
        now: datetime,
    ) -> ResolvedArticle:
        """Resolve route_id against pool at the instant now."""
        now = _aware(now)
        if self.section.is_fallback_id(route_id):
            logger.debug("Fallback id %s for section %s", route_id, self.section.name)
            return self.mock_article(route_id, now)

        raw = select_raw_article(route_id, pool)
        if raw is None:
            logger.debug("No pool entry for %s; using mock article", route_id)
            return self.mock_article(route_id, now)
        return self.enrich(raw, route_id, now)

    def enrich(self, raw: RawArticle, route_id: str, now: datetime) -> ResolvedArticle:
        """Turn a raw feed record into a display record."""
        section = self.section
        now = _aware(now)
        article_id = raw.id or route_id
        return ResolvedArticle(
            id=article_id,
            section=section.name,
            title=section.title_for(raw),
            category=section.category_for(raw),
            time_ago=time_ago(raw.timestamp, now, section.time_granularity),
            published_at=format_published_date(raw.timestamp, now, self.tz),
            author=raw.author or raw.source or section.default_author,
            excerpt=raw.lead or section.default_excerpt,
            content=self._renderer.render(section.template, section.content_context(raw)),
            tags=tuple(section.tags_for(raw)),
            read_time=read_time(raw.content or raw.summary, section.default_read_time),
            source=raw.source or section.default_source,
            image=raw.image,
            url=raw.url,
            symbol=section.symbol_for(raw),
            prediction=section.prediction_for(raw, article_id),
        )

    def mock_article(self, route_id: str, now: datetime) -> ResolvedArticle:
        """Build the section's canned article under route_id."""
        section = self.section
        mock = section.mock
        return ResolvedArticle(
            id=route_id,
            section=section.name,
            title=mock.title,
            category=section.category,
            time_ago=mock.time_ago,
            published_at=format_published_date(_aware(now), now, self.tz),
            author=mock.author,
            excerpt=mock.excerpt,
            content=self._renderer.render(section.template, section.mock_context()),
            tags=mock.tags,
            read_time=mock.read_time,
            source=section.mock_source,
            symbol=section.mock_symbol(),
            prediction=section.mock_prediction(),
        )

    def related(
        self,
        route_id: str,
        pool: Sequence[RawArticle],
        now: datetime,
        current_id: str | None = None,
    ) -> list[RelatedArticle]:
        """Select up to related_limit entries other than the current article.

        Entries whose id equals route_id (or current_id, the id of the
        resolved primary article) are skipped. An empty pool yields the
        section's fixed mock list.
        """
        section = self.section
        if not pool:
            return [
                RelatedArticle(
                    id=item.id,
                    title=item.title,
                    time_ago=item.time_ago,
                    category=section.related_category or section.category,
                    symbol=item.symbol,
                )
                for item in section.mock_related
            ]

        now = _aware(now)
        excluded = {route_id}
        if current_id:
            excluded.add(current_id)

        related: list[RelatedArticle] = []
        for raw in pool:
            if raw.id in excluded:
                continue
            related.append(
                RelatedArticle(
                    id=raw.id or "",
                    title=section.title_for(raw),
                    time_ago=time_ago(raw.timestamp, now, section.time_granularity),
                    category=section.related_category_for(raw),
                    url=raw.url,
                    symbol=section.symbol_for(raw),
                )
            )
            if len(related) >= self.related_limit:
                break
        return related
