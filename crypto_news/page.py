"""
Detail page loading.

DetailPageLoader runs the two fetches behind a detail page (the pool that
resolves the primary article and the pool for the related list)
concurrently, then resolves both against a single clock reading.

Every navigation bumps a request epoch. A load whose epoch is no longer
current when its fetches complete is discarded and returns None, so a late
response can never overwrite the page the user navigated to afterwards.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Callable, Protocol

from .core.types import NewsResponse, RelatedArticle, ResolvedArticle
from .logging_utils import log_event
from .resolver import ArticleResolver

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load article. Please try again later."


class ArticleSource(Protocol):
    """Anything that fetches the latest headlines.

    Sources are expected to report failures through NewsResponse, but an
    exception escaping a fetch is turned into a failed response as well.
    """

    async def aget_latest_news(self, limit: int = ..., page: int = ...) -> NewsResponse: ...


@dataclass
class DetailView:
    """Everything a detail page shows.

    error is an advisory message: it is set when the primary fetch failed,
    while article still holds the fallback content to render.
    """

    article: ResolvedArticle
    related: list[RelatedArticle] = field(default_factory=list)
    error: str | None = None
    epoch: int = 0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_response(result: NewsResponse | BaseException) -> NewsResponse:
    if isinstance(result, BaseException):
        return NewsResponse(success=False, error=f"{type(result).__name__}: {result}")
    return result


class DetailPageLoader:
    def __init__(
        self,
        resolver: ArticleResolver,
        source: ArticleSource,
        pool_size: int = 50,
        related_pool_size: int = 6,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.resolver = resolver
        self.source = source
        self.pool_size = pool_size
        self.related_pool_size = related_pool_size
        self.clock = clock
        self._epoch = 0
        self._last_route: str | None = None

    @property
    def epoch(self) -> int:
        return self._epoch

    def invalidate(self) -> int:
        """Mark in-flight loads stale (the page was left) and return the new epoch."""
        self._epoch += 1
        return self._epoch

    async def load(self, route_id: str) -> DetailView | None:
        """Fetch, resolve and assemble the page for route_id.

        Returns None when another navigation started while the fetches were
        in flight.
        """
        epoch = self.invalidate()
        self._last_route = route_id
        section = self.resolver.section.name

        results = await asyncio.gather(
            self.source.aget_latest_news(self.pool_size),
            self.source.aget_latest_news(self.related_pool_size),
            return_exceptions=True,
        )
        primary, related = (_as_response(result) for result in results)

        if epoch != self._epoch:
            log_event(
                logger,
                "Discarded stale load",
                event="stale_load",
                section=section,
                route_id=route_id,
                epoch=epoch,
                current_epoch=self._epoch,
            )
            return None

        now = self.clock()
        error = None
        pool = primary.data if primary.success else []
        if not primary.success:
            error = primary.error or LOAD_ERROR
        if not related.success:
            logger.warning("Related fetch failed for %s: %s", route_id, related.error)

        article = self.resolver.resolve(route_id, pool, now)
        related_list = self.resolver.related(
            route_id,
            related.data if related.success else [],
            now,
            current_id=article.id,
        )
        log_event(
            logger,
            "Loaded detail page",
            event="page_loaded",
            section=section,
            route_id=route_id,
            article_id=article.id,
            pool_size=len(pool),
            related=len(related_list),
            error=error,
        )
        return DetailView(article=article, related=related_list, error=error, epoch=epoch)

    async def retry(self) -> DetailView | None:
        """Re-run the most recent navigation."""
        if self._last_route is None:
            raise RuntimeError("Nothing to retry; load() has not been called")
        return await self.load(self._last_route)

    def load_sync(self, route_id: str) -> DetailView | None:
        return asyncio.run(self.load(route_id))
