"""
Remote data clients.

This package wraps the NewsAPI article feed and CoinGecko market data.
Clients return result objects and never raise on network failures.
"""

from .market_client import CoinRow, GlobalStats, MarketClient, MarketResponse
from .news_client import NewsClient, fallback_articles, transform_article

__all__ = [
    "NewsClient",
    "fallback_articles",
    "transform_article",
    "MarketClient",
    "MarketResponse",
    "CoinRow",
    "GlobalStats",
]
