from __future__ import annotations

from typing import Any

from ..core.tags import contains_any
from ..core.types import RawArticle
from .base import MockArticle, MockRelated, SectionProfile

_RALLY = ("RALLY", "SURGE", "PUMP")
_BEARISH = ("DUMP", "FALL", "DROP")


class MarketsSection(SectionProfile):
    name = "markets"
    category = "MARKETS"
    default_title = "Cryptocurrency Market Analysis"
    default_author = "Market Analyst"
    default_excerpt = "Latest cryptocurrency market analysis and insights."
    default_read_time = "4 min read"
    vocabulary = (
        "BTC", "BITCOIN", "ETH", "ETHEREUM", "XRP", "SOL", "SOLANA",
        "AAVE", "UNI", "DEFI", "NFT", "RALLY", "PUMP", "SURGE",
        "DUMP", "BEARISH", "BULLISH", "ANALYSIS", "TECHNICAL",
        "SUPPORT", "RESISTANCE", "BREAKOUT", "REVERSAL",
    )
    default_tags = ("MARKETS", "CRYPTO", "ANALYSIS")
    template = "content/markets.html"
    mock = MockArticle(
        title="Cryptocurrency Market Analysis: Current Trends and Outlook",
        time_ago="2 hours ago",
        author="Market Analyst",
        excerpt=(
            "Comprehensive analysis of current cryptocurrency market conditions and "
            "their implications for investors."
        ),
        tags=("MARKETS", "CRYPTO", "ANALYSIS", "TRADING"),
        read_time="4 min read",
    )
    mock_related = (
        MockRelated("related_1", "Bitcoin Technical Analysis Shows Key Support Holding", "3 hours ago"),
        MockRelated("related_2", "Altcoin Market Sentiment Improves Amid Trading Volume Surge", "5 hours ago"),
        MockRelated("related_3", "DeFi Protocols Report Strong Weekly Performance", "1 day ago"),
    )

    def content_context(self, raw: RawArticle) -> dict[str, Any]:
        context = super().content_context(raw)
        title = raw.title or ""
        context["rally"] = contains_any(title, _RALLY)
        context["bearish"] = contains_any(title, _BEARISH)
        return context
