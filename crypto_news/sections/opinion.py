from __future__ import annotations

from ..core.formatting import HOUR_GRANULARITY
from .base import MockArticle, MockRelated, SectionProfile


class OpinionSection(SectionProfile):
    name = "opinion"
    category = "OPINION"
    default_title = "Cryptocurrency Market Analysis"
    default_author = "Crypto Expert"
    default_excerpt = "Expert analysis on cryptocurrency market trends and developments."
    default_read_time = "5 min read"
    time_granularity = HOUR_GRANULARITY
    vocabulary = (
        "BTC", "BITCOIN", "ETH", "ETHEREUM", "DEFI", "NFT", "BLOCKCHAIN",
        "CRYPTO", "ANALYSIS", "OPINION", "MARKET", "TRADING",
    )
    default_tags = ("CRYPTO", "ANALYSIS", "OPINION")
    template = "content/opinion.html"
    mock = MockArticle(
        title="Cryptocurrency Market Analysis: Key Trends to Watch in 2025",
        time_ago="3 hours ago",
        author="Crypto Expert",
        excerpt=(
            "Expert analysis on current cryptocurrency market trends and future outlook "
            "for digital assets in the evolving financial landscape."
        ),
        tags=("CRYPTO", "ANALYSIS", "MARKET", "OPINION"),
        read_time="6 min read",
    )
    mock_related = (
        MockRelated("related_1", "DeFi Protocols Show Strong Growth Despite Market Volatility", "5 hours ago"),
        MockRelated("related_2", "Institutional Bitcoin Adoption Reaches New Milestones", "1 day ago"),
        MockRelated("related_3", "Ethereum Network Upgrades Drive Developer Activity", "2 days ago"),
    )
