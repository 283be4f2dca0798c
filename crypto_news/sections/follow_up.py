from __future__ import annotations

from ..core.formatting import HOUR_GRANULARITY
from ..core.tags import first_match
from ..core.types import RawArticle
from .base import MockArticle, MockRelated, SectionProfile

# Checked in order; the first row with a keyword in the title wins.
_TITLE_CATEGORIES = (
    (("BITCOIN", "BTC"), "BTC"),
    (("ETHEREUM", "ETH"), "ETH"),
    (("SOLANA", "SOL"), "SOL"),
    (("DEFI",), "DEFI"),
    (("NFT",), "NFT"),
)


def category_from_title(title: str | None) -> str:
    """Pick the coin category a follow-up story is filed under."""
    if not title:
        return "BTC"
    return first_match(title, _TITLE_CATEGORIES, "BTC")


class FollowUpSection(SectionProfile):
    name = "follow-up"
    category = "BTC"
    related_category = "FOLLOW-UP"
    default_title = "Cryptocurrency Market Follow-up"
    default_author = "Crypto Expert"
    default_excerpt = "Follow-up analysis on cryptocurrency market developments."
    default_read_time = "5 min read"
    time_granularity = HOUR_GRANULARITY
    vocabulary = (
        "BTC", "BITCOIN", "ETH", "ETHEREUM", "DEFI", "NFT", "BLOCKCHAIN",
        "CRYPTO", "MARKET", "FOLLOW-UP", "ANALYSIS",
    )
    default_tags = ("CRYPTO", "FOLLOW-UP", "MARKET")
    template = "content/follow_up.html"
    mock = MockArticle(
        title="Cryptocurrency Market Follow-up: Key Developments Continue",
        time_ago="3 hours ago",
        author="Crypto Analyst",
        excerpt=(
            "Continued coverage of major cryptocurrency market developments and their "
            "ongoing implications for investors."
        ),
        tags=("CRYPTO", "FOLLOW-UP", "MARKET", "ANALYSIS"),
        read_time="5 min read",
    )
    mock_related = (
        MockRelated("related_1", "DeFi Market Shows Resilience Amid Regulatory Uncertainty", "4 hours ago"),
        MockRelated("related_2", "Bitcoin Mining Efficiency Improvements Drive Sustainability", "1 day ago"),
        MockRelated("related_3", "Ethereum Staking Rewards Attract Institutional Interest", "2 days ago"),
    )

    def category_for(self, raw: RawArticle) -> str:
        return category_from_title(raw.title)
