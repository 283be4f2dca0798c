from __future__ import annotations

from typing import Any

from ..core.tags import contains_any
from ..core.types import RawArticle
from .base import MockArticle, MockRelated, SectionProfile

_BULLISH = ("HIGH", "SURGE", "ADOPTION")
_REGULATORY = ("REGULATION", "SEC", "GOVERNMENT")


class NewsSection(SectionProfile):
    name = "news"
    category = "NEWS"
    default_title = "Cryptocurrency News Update"
    default_author = "Crypto Reporter"
    default_excerpt = "Latest cryptocurrency news and market developments."
    default_read_time = "3 min read"
    # news_N ids belong to the canned feed and always render the mock article
    fallback_prefixes = ("fallback_", "news_")
    vocabulary = (
        "BTC", "BITCOIN", "ETH", "ETHEREUM", "XRP", "SOL", "SOLANA",
        "NEWS", "BREAKING", "CRYPTO", "BLOCKCHAIN", "ADOPTION",
        "REGULATION", "SEC", "GOVERNMENT", "INSTITUTIONAL", "ETF",
        "DEFI", "NFT", "METAVERSE", "WEB3", "MINING",
    )
    default_tags = ("NEWS", "CRYPTO", "BREAKING")
    template = "content/news.html"
    mock = MockArticle(
        title="Bitcoin Reaches New All-Time High Above $95,000",
        time_ago="1 hour ago",
        author="Crypto Reporter",
        excerpt=(
            "Bitcoin surges to unprecedented levels as institutional adoption "
            "accelerates and ETF inflows continue to drive market momentum."
        ),
        tags=("NEWS", "BITCOIN", "ATH", "BREAKING"),
        read_time="3 min read",
    )
    mock_related = (
        MockRelated("related_1", "Ethereum Layer 2 Solutions See Record Transaction Volume", "2 hours ago"),
        MockRelated("related_2", "Major Bank Announces Cryptocurrency Trading Services", "4 hours ago"),
        MockRelated("related_3", "Regulatory Clarity Boosts Institutional Crypto Adoption", "6 hours ago"),
    )

    def content_context(self, raw: RawArticle) -> dict[str, Any]:
        context = super().content_context(raw)
        title = raw.title or ""
        context["bullish"] = contains_any(title, _BULLISH)
        context["regulatory"] = contains_any(title, _REGULATORY)
        return context
