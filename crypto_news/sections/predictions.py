from __future__ import annotations

from typing import Any

from ..core.hashing import hash_pick
from ..core.tags import first_match, infer_tags
from ..core.types import PredictionDetails, RawArticle
from .base import MockArticle, MockRelated, SectionProfile

_SYMBOLS = (
    (("BITCOIN", "BTC"), "BTC"),
    (("ETHEREUM", "ETH"), "ETH"),
    (("SOLANA", "SOL"), "SOL"),
    (("CARDANO", "ADA"), "ADA"),
    (("RIPPLE", "XRP"), "XRP"),
    (("DOGECOIN", "DOGE"), "DOGE"),
)
DEFAULT_SYMBOL = "ETH"

_PREDICTION_KEYWORDS = ("prediction", "forecast", "outlook", "target", "analysis")

_PRICES = {
    "BTC": "$111,234.56",
    "ETH": "$4,311.43",
    "SOL": "$218.75",
    "ADA": "$1.23",
    "XRP": "$2.87",
    "DOGE": "$0.34",
}
_PRICE_CHANGES = ("+6.70%", "-2.34%", "+12.45%", "-0.89%", "+8.92%")
_MARKET_CAPS = ("$15,117,200,459", "$8,234,567,890", "$12,456,789,012", "$6,789,012,345")
_VOLUMES = ("$17,784,786,734", "$9,123,456,789", "$14,567,890,123", "$7,890,123,456")


def extract_symbol(title: str | None, summary: str | None = None) -> str:
    """Detect the coin a prediction is about, defaulting to ETH."""
    return first_match(f"{title or ''} {summary or ''}", _SYMBOLS, DEFAULT_SYMBOL)


def format_prediction_title(title: str | None) -> str:
    if not title:
        return "Cryptocurrency Price Prediction Analysis"
    lowered = title.lower()
    if any(keyword in lowered for keyword in _PREDICTION_KEYWORDS):
        return title
    return f"{extract_symbol(title)} price prediction: {title}"


def summary_points(symbol: str) -> tuple[tuple[str, str], ...]:
    return (
        (
            "Market Situation",
            f"Current {symbol} price action shows mixed signals with institutional interest "
            "remaining strong despite short-term volatility.",
        ),
        (
            "Technical Outlook",
            "Key support and resistance levels are being tested, with technical indicators "
            "suggesting potential for continued movement.",
        ),
        (
            "Risk Factors",
            "Market volatility and regulatory developments could impact price movements "
            "in the near term.",
        ),
        (
            "Price Target",
            "Technical analysis suggests potential upside targets based on current market "
            "structure and momentum indicators.",
        ),
    )


def table_of_contents(symbol: str) -> tuple[tuple[str, str], ...]:
    slug = symbol.lower()
    return (
        (f"Current {symbol} price action", f"current-{slug}-price-action"),
        (f"{symbol} price catalysts", f"{slug}-price-catalysts"),
        (f"What could drive {symbol} higher?", f"what-could-drive-{slug}-higher"),
        (f"{symbol} price prediction analysis", f"{slug}-price-prediction-analysis"),
    )


class PredictionsSection(SectionProfile):
    name = "predictions"
    category = "PREDICTIONS"
    default_title = "Cryptocurrency Price Prediction Analysis"
    default_author = "Crypto Analyst"
    default_excerpt = "Expert cryptocurrency price analysis and market predictions."
    default_read_time = "4 min read"
    vocabulary = (
        "PREDICTION", "FORECAST", "ANALYSIS", "TECHNICAL", "SUPPORT", "RESISTANCE",
        "BULLISH", "BEARISH", "TARGET", "BREAKOUT", "CONSOLIDATION",
    )
    default_tags = ("PREDICTION", "CRYPTO", "ANALYSIS")
    template = "content/predictions.html"
    mock = MockArticle(
        title="Ethereum price prediction: ETH targets key resistance levels",
        time_ago="2 hours ago",
        author="Crypto Analyst",
        excerpt=(
            "Technical analysis reveals potential upside targets for Ethereum amid "
            "current market conditions."
        ),
        tags=("ETH", "ETHEREUM", "PREDICTION", "ANALYSIS"),
        read_time="4 min read",
    )
    mock_related = (
        MockRelated("related_1", "Bitcoin price prediction: BTC eyes $120K psychological level", "3 hours ago", "BTC"),
        MockRelated("related_2", "Solana price prediction: SOL shows bullish momentum above $200", "5 hours ago", "SOL"),
        MockRelated("related_3", "Cardano price prediction: ADA consolidates before potential breakout", "1 day ago", "ADA"),
    )

    def title_for(self, raw: RawArticle) -> str:
        return format_prediction_title(raw.title)

    def symbol_for(self, raw: RawArticle) -> str | None:
        return extract_symbol(raw.title, raw.summary)

    def tags_for(self, raw: RawArticle) -> list[str]:
        # The coin symbol always leads, so the list is never empty.
        symbol = extract_symbol(raw.title, raw.summary)
        text = f"{raw.title or ''} {raw.summary or ''} {raw.content or ''}"
        found = infer_tags(text, self.vocabulary, self.max_tags, ())
        return [symbol, *found][: self.max_tags]

    def prediction_for(self, raw: RawArticle, article_id: str) -> PredictionDetails:
        symbol = extract_symbol(raw.title, raw.summary)
        return PredictionDetails(
            symbol=symbol,
            current_price=_PRICES.get(symbol, _PRICES[DEFAULT_SYMBOL]),
            price_change=hash_pick(article_id, _PRICE_CHANGES),
            market_cap=hash_pick(article_id, _MARKET_CAPS),
            volume_24h=hash_pick(article_id, _VOLUMES),
            summary=summary_points(symbol),
            table_of_contents=table_of_contents(symbol),
        )

    def mock_symbol(self) -> str:
        return DEFAULT_SYMBOL

    def mock_prediction(self) -> PredictionDetails:
        return PredictionDetails(
            symbol=DEFAULT_SYMBOL,
            current_price=_PRICES[DEFAULT_SYMBOL],
            price_change=_PRICE_CHANGES[0],
            market_cap=_MARKET_CAPS[0],
            volume_24h=_VOLUMES[0],
            summary=summary_points(DEFAULT_SYMBOL),
            table_of_contents=table_of_contents(DEFAULT_SYMBOL)[:2] + table_of_contents(DEFAULT_SYMBOL)[3:],
        )

    def content_context(self, raw: RawArticle) -> dict[str, Any]:
        context = super().content_context(raw)
        context["symbol"] = extract_symbol(raw.title, raw.summary)
        return context
