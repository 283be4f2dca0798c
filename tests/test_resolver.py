"""Tests for article resolution, enrichment and related selection."""

from datetime import datetime, timedelta, timezone

from crypto_news.core.hashing import hash_index
from crypto_news.core.types import RawArticle
from crypto_news.resolver import ArticleResolver, select_raw_article
from crypto_news.sections import get_section
from crypto_news.sections.predictions import _MARKET_CAPS, _PRICE_CHANGES

NOW = datetime(2026, 10, 17, 15, 4, tzinfo=timezone.utc)


def _pool(size: int = 6) -> list[RawArticle]:
    return [
        RawArticle(
            id=f"a{i}",
            title=f"Headline {i}",
            summary=f"Summary {i}",
            content=f"Body {i}",
            published_at=(NOW - timedelta(hours=i + 1)).isoformat(),
            source="Wire",
            url=f"https://example.com/{i}",
        )
        for i in range(size)
    ]


def test_exact_id_match_wins():
    pool = _pool()
    assert select_raw_article("a3", pool) is pool[3]


def test_integer_and_hashed_ids_pick_by_index():
    pool = _pool()
    assert select_raw_article("5", pool) is pool[5]
    assert select_raw_article("abc123", pool) is pool[4]
    assert select_raw_article("abc", []) is None


def test_numeric_ids_use_leading_integer():
    pool = _pool()
    assert select_raw_article("1.5", pool) is pool[1]
    assert select_raw_article("1e3", pool) is pool[1]
    assert select_raw_article("-6", pool) is pool[0]


def test_numeric_ids_without_a_slot_resolve_to_mock():
    resolver = ArticleResolver("news")
    mock_title = get_section("news").mock.title
    for route_id in ["", "-1", "Infinity"]:
        assert select_raw_article(route_id, _pool()) is None
        article = resolver.resolve(route_id, _pool(), NOW)
        assert article.id == route_id
        assert article.title == mock_title


def test_resolve_enriches_selected_article():
    article = ArticleResolver("news").resolve("a2", _pool(), NOW)

    assert article.id == "a2"
    assert article.section == "news"
    assert article.title == "Headline 2"
    assert article.category == "NEWS"
    assert article.time_ago == "3 hours ago"
    assert article.published_at == "Oct 17, 2026, 12:04 PM UTC"
    assert article.author == "Wire"
    assert article.excerpt == "Summary 2"
    assert article.read_time == "1 min read"
    assert article.url == "https://example.com/2"
    assert article.tags == ("NEWS", "CRYPTO", "BREAKING")


def test_resolve_is_deterministic():
    resolver = ArticleResolver("opinion")
    pool = _pool()
    assert resolver.resolve("xyz-123", pool, NOW) == resolver.resolve("xyz-123", list(pool), NOW)


def test_fallback_ids_ignore_the_pool():
    resolver = ArticleResolver("markets")
    first = resolver.resolve("fallback_7", _pool(), NOW)
    second = resolver.resolve("fallback_7", [], NOW)

    assert first == second
    assert first.id == "fallback_7"
    assert first.title == get_section("markets").mock.title


def test_empty_pool_returns_mock_under_route_id():
    article = ArticleResolver("news").resolve("xyz", [], NOW)

    assert article.id == "xyz"
    assert article.title == "Bitcoin Reaches New All-Time High Above $95,000"
    assert article.published_at == "Oct 17, 2026, 3:04 PM UTC"
    assert article.source == "crypto.news"
    assert article.tags


def test_missing_fields_fall_back_to_defaults():
    raw = RawArticle(id="bare")
    article = ArticleResolver("follow-up").resolve("bare", [raw], NOW)

    assert article.title == "Cryptocurrency Market Follow-up"
    assert article.author == "Crypto Expert"
    assert article.time_ago == "Recently"
    assert article.read_time == "5 min read"
    assert article.source == "Crypto News"
    assert article.category == "BTC"
    assert article.tags == ("CRYPTO", "FOLLOW-UP", "MARKET")


def test_feed_text_is_escaped_in_content():
    raw = RawArticle(id="x", title="Alert", summary="<script>alert(1)</script>")
    article = ArticleResolver("news").resolve("x", [raw], NOW)

    assert "<script>" not in article.content
    assert "&lt;script&gt;" in article.content


def test_long_form_content_is_split_and_truncated():
    body = ("A" * 150) + "\n" + ("B" * 2500)
    raw = RawArticle(id="long", title="Update", summary="Intro", content=body)
    article = ArticleResolver("news").resolve("long", [raw], NOW)

    assert "</p><p>" in article.content
    assert "B" * 1849 + "...</p>" in article.content
    assert "B" * 1850 not in article.content


def test_short_news_content_reflects_title_keywords():
    resolver = ArticleResolver("news")
    bullish = resolver.resolve("b", [RawArticle(id="b", title="Bitcoin surge")], NOW)
    regulatory = resolver.resolve("r", [RawArticle(id="r", title="SEC weighs rules")], NOW)

    assert "responded positively" in bullish.content
    assert "Industry Impact" in bullish.content
    assert "Regulatory Implications" in regulatory.content


def test_prediction_details_are_deterministic():
    pool = [RawArticle(id=f"p{i}", title=f"Solana rally {i}") for i in range(3)]
    resolver = ArticleResolver("predictions")
    article = resolver.resolve("p1", pool, NOW)

    assert article.symbol == "SOL"
    assert article.title == "SOL price prediction: Solana rally 1"
    assert article.prediction.price_change == _PRICE_CHANGES[hash_index("p1", len(_PRICE_CHANGES))]
    assert article.prediction.market_cap == _MARKET_CAPS[hash_index("p1", len(_MARKET_CAPS))]
    assert len(article.prediction.table_of_contents) == 4
    assert resolver.resolve("p1", pool, NOW) == article


def test_related_excludes_current_and_is_bounded():
    pool = _pool()
    resolver = ArticleResolver("news")
    article = resolver.resolve("a0", pool, NOW)
    related = resolver.related("a0", pool, NOW, current_id=article.id)

    assert [item.id for item in related] == ["a1", "a2", "a3"]
    assert article.id not in {item.id for item in related}
    assert related[0].time_ago == "2 hours ago"
    assert related[0].category == "NEWS"


def test_related_excludes_resolved_id_for_hashed_routes():
    pool = _pool()
    resolver = ArticleResolver("news")
    article = resolver.resolve("abc123", pool, NOW)
    related = resolver.related("abc123", pool, NOW, current_id=article.id)

    assert article.id == "a4"
    assert "a4" not in [item.id for item in related]


def test_related_empty_pool_uses_mock_list():
    related = ArticleResolver("follow-up").related("x", [], NOW)

    assert len(related) == 3
    assert all(item.category == "FOLLOW-UP" for item in related)


def test_related_predictions_carry_symbol():
    pool = [RawArticle(id="1", title="Cardano upgrade"), RawArticle(id="2", title="XRP ruling")]
    related = ArticleResolver("predictions").related("9", pool, NOW)

    assert [item.symbol for item in related] == ["ADA", "XRP"]
    assert related[0].title == "ADA price prediction: Cardano upgrade"
    assert related[0].category == "PREDICTIONS"
