"""Tests for the section registry and per-section inference."""

import pytest

from crypto_news.core.types import RawArticle
from crypto_news.sections import available_sections, get_section
from crypto_news.sections.follow_up import category_from_title
from crypto_news.sections.predictions import extract_symbol, format_prediction_title


def test_available_sections():
    assert available_sections() == ["follow-up", "markets", "news", "opinion", "predictions"]


def test_get_section_accepts_aliases():
    assert get_section("follow_up").name == "follow-up"
    assert get_section(" News ").name == "news"


def test_get_section_unknown_raises():
    with pytest.raises(ValueError, match="Unsupported section"):
        get_section("sports")


def test_fallback_prefixes_are_section_specific():
    assert get_section("news").is_fallback_id("news_3")
    assert get_section("news").is_fallback_id("fallback_1")
    assert not get_section("opinion").is_fallback_id("news_3")
    assert get_section("opinion").is_fallback_id("fallback_1")


def test_follow_up_category_from_title():
    assert category_from_title("Ethereum ETF approval nears") == "ETH"
    assert category_from_title("DeFi yields compress") == "DEFI"
    assert category_from_title("NFT floor prices") == "NFT"
    assert category_from_title("Markets wait for data") == "BTC"
    assert category_from_title(None) == "BTC"


def test_news_tags_default_when_nothing_matches():
    raw = RawArticle(title="Hello world")
    assert get_section("news").tags_for(raw) == ["NEWS", "CRYPTO", "BREAKING"]


def test_news_tags_bounded():
    raw = RawArticle(title="Bitcoin ETF", summary="Ethereum and Solana", content="blockchain news")
    tags = get_section("news").tags_for(raw)
    assert tags == ["BITCOIN", "ETH", "ETHEREUM", "SOL"]


def test_extract_symbol():
    assert extract_symbol("Solana rallies") == "SOL"
    assert extract_symbol("Cardano price", None) == "ADA"
    assert extract_symbol("Quiet session", "dogecoin memes") == "DOGE"
    assert extract_symbol(None) == "ETH"


def test_format_prediction_title():
    assert format_prediction_title("Bitcoin breaks out") == "BTC price prediction: Bitcoin breaks out"
    assert format_prediction_title("ETH price forecast for Q4") == "ETH price forecast for Q4"
    assert format_prediction_title(None) == "Cryptocurrency Price Prediction Analysis"


def test_prediction_tags_lead_with_symbol():
    raw = RawArticle(title="Bitcoin technical analysis")
    assert get_section("predictions").tags_for(raw) == ["BTC", "ANALYSIS", "TECHNICAL"]
