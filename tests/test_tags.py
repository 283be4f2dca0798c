from crypto_news.core.tags import article_text, contains_any, first_match, infer_tags
from crypto_news.core.types import RawArticle


def test_infer_tags_keeps_vocabulary_order():
    tags = infer_tags("New ETF lifts bitcoin", ("BTC", "BITCOIN", "ETF"), 4, ("NEWS",))
    assert tags == ["BITCOIN", "ETF"]


def test_infer_tags_truncates_to_max():
    tags = infer_tags("alpha beta gamma delta", ("ALPHA", "BETA", "GAMMA", "DELTA"), 3, ("X",))
    assert tags == ["ALPHA", "BETA", "GAMMA"]


def test_infer_tags_never_empty():
    assert infer_tags("nothing here", ("BTC",), 4, ("NEWS", "CRYPTO")) == ["NEWS", "CRYPTO"]


def test_article_text_tolerates_missing_fields():
    raw = RawArticle(title="Title", content="Body")
    assert article_text(raw) == "Title  Body"


def test_first_match_and_contains_any():
    table = ((("BITCOIN", "BTC"), "BTC"), (("DEFI",), "DEFI"))
    assert first_match("DeFi lending grows", table, "BTC") == "DEFI"
    assert first_match("quiet day", table, "BTC") == "BTC"
    assert contains_any("Bitcoin surge continues", ("SURGE",))
    assert not contains_any("sideways", ("SURGE", "PUMP"))
