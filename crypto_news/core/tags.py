from __future__ import annotations

from typing import Iterable, Sequence

from .types import RawArticle


def article_text(article: RawArticle) -> str:
    """Concatenate title, summary and content for keyword matching."""
    return f"{article.title or ''} {article.summary or ''} {article.content or ''}"


def infer_tags(
    text: str,
    vocabulary: Sequence[str],
    max_tags: int,
    defaults: Sequence[str],
) -> list[str]:
    """Return vocabulary terms found in text, in vocabulary order.

    Matching is a case-insensitive substring test. At most max_tags terms
    are returned; when nothing matches the defaults are returned instead, so
    the result is never empty.
    """
    upper = text.upper()
    found = [term for term in vocabulary if term.upper() in upper]
    if not found:
        return list(defaults)
    return found[:max_tags]


def first_match(
    text: str,
    table: Iterable[tuple[Sequence[str], str]],
    default: str,
) -> str:
    """Return the label of the first row whose keywords occur in text."""
    upper = text.upper()
    for keywords, label in table:
        if any(keyword in upper for keyword in keywords):
            return label
    return default


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    upper = text.upper()
    return any(keyword in upper for keyword in keywords)
