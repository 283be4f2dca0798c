"""
In-memory price table operations.

Sorting is stable: rows comparing equal keep their input order in both
directions. Missing numeric values sort as 0, text fields compare
case-insensitively.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, Sequence

from .fetch.market_client import CoinRow

SORT_FIELDS: dict[str, str] = {
    "market_cap_rank": "market_cap_rank",
    "rank": "market_cap_rank",
    "price": "current_price",
    "current_price": "current_price",
    "24h_change": "price_change_percentage_24h",
    "change": "price_change_percentage_24h",
    "1h_change": "price_change_percentage_1h",
    "7d_change": "price_change_percentage_7d",
    "volume": "total_volume",
    "market_cap": "market_cap",
    "name": "name",
    "symbol": "symbol",
}
_TEXT_FIELDS = {"name", "symbol"}

CATEGORIES = ("all", "gainers", "losers")

ASC = "asc"
DESC = "desc"


def _attribute(field_name: str) -> str:
    try:
        return SORT_FIELDS[field_name]
    except KeyError:
        supported = ", ".join(sorted(SORT_FIELDS))
        raise ValueError(f"Unsupported sort field: {field_name}. Supported: {supported}") from None


@dataclass(frozen=True)
class SortState:
    field: str = "market_cap_rank"
    direction: str = ASC

    def toggle(self, field_name: str) -> "SortState":
        """Clicking the active column flips direction; a new column starts ascending."""
        _attribute(field_name)
        if field_name == self.field:
            return SortState(field_name, DESC if self.direction == ASC else ASC)
        return SortState(field_name, ASC)


def sort_rows(rows: Sequence[CoinRow], field_name: str, direction: str = ASC) -> list[CoinRow]:
    attr = _attribute(field_name)
    reverse = direction == DESC

    if attr in _TEXT_FIELDS:
        def key(row: CoinRow):
            return (getattr(row, attr) or "").casefold()
    else:
        def key(row: CoinRow):
            return getattr(row, attr) or 0

    # sorted() with reverse=True keeps equal elements in their original order
    return sorted(rows, key=key, reverse=reverse)


def filter_rows(
    rows: Iterable[CoinRow],
    search: str | None = None,
    category: str = "all",
) -> list[CoinRow]:
    if category not in CATEGORIES:
        raise ValueError(f"Unsupported category: {category}. Supported: {', '.join(CATEGORIES)}")

    result = list(rows)
    if search:
        needle = search.lower()
        result = [
            row for row in result
            if needle in row.name.lower() or needle in row.symbol.lower()
        ]
    if category == "gainers":
        result = [row for row in result if (row.price_change_percentage_24h or 0) > 0]
    elif category == "losers":
        result = [row for row in result if (row.price_change_percentage_24h or 0) < 0]
    return result


def paginate(rows: Sequence[CoinRow], page: int, per_page: int) -> tuple[list[CoinRow], int]:
    """Return the rows of a 1-based page and the total page count."""
    if per_page <= 0:
        raise ValueError("per_page must be positive")
    total_pages = max(1, math.ceil(len(rows) / per_page))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return list(rows[start:start + per_page]), total_pages


@dataclass(frozen=True)
class MarketStats:
    total_market_cap: float
    total_volume: float
    gainers: int
    losers: int


def market_stats(rows: Iterable[CoinRow]) -> MarketStats:
    rows = list(rows)
    return MarketStats(
        total_market_cap=sum(row.market_cap or 0 for row in rows),
        total_volume=sum(row.total_volume or 0 for row in rows),
        gainers=sum(1 for row in rows if (row.price_change_percentage_24h or 0) > 0),
        losers=sum(1 for row in rows if (row.price_change_percentage_24h or 0) < 0),
    )


def format_price(price: float | None) -> str:
    if price is None:
        return "-"
    if price >= 1:
        return f"${price:,.2f}"
    return f"${price:.6f}"


def format_large_number(value: float | None, currency: bool = True) -> str:
    if value is None:
        return "-"
    prefix = "$" if currency else ""
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K")):
        if abs(value) >= threshold:
            return f"{prefix}{value / threshold:.2f}{suffix}"
    return f"{prefix}{value:.2f}"


def format_percentage(percent: float | None) -> str:
    if percent is None:
        return "-"
    sign = "+" if percent >= 0 else ""
    return f"{sign}{percent:.2f}%"
