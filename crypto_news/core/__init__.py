"""
Core domain models and pure helpers.

This package contains data types and formatting logic that is independent
of any network client or output format.
"""

from .types import NewsResponse, PredictionDetails, RawArticle, RelatedArticle, ResolvedArticle
from .formatting import format_published_date, parse_iso8601, read_time, time_ago
from .hashing import hash_index, pool_index, rolling_hash
from .tags import infer_tags

__all__ = [
    "RawArticle",
    "ResolvedArticle",
    "RelatedArticle",
    "PredictionDetails",
    "NewsResponse",
    "format_published_date",
    "parse_iso8601",
    "read_time",
    "time_ago",
    "hash_index",
    "pool_index",
    "rolling_hash",
    "infer_tags",
]
