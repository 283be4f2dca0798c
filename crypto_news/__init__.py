"""
Crypto News - article detail pages and market data for a crypto news site.

This package resolves route ids against the latest NewsAPI headlines into
fully populated article records (per-section tags, synthesized content,
relative times) and prints CoinGecko price tables.

Main entry point is the CLI via `crypto-news article` command.

Example:
    $ crypto-news article predictions abc123 --format markdown
"""

__all__ = ["__version__", "ArticleResolver", "DetailPageLoader", "RawArticle", "ResolvedArticle", "get_section"]
__version__ = "0.1.0"

from .core.types import RawArticle, ResolvedArticle
from .page import DetailPageLoader
from .resolver import ArticleResolver
from .sections import get_section
