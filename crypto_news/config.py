"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- NewsApiConfig: NewsAPI article feed settings
- MarketConfig: CoinGecko market data settings
- ResolverConfig: Article resolution settings
- LoggingConfig: Logging behavior
- OutputConfig: Output format settings
- AppConfig: Root configuration container

API keys are never stored in source; they come from the YAML file or, by
default, from environment variables (see get_api_key).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml


@dataclass
class NewsApiConfig:
    """Configuration for the NewsAPI article feed.

    Attributes:
        base_url: NewsAPI base URL
        query: Search query sent as the "q" parameter
        sort_by: NewsAPI sort order
        language: Optional two-letter language filter
        timeout_seconds: HTTP request timeout
        retries: Number of retry attempts for failed requests
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
        api_key: Optional inline API key (overrides env var)
        api_key_env: Environment variable name containing the API key
        use_fallback_feed: Serve the canned articles when the feed is unreachable
    """

    base_url: str = "https://newsapi.org/v2"
    query: str = "cryptocurrency OR bitcoin OR ethereum"
    sort_by: str = "publishedAt"
    language: str | None = None
    timeout_seconds: float = 10.0
    retries: int = 1
    trust_env: bool = True
    user_agent: str = "crypto-news/0.1"
    api_key: str | None = None
    api_key_env: str = "NEWS_API_KEY"
    use_fallback_feed: bool = False


@dataclass
class MarketConfig:
    """Configuration for CoinGecko market data.

    Attributes:
        base_url: CoinGecko API base URL
        vs_currency: Quote currency for prices
        per_page: Rows requested per market page
        timeout_seconds: HTTP request timeout
        retries: Number of retry attempts for failed requests
        trust_env: Whether to respect system proxy settings
        api_key: Optional CoinGecko demo API key
        api_key_env: Environment variable name containing the API key
    """

    base_url: str = "https://api.coingecko.com/api/v3"
    vs_currency: str = "usd"
    per_page: int = 50
    timeout_seconds: float = 10.0
    retries: int = 1
    trust_env: bool = True
    api_key: str | None = None
    api_key_env: str = "COINGECKO_API_KEY"


@dataclass
class ResolverConfig:
    """Configuration for article resolution.

    Attributes:
        pool_size: Articles fetched to resolve the primary article
        related_pool_size: Articles fetched for the related list
        related_limit: Maximum related entries shown
        timezone: IANA timezone for absolute publication dates
    """

    pool_size: int = 50
    related_pool_size: int = 6
    related_limit: int = 3
    timezone: str = "UTC"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "run.jsonl"


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        format: "html", "markdown" or "json"
    """

    format: str = "html"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    news_api: NewsApiConfig = field(default_factory=NewsApiConfig)
    market: MarketConfig = field(default_factory=MarketConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        news_api=NewsApiConfig(**data["news_api"]),
        market=MarketConfig(**data["market"]),
        resolver=ResolverConfig(**data["resolver"]),
        logging=LoggingConfig(**data["logging"]),
        output=OutputConfig(**data["output"]),
    )


def get_api_key(cfg: NewsApiConfig | MarketConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.api_key_env)
