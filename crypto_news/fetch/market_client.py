"""
CoinGecko market data client.

Like NewsClient, every call returns a MarketResponse instead of raising:
either data is populated (success) or error is set (failure).
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import time
from typing import Any

import httpx

from ..config import MarketConfig, get_api_key

logger = logging.getLogger(__name__)


@dataclass
class CoinRow:
    """One row of the price table.

    Numeric fields stay None when CoinGecko omits them; sorting treats
    missing values as zero.
    """

    id: str
    symbol: str
    name: str
    image: str | None = None
    current_price: float | None = None
    market_cap: float | None = None
    market_cap_rank: int | None = None
    total_volume: float | None = None
    price_change_percentage_1h: float | None = None
    price_change_percentage_24h: float | None = None
    price_change_percentage_7d: float | None = None
    sparkline: list[float] = field(default_factory=list)

    @classmethod
    def from_api(cls, coin: dict[str, Any]) -> "CoinRow":
        sparkline = (coin.get("sparkline_in_7d") or {}).get("price") or []
        return cls(
            id=str(coin.get("id") or ""),
            symbol=str(coin.get("symbol") or "").upper(),
            name=str(coin.get("name") or ""),
            image=coin.get("image"),
            current_price=coin.get("current_price"),
            market_cap=coin.get("market_cap"),
            market_cap_rank=coin.get("market_cap_rank"),
            total_volume=coin.get("total_volume"),
            price_change_percentage_1h=coin.get("price_change_percentage_1h_in_currency"),
            price_change_percentage_24h=coin.get("price_change_percentage_24h"),
            price_change_percentage_7d=coin.get("price_change_percentage_7d_in_currency"),
            sparkline=[float(p) for p in sparkline if p is not None],
        )


@dataclass
class GlobalStats:
    total_market_cap: float | None
    total_volume: float | None
    market_cap_change_percentage_24h: float | None
    active_cryptocurrencies: int | None = None


@dataclass
class MarketResponse:
    """Result of a market data request.

    data is a list of CoinRow for market pages, the raw coin mapping for a
    single coin, or GlobalStats for the global endpoint.
    """

    success: bool
    data: Any = None
    error: str | None = None
    status_code: int | None = None


class MarketClient:
    def __init__(
        self,
        cfg: MarketConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.cfg = cfg or MarketConfig()
        self._transport = transport

    def get_market_data(self, page: int = 1, per_page: int | None = None) -> MarketResponse:
        """Fetch one page of coins ordered by market cap."""
        params = {
            "vs_currency": self.cfg.vs_currency,
            "order": "market_cap_desc",
            "per_page": per_page or self.cfg.per_page,
            "page": page,
            "sparkline": "true",
            "price_change_percentage": "1h,24h,7d",
        }
        resp = self._get("/coins/markets", params)
        if not resp.success:
            return resp
        if not isinstance(resp.data, list):
            return MarketResponse(success=False, error="Unexpected market payload", status_code=resp.status_code)
        rows = [CoinRow.from_api(coin) for coin in resp.data if isinstance(coin, dict)]
        return MarketResponse(success=True, data=rows, status_code=resp.status_code)

    def get_coin(self, coin_id: str) -> MarketResponse:
        params = {
            "localization": "false",
            "tickers": "false",
            "market_data": "true",
            "community_data": "false",
            "developer_data": "false",
            "sparkline": "true",
        }
        return self._get(f"/coins/{coin_id}", params)

    def get_global_stats(self) -> MarketResponse:
        resp = self._get("/global", {})
        if not resp.success:
            return resp
        data = (resp.data or {}).get("data") or {}
        currency = self.cfg.vs_currency
        stats = GlobalStats(
            total_market_cap=(data.get("total_market_cap") or {}).get(currency),
            total_volume=(data.get("total_volume") or {}).get(currency),
            market_cap_change_percentage_24h=data.get("market_cap_change_percentage_24h_usd"),
            active_cryptocurrencies=data.get("active_cryptocurrencies"),
        )
        return MarketResponse(success=True, data=stats, status_code=resp.status_code)

    def _get(self, path: str, params: dict[str, Any]) -> MarketResponse:
        headers = {"Accept": "application/json"}
        api_key = get_api_key(self.cfg)
        if api_key:
            headers["x-cg-demo-api-key"] = api_key
        kwargs: dict[str, Any] = {
            "base_url": self.cfg.base_url,
            "timeout": self.cfg.timeout_seconds,
            "headers": headers,
            "trust_env": self.cfg.trust_env,
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport

        last_error: str | None = None
        status_code: int | None = None
        for attempt in range(self.cfg.retries + 1):
            try:
                with httpx.Client(**kwargs) as client:
                    resp = client.get(path, params=params)
                resp.raise_for_status()
                return MarketResponse(success=True, data=resp.json(), status_code=resp.status_code)
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code
                last_error = f"CoinGecko error: {status_code}"
            except Exception as exc:  # noqa: BLE001
                last_error = f"{type(exc).__name__}: {exc}"
            if attempt < self.cfg.retries:
                time.sleep(0.5 * (attempt + 1))

        logger.warning("Market request %s failed: %s", path, last_error)
        return MarketResponse(success=False, error=last_error, status_code=status_code)
