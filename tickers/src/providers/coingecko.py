"""CoinGecko adapter.

Endpoint: https://api.coingecko.com/api/v3/coins/markets?vs_currency=usd
Rate Limit: 30 calls/min (free)
Symbols: lowercase as returned (e.g., "btc")
"""

from typing import Any

from .base import Coin, TickerAdapter, iter_symbol_entries, keep_first, register_adapter


@register_adapter
class CoinGeckoAdapter(TickerAdapter):
    """Adapter for the CoinGecko markets endpoint.

    Results are ordered by market cap, so the first listing of a symbol is
    the largest one and wins.
    """

    BASE_URL = "https://api.coingecko.com/api/v3"
    VS_CURRENCY = "usd"
    PER_PAGE = 250

    def all_coins_url(self, context_symbol: str | None = None) -> str:
        return (
            f"{self.BASE_URL}/coins/markets?vs_currency={self.VS_CURRENCY}"
            f"&order=market_cap_desc&per_page={self.PER_PAGE}&page=1"
        )

    def parse_all_coin_data(self, data: Any) -> dict[str, Coin]:
        return keep_first(iter_symbol_entries(self.name, data, "symbol"))

    def coin_price_key(self) -> str:
        return "current_price"
