"""Bitstamp adapter.

Endpoint: https://www.bitstamp.net/api/v2/ticker/
Rate Limit: High (no key required)
Symbols: pairs as "BASE/QUOTE" (e.g., "BTC/USD")
"""

from typing import Any

from .base import Coin, TickerAdapter, iter_symbol_entries, keep_first, register_adapter


@register_adapter
class BitstampAdapter(TickerAdapter):
    """Adapter for the Bitstamp all-tickers endpoint."""

    BASE_URL = "https://www.bitstamp.net/api/v2"

    def all_coins_url(self, context_symbol: str | None = None) -> str:
        return f"{self.BASE_URL}/ticker/"

    def parse_all_coin_data(self, data: Any) -> dict[str, Coin]:
        return keep_first(iter_symbol_entries(self.name, data, "pair"))

    def coin_price_key(self) -> str:
        return "last"
