"""Binance adapter.

Endpoint: https://api.binance.com/api/v3/ticker/24hr
Rate Limit: High (no key required)
Symbols: trading pairs (e.g., "BTCUSDT"), not bare assets
"""

import logging
from typing import Any

from .base import Coin, TickerAdapter, iter_symbol_entries, keep_first, register_adapter

logger = logging.getLogger(__name__)


@register_adapter
class BinanceAdapter(TickerAdapter):
    """Adapter for Binance 24h rolling tickers.

    Binance lists pairs, so callers ask for "BTCUSDT" rather than "BTC".
    Pairs are unique in this feed; first-wins covers any repeat.
    """

    BASE_URL = "https://api.binance.com/api/v3"

    def all_coins_url(self, context_symbol: str | None = None) -> str:
        return f"{self.BASE_URL}/ticker/24hr"

    def parse_all_coin_data(self, data: Any) -> dict[str, Coin]:
        # Error responses come back as {"code": ..., "msg": ...}
        if isinstance(data, dict) and "msg" in data:
            logger.warning(f"[binance] API error: {data.get('msg')}")
            return {}
        return keep_first(iter_symbol_entries(self.name, data, "symbol"))

    def coin_price_key(self) -> str:
        return "lastPrice"
