"""Kraken adapter.

Endpoint: https://api.kraken.com/0/public/Ticker
Rate Limit: High (no key required)
Symbols: Kraken pair names (e.g., "XXBTZUSD")
"""

import logging
from typing import Any

from .base import Coin, TickerAdapter, keep_first, register_adapter

logger = logging.getLogger(__name__)


@register_adapter
class KrakenAdapter(TickerAdapter):
    """Adapter for the Kraken public ticker.

    Kraken reports the last trade as ``c: [price, lot volume]``; the price
    is copied to a ``last`` attribute so it can be read directly.
    """

    BASE_URL = "https://api.kraken.com/0/public"

    def all_coins_url(self, context_symbol: str | None = None) -> str:
        return f"{self.BASE_URL}/Ticker"

    def parse_all_coin_data(self, data: Any) -> dict[str, Coin]:
        if not isinstance(data, dict):
            logger.warning(f"[kraken] Unexpected payload: {type(data).__name__}")
            return {}

        if data.get("error"):
            logger.warning(f"[kraken] API error: {data['error']}")
            return {}

        result = data.get("result")
        if not isinstance(result, dict):
            return {}

        entries = []
        for pair, ticker in result.items():
            if not isinstance(ticker, dict):
                continue
            coin = dict(ticker)
            last_trade = ticker.get("c")
            if isinstance(last_trade, list) and last_trade:
                coin["last"] = last_trade[0]
            entries.append((pair, coin))
        return keep_first(entries)

    def coin_price_key(self) -> str:
        return "last"
