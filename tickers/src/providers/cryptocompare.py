"""CryptoCompare adapter.

Endpoint: https://min-api.cryptocompare.com/data/pricemultifull?fsyms={SYMBOL}&tsyms=USD
Rate Limit: 100,000 calls/month (free tier)
Bulk: No, one symbol per request
"""

import logging
from typing import Any
from urllib.parse import quote

from .base import Coin, TickerAdapter, keep_first, register_adapter

logger = logging.getLogger(__name__)


@register_adapter
class CryptoCompareAdapter(TickerAdapter):
    """Adapter for the CryptoCompare full price endpoint.

    The endpoint has no "all coins" form, so the queried symbol is part of
    the URL and each refresh returns a single coin taken from
    ``RAW.{SYMBOL}.USD``.
    """

    BASE_URL = "https://min-api.cryptocompare.com/data"
    QUOTE = "USD"
    single_symbol = True

    def all_coins_url(self, context_symbol: str | None = None) -> str:
        fsyms = quote(context_symbol or "", safe="")
        return f"{self.BASE_URL}/pricemultifull?fsyms={fsyms}&tsyms={self.QUOTE}"

    def parse_all_coin_data(self, data: Any) -> dict[str, Coin]:
        if not isinstance(data, dict):
            logger.warning(f"[cryptocompare] Unexpected payload: {type(data).__name__}")
            return {}

        if data.get("Response") == "Error":
            logger.warning(f"[cryptocompare] API error: {data.get('Message', 'Unknown error')}")
            return {}

        raw = data.get("RAW")
        if not isinstance(raw, dict):
            return {}

        entries = []
        for symbol, quotes in raw.items():
            coin = quotes.get(self.QUOTE) if isinstance(quotes, dict) else None
            if isinstance(coin, dict):
                entries.append((symbol, coin))
        return keep_first(entries)

    def coin_price_key(self) -> str:
        return "PRICE"
