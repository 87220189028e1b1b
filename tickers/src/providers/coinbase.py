"""Coinbase adapter.

Endpoint: https://api.coinbase.com/v2/prices/{SYMBOL}-USD/spot
Rate Limit: High (no key required)
Bulk: No, one symbol per request
"""

import logging
from typing import Any
from urllib.parse import quote

from .base import Coin, TickerAdapter, register_adapter

logger = logging.getLogger(__name__)


@register_adapter
class CoinbaseAdapter(TickerAdapter):
    """Adapter for the Coinbase spot price endpoint.

    Returns a single coin keyed by ``data.base`` with ``amount`` holding
    the spot price.
    """

    BASE_URL = "https://api.coinbase.com/v2"
    QUOTE = "USD"
    single_symbol = True

    def all_coins_url(self, context_symbol: str | None = None) -> str:
        base = quote(context_symbol or "", safe="")
        return f"{self.BASE_URL}/prices/{base}-{self.QUOTE}/spot"

    def parse_all_coin_data(self, data: Any) -> dict[str, Coin]:
        if not isinstance(data, dict):
            logger.warning(f"[coinbase] Unexpected payload: {type(data).__name__}")
            return {}

        if data.get("errors"):
            logger.warning(f"[coinbase] API error: {data['errors']}")
            return {}

        spot = data.get("data")
        if not isinstance(spot, dict) or not isinstance(spot.get("base"), str):
            logger.warning(f"[coinbase] No spot data in response: {data!r:.200}")
            return {}

        return {spot["base"]: spot}

    def coin_price_key(self) -> str:
        return "amount"
