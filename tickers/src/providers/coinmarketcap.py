"""CoinMarketCap adapter.

Endpoint: https://api.coinmarketcap.com/v1/ticker/?limit=0
Shape: list of tickers with string-encoded numbers (price_usd, market_cap_usd)
Duplicates: Yes, one symbol can be listed for several projects
"""

from typing import Any

from .base import Coin, TickerAdapter, iter_symbol_entries, keep_highest, register_adapter


@register_adapter
class CoinMarketCapAdapter(TickerAdapter):
    """Adapter for the CoinMarketCap public ticker.

    Symbols are not unique on CoinMarketCap (several small projects reuse
    the tickers of large ones), so the listing with the highest market cap
    keeps the symbol.
    """

    BASE_URL = "https://api.coinmarketcap.com/v1"
    RANK_FIELD = "market_cap_usd"

    def all_coins_url(self, context_symbol: str | None = None) -> str:
        return f"{self.BASE_URL}/ticker/?limit=0"

    def parse_all_coin_data(self, data: Any) -> dict[str, Coin]:
        """Keep the highest market cap listing per symbol.

        :param data: Decoded list of tickers.
        :returns: Dict mapping symbols to tickers.
        """
        return keep_highest(
            iter_symbol_entries(self.name, data, "symbol"),
            self.RANK_FIELD,
        )

    def coin_price_key(self) -> str:
        return "price_usd"
