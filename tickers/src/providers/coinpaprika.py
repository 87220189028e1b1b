"""Coinpaprika adapter.

Endpoint: https://api.coinpaprika.com/v1/tickers
Rate Limit: 20,000 calls/month (free tier)
Shape: list of tickers, prices nested under quotes.USD
"""

from typing import Any

from .base import Coin, TickerAdapter, iter_symbol_entries, keep_first, register_adapter


@register_adapter
class CoinpaprikaAdapter(TickerAdapter):
    """Adapter for the Coinpaprika tickers endpoint.

    The nested ``quotes.USD`` object is flattened into the coin with a
    ``_usd`` suffix (``price`` -> ``price_usd``, ``market_cap`` ->
    ``market_cap_usd``) so quote fields can be read as plain attributes.
    Tickers come ranked, the first listing of a symbol wins.
    """

    BASE_URL = "https://api.coinpaprika.com/v1"
    QUOTE = "USD"

    def all_coins_url(self, context_symbol: str | None = None) -> str:
        return f"{self.BASE_URL}/tickers"

    def parse_all_coin_data(self, data: Any) -> dict[str, Coin]:
        return keep_first(
            (symbol, self._flatten(ticker))
            for symbol, ticker in iter_symbol_entries(self.name, data, "symbol")
        )

    def _flatten(self, ticker: Coin) -> Coin:
        """Copy quote fields of the ticker to top-level ``*_usd`` attributes.

        :param ticker: Raw ticker object.
        :returns: New coin dict.
        """
        coin = dict(ticker)
        quotes = ticker.get("quotes")
        quote = quotes.get(self.QUOTE) if isinstance(quotes, dict) else None
        if isinstance(quote, dict):
            suffix = self.QUOTE.lower()
            for key, value in quote.items():
                coin[f"{key}_{suffix}"] = value
        return coin

    def coin_price_key(self) -> str:
        return "price_usd"
