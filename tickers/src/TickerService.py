"""TickerService: Lazy fetch-and-cache of one provider's coin map.

A service wraps a TickerAdapter and an HttpFetcher. The coin map is filled
on the first query that misses, by one bulk fetch of the adapter's endpoint,
and is replaced as a whole on every later refresh.

Lookup policy:
    - Symbol in the coin map: returned without fetching
    - Symbol confirmed absent since the last explicit refresh: None, without
      fetching
    - Otherwise: one refresh, then the symbol is looked up again

Concurrent misses are serialized per service. A caller that waited for
another caller's refresh does not fetch again unless the provider is a
single-symbol one and its symbol was not part of that refresh.

.. code-block:: python

    service = TickerService(CoinGeckoAdapter(), HttpFetcher())
    await service.get_coin_price("btc")
    await service.get_coin_attr("btc", "name")
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import TYPE_CHECKING, Any

from .coercion import fallback_to_float, to_float
from .HttpFetcher import FetcherError

if TYPE_CHECKING:
    from .HttpFetcher import HttpFetcher
    from .providers import Coin, TickerAdapter

logger = logging.getLogger(__name__)


class TickerService:
    """Coin lookups against one provider.

    :ivar adapter: Provider adapter supplying URL, parser and price key.
    :ivar fetcher: Transport used for refreshes.
    :ivar fetch_count: Number of refresh attempts that reached the transport.
    :ivar last_refresh: Unix timestamp of the last successful refresh.
    :ivar last_error: Error of the last failed refresh, cleared on success.
    """

    def __init__(self, adapter: TickerAdapter, fetcher: HttpFetcher) -> None:
        """Initialize the service with an empty coin map.

        :param adapter: Provider adapter.
        :param fetcher: HTTP transport.
        """
        self.adapter = adapter
        self.fetcher = fetcher
        self.fetch_count = 0
        self.last_refresh: float | None = None
        self.last_error: Exception | None = None

        self._coins: dict[str, Coin] = {}
        self._absent: set[str] = set()
        self._context_symbol: str | None = None
        self._lock = asyncio.Lock()
        # Bumped when a refresh attempt finishes, successful or not
        self._generation = 0

    @property
    def name(self) -> str:
        """Provider name."""
        return self.adapter.name

    @property
    def coins(self) -> dict[str, Coin]:
        """Snapshot of the current coin map."""
        return dict(self._coins)

    def symbols(self) -> list[str]:
        """Symbols currently in the coin map, in provider order."""
        return list(self._coins)

    def __repr__(self) -> str:
        return f"TickerService({self.name!r}, coins={len(self._coins)})"

    async def get_coin(self, symbol: str) -> Coin | None:
        """Get a coin, refreshing the coin map once on a miss.

        :param symbol: Provider symbol, case-sensitive.
        :returns: The coin, or None if the provider does not list it.
        """
        if symbol in self._coins or symbol in self._absent:
            return self._coins.get(symbol)

        generation_seen = self._generation
        async with self._lock:
            if symbol in self._coins or symbol in self._absent:
                return self._coins.get(symbol)

            refreshed_meanwhile = self._generation != generation_seen
            if not refreshed_meanwhile or self.adapter.single_symbol:
                await self._refresh(symbol, reopen=False)

            coin = self._coins.get(symbol)
            if coin is None:
                self._absent.add(symbol)
            return coin

    async def get_coin_attr(
        self,
        symbol: str,
        attr_name: str,
        fallback: Any = None,
    ) -> Any:
        """Get a raw coin attribute.

        :param symbol: Provider symbol.
        :param attr_name: Provider-specific attribute name.
        :param fallback: Returned when the coin or the attribute is missing.
        :returns: The attribute value or the fallback.
        """
        coin = await self.get_coin(symbol)
        if coin is None:
            return fallback
        return coin.get(attr_name, fallback)

    async def get_coin_float_attr(
        self,
        symbol: str,
        attr_name: str,
        fallback: Any = 0,
    ) -> float:
        """Get a coin attribute as a float.

        The fallback only applies when the coin is missing. An existing coin
        whose attribute is missing or not numeric yields NaN.

        :param symbol: Provider symbol.
        :param attr_name: Provider-specific attribute name.
        :param fallback: Value used when the coin is missing; 0 if not numeric.
        :returns: The numeric attribute, the numeric fallback, or NaN.
        """
        coin = await self.get_coin(symbol)
        if coin is None:
            return fallback_to_float(fallback)
        return to_float(coin.get(attr_name))

    async def get_coin_price(self, symbol: str) -> float:
        """Get the coin price, 0 when the coin is missing.

        :param symbol: Provider symbol.
        :returns: Price as float.
        """
        return await self.get_coin_float_attr(symbol, self.adapter.coin_price_key(), 0)

    async def refresh(self, context_symbol: str | None = None) -> bool:
        """Unconditionally refresh the coin map.

        :param context_symbol: Symbol for single-symbol providers; defaults
            to the symbol of the previous refresh.
        :returns: True if the coin map was replaced.
        """
        async with self._lock:
            return await self._refresh(context_symbol or self._context_symbol)

    async def _refresh(self, context_symbol: str | None, reopen: bool = True) -> bool:
        """Fetch, decode and parse the endpoint, then swap in the new map.

        Must be called with the lock held. On any failure the current map is
        kept and the error is logged and stored in ``last_error``.

        :param context_symbol: Symbol passed to the adapter's URL builder.
        :param reopen: Forget every confirmed-absent symbol. When False, a bulk
            provider only forgets the symbols that the new map lists.
        :returns: True if the coin map was replaced.
        """
        if self.adapter.single_symbol and not context_symbol:
            logger.debug(f"[{self.name}] No symbol to refresh yet")
            return False

        self._context_symbol = context_symbol
        url = self.adapter.all_coins_url(context_symbol)
        self.fetch_count += 1
        keep_absent = not reopen and not self.adapter.single_symbol
        try:
            return await self._fetch_and_replace(url, keep_absent)
        finally:
            self._generation += 1

    async def _fetch_and_replace(self, url: str, keep_absent: bool) -> bool:
        try:
            body = await self.fetcher.fetch(url)
        except FetcherError as e:
            self.last_error = e
            logger.warning(f"[{self.name}] Failed to fetch {url}: {e}")
            return False

        if not body.strip():
            coins: dict[str, Coin] = {}
        else:
            try:
                data = json.loads(body)
            except (ValueError, RecursionError) as e:
                self.last_error = e
                logger.warning(f"[{self.name}] Failed to decode response from {url}: {e}")
                return False

            try:
                coins = self.adapter.parse_all_coin_data(data)
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                self.last_error = e
                logger.warning(f"[{self.name}] Failed to parse response from {url}: {e}")
                return False

        self._coins = coins
        if keep_absent:
            self._absent -= coins.keys()
        else:
            self._absent = set()
        self.last_refresh = time.time()
        self.last_error = None
        logger.debug(f"[{self.name}] Refreshed {len(coins)} coins")
        return True
