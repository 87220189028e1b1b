"""Provider adapter contract and adapter catalog.

Every ticker API is integrated through a TickerAdapter subclass that knows
three things about its provider: where the tickers live, how to turn the
decoded response into a symbol -> coin mapping, and which coin attribute
holds the price. Fetching, caching and attribute access live in
TickerService, which wraps an adapter.

.. code-block:: python

    @register_adapter
    class MyExchangeAdapter(TickerAdapter):
        BASE_URL = "https://api.myexchange.com"

        def all_coins_url(self, context_symbol: str | None = None) -> str:
            return f"{self.BASE_URL}/tickers"

        def parse_all_coin_data(self, data: Any) -> dict[str, Coin]:
            return keep_first((t["symbol"], t) for t in data)

        def coin_price_key(self) -> str:
            return "last"

    MyExchangeAdapter.name  # "myexchange"
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Iterable

from ..coercion import to_float

logger = logging.getLogger(__name__)

CoinValue = str | int | float | bool | dict | list | None
Coin = dict[str, CoinValue]


class TickerAdapter(ABC):
    """Abstract base class for provider adapters.

    Subclasses must implement all_coins_url(), parse_all_coin_data() and
    coin_price_key(); instantiating a subclass that misses one of them
    raises TypeError.

    :cvar name: Unique provider identifier, derived from the class name
        when left empty.
    :cvar BASE_URL: Root URL of the provider API.
    :cvar single_symbol: True when the endpoint returns one symbol per call.
    """

    name: ClassVar[str] = ""
    BASE_URL: ClassVar[str] = ""
    single_symbol: ClassVar[bool] = False

    @abstractmethod
    def all_coins_url(self, context_symbol: str | None = None) -> str:
        """Build the ticker endpoint URL.

        :param context_symbol: Symbol being queried; only single-symbol
            providers use it.
        :returns: Endpoint URL.
        """

    @abstractmethod
    def parse_all_coin_data(self, data: Any) -> dict[str, Coin]:
        """Normalize a decoded response body.

        :param data: Decoded JSON body.
        :returns: Dict mapping provider symbols to coins.
        """

    @abstractmethod
    def coin_price_key(self) -> str:
        """Return the coin attribute that holds the price."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def keep_first(entries: Iterable[tuple[str, Coin]]) -> dict[str, Coin]:
    """Build a coin map where the first entry for a symbol wins.

    :param entries: (symbol, coin) tuples in response order.
    :returns: Dict mapping symbols to coins.
    """
    coins: dict[str, Coin] = {}
    for symbol, coin in entries:
        if symbol not in coins:
            coins[symbol] = coin
    return coins


def keep_highest(entries: Iterable[tuple[str, Coin]], field: str) -> dict[str, Coin]:
    """Build a coin map where the entry with the largest ``field`` wins.

    Missing or non-numeric values compare as 0. Ties keep the earlier entry.

    :param entries: (symbol, coin) tuples in response order.
    :param field: Numeric coin attribute to compare.
    :returns: Dict mapping symbols to coins.
    """
    coins: dict[str, Coin] = {}
    ranks: dict[str, float] = {}
    for symbol, coin in entries:
        rank = to_float(coin.get(field))
        if math.isnan(rank):
            rank = 0.0
        if symbol not in coins or rank > ranks[symbol]:
            coins[symbol] = coin
            ranks[symbol] = rank
    return coins


def iter_symbol_entries(
    provider: str,
    rows: Any,
    symbol_field: str,
) -> Iterable[tuple[str, Coin]]:
    """Yield (symbol, row) tuples from a list payload, skipping bad rows.

    :param provider: Provider name used in log messages.
    :param rows: Decoded payload, expected to be a list of objects.
    :param symbol_field: Row attribute holding the symbol.
    """
    if not isinstance(rows, list):
        logger.warning(
            f"[{provider}] Expected a list of tickers, got {type(rows).__name__}"
        )
        return
    for row in rows:
        if not isinstance(row, dict):
            continue
        symbol = row.get(symbol_field)
        if not isinstance(symbol, str) or not symbol:
            logger.debug(f"[{provider}] Skipping ticker without symbol: {row!r:.200}")
            continue
        yield symbol, row


# Catalog of defined adapters (populated by adapter module imports)
ADAPTER_CATALOG: dict[str, type[TickerAdapter]] = {}


def adapter_name_for(cls: type[TickerAdapter]) -> str:
    """Derive a provider name from an adapter class name.

    :param cls: Adapter class.
    :returns: Lowercase class name without the ``Adapter`` suffix.
    """
    class_name = cls.__name__
    if class_name.endswith("Adapter") and class_name != "Adapter":
        class_name = class_name[: -len("Adapter")]
    return class_name.lower()


def register_adapter(cls: type[TickerAdapter]) -> type[TickerAdapter]:
    """Decorator to record an adapter class in the catalog.

    :param cls: Adapter class to register.
    :returns: The registered class, with ``name`` filled in if it was empty.
    :raises ValueError: If another adapter already uses the same name.
    """
    if not cls.__dict__.get("name"):
        cls.name = adapter_name_for(cls)
    existing = ADAPTER_CATALOG.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(
            f"Adapter name '{cls.name}' is already used by {existing.__name__}"
        )
    ADAPTER_CATALOG[cls.name] = cls
    return cls


def get_adapter_class(name: str) -> type[TickerAdapter] | None:
    """Look up an adapter class by provider name.

    :param name: Provider name (e.g., "coingecko").
    :returns: Adapter class or None if unknown.
    """
    return ADAPTER_CATALOG.get(name)


def get_available_adapters() -> list[str]:
    """Get list of defined adapter names.

    :returns: Sorted list of catalog names.
    """
    return sorted(ADAPTER_CATALOG.keys())
