"""
Ticker provider adapters.

Each adapter turns one ticker API into a uniform symbol -> coin mapping.

Usage:
    from tickers.src.providers import get_adapter_class, get_available_adapters

    # Get list of defined adapters
    available = get_available_adapters()
    # ['binance', 'bitstamp', 'coinbase', 'coingecko', 'coinmarketcap', 'coinpaprika', 'cryptocompare', 'kraken']

    adapter = get_adapter_class("coingecko")()
    adapter.all_coins_url()
"""

# Import base classes and utilities
from .base import (
    ADAPTER_CATALOG,
    Coin,
    CoinValue,
    TickerAdapter,
    get_adapter_class,
    get_available_adapters,
    keep_first,
    keep_highest,
    register_adapter,
)

# Import all adapter implementations to trigger registration
from .binance import BinanceAdapter
from .bitstamp import BitstampAdapter
from .coinbase import CoinbaseAdapter
from .coingecko import CoinGeckoAdapter
from .coinmarketcap import CoinMarketCapAdapter
from .coinpaprika import CoinpaprikaAdapter
from .cryptocompare import CryptoCompareAdapter
from .kraken import KrakenAdapter

__all__ = [
    # Base classes
    "TickerAdapter",
    "Coin",
    "CoinValue",
    # Catalog functions
    "register_adapter",
    "get_adapter_class",
    "get_available_adapters",
    "ADAPTER_CATALOG",
    # Duplicate-symbol policies
    "keep_first",
    "keep_highest",
    # Adapter implementations
    "BinanceAdapter",
    "BitstampAdapter",
    "CoinbaseAdapter",
    "CoinGeckoAdapter",
    "CoinMarketCapAdapter",
    "CoinpaprikaAdapter",
    "CryptoCompareAdapter",
    "KrakenAdapter",
]
