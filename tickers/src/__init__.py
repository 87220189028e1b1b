"""
Ticker Normalizer - uniform queries over heterogeneous ticker APIs

This module provides:
- TickerService: Lazy fetch-and-cache of one provider's coin map
- ProviderRegistry: Active provider services by name
- ActiveApiCache: Memo of providers queried in this process
- TickerContext: Query entry points and refresh-all
- providers: Per-API adapter implementations
"""

from .ActiveApiCache import ActiveApiCache
from .config import TickersConfig, load_config
from .HttpFetcher import FetcherError, FetcherHTTPError, FetcherTimeoutError, HttpFetcher
from .ProviderRegistry import ProviderRegistry
from .TickerContext import (
    TickerContext,
    get_coin_attr,
    get_coin_float_attr,
    get_coin_price,
    get_default_context,
    refresh_all_active_providers,
    set_default_context,
)
from .TickerService import TickerService

__all__ = [
    "ActiveApiCache",
    "FetcherError",
    "FetcherHTTPError",
    "FetcherTimeoutError",
    "HttpFetcher",
    "ProviderRegistry",
    "TickerContext",
    "TickerService",
    "TickersConfig",
    "get_coin_attr",
    "get_coin_float_attr",
    "get_coin_price",
    "get_default_context",
    "load_config",
    "refresh_all_active_providers",
    "set_default_context",
]
