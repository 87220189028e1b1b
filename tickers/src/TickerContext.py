"""TickerContext: Process-scoped entry point for ticker queries.

The context owns the provider registry and the active-API cache. Queries
name a service; unknown or omitted names fall back to the configured
default service. Nothing raises on an unknown provider: prices come back
as None, attributes as the caller's fallback.

.. code-block:: python

    context = TickerContext()
    await context.get_coin_price("BTC")                        # default service
    await context.get_coin_attr("btc", "name", "coingecko")
    await context.get_coin_float_attr("BTC", "percent_change_24h")
    await context.refresh_all_active_providers()

Module-level functions with the same names operate on a lazily created
default context.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from .ActiveApiCache import ActiveApiCache
from .coercion import fallback_to_float
from .config import TickersConfig, load_config
from .HttpFetcher import HttpFetcher
from .ProviderRegistry import ProviderRegistry
from .TickerService import TickerService

logger = logging.getLogger(__name__)


class TickerContext:
    """Registry, active-API cache and the query functions on top of them.

    :ivar config: Settings the context was built from.
    :ivar registry: Active provider services.
    :ivar active: Providers resolved during this process.
    """

    def __init__(
        self,
        config: TickersConfig | None = None,
        registry: ProviderRegistry | None = None,
        fetcher: HttpFetcher | None = None,
    ) -> None:
        """Initialize the context.

        :param config: Settings (default: read from the environment).
        :param registry: Prebuilt registry (default: built from config).
        :param fetcher: Transport for a registry built here.
        :raises ValueError: If the configuration names unknown providers.
        """
        self.config = config or load_config()
        if registry is None:
            fetcher = fetcher or HttpFetcher(timeout=self.config.fetch_timeout)
            registry = ProviderRegistry(self.config.providers, fetcher=fetcher)
        self.registry = registry
        self.active = ActiveApiCache(registry, self.config.default_service)

        if self.config.default_service not in registry:
            logger.warning(
                f"Default service '{self.config.default_service}' is not an active provider"
            )

    def resolve_provider(self, service: str | None = None) -> TickerService | None:
        """Resolve a service name, falling back to the default service.

        :param service: Provider name, None for the default.
        :returns: The provider, or None if nothing matches.
        """
        return self.active.resolve(service)

    async def get_coin_price(
        self,
        symbol: str,
        service: str | None = None,
    ) -> float | None:
        """Get a coin price.

        :param symbol: Provider symbol.
        :param service: Provider name (default: configured default).
        :returns: Price, 0.0 for an unlisted coin, None without a provider.
        """
        provider = self.resolve_provider(service)
        if provider is None:
            return None
        return await provider.get_coin_price(symbol)

    async def get_coin_attr(
        self,
        symbol: str,
        attr_name: str,
        service: str | None = None,
        fallback: Any = None,
    ) -> Any:
        """Get a raw coin attribute.

        :param symbol: Provider symbol.
        :param attr_name: Provider-specific attribute name.
        :param service: Provider name (default: configured default).
        :param fallback: Returned when provider, coin or attribute is missing.
        :returns: Attribute value or fallback.
        """
        provider = self.resolve_provider(service)
        if provider is None:
            return fallback
        return await provider.get_coin_attr(symbol, attr_name, fallback)

    async def get_coin_float_attr(
        self,
        symbol: str,
        attr_name: str,
        service: str | None = None,
        fallback: Any = 0,
    ) -> float:
        """Get a coin attribute as a float.

        :param symbol: Provider symbol.
        :param attr_name: Provider-specific attribute name.
        :param service: Provider name (default: configured default).
        :param fallback: Used when provider or coin is missing; 0 if not numeric.
        :returns: Numeric value, numeric fallback, or NaN for non-numeric data.
        """
        provider = self.resolve_provider(service)
        if provider is None:
            return fallback_to_float(fallback)
        return await provider.get_coin_float_attr(symbol, attr_name, fallback)

    async def refresh_all_active_providers(self) -> None:
        """Refresh every provider resolved so far, one fetch each."""
        services = self.active.services()
        if not services:
            logger.debug("No active providers to refresh")
            return

        results = await asyncio.gather(
            *(service.refresh() for service in services),
            return_exceptions=True,
        )
        for service, result in zip(services, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(f"[{service.name}] Refresh failed: {result}")
            elif not result:
                logger.debug(f"[{service.name}] Refresh kept previous coins")

    async def aclose(self) -> None:
        """Close the HTTP client used by the registry."""
        await self.registry.fetcher.aclose()


_default_context: TickerContext | None = None


def get_default_context() -> TickerContext:
    """Get or create the process-wide context."""
    global _default_context
    if _default_context is None:
        _default_context = TickerContext()
    return _default_context


def set_default_context(context: TickerContext | None) -> None:
    """Replace the process-wide context (None resets it)."""
    global _default_context
    _default_context = context


async def get_coin_price(symbol: str, service: str | None = None) -> float | None:
    """Get a coin price from the default context."""
    return await get_default_context().get_coin_price(symbol, service)


async def get_coin_attr(
    symbol: str,
    attr_name: str,
    service: str | None = None,
    fallback: Any = None,
) -> Any:
    """Get a raw coin attribute from the default context."""
    return await get_default_context().get_coin_attr(symbol, attr_name, service, fallback)


async def get_coin_float_attr(
    symbol: str,
    attr_name: str,
    service: str | None = None,
    fallback: Any = 0,
) -> float:
    """Get a coin attribute as a float from the default context."""
    return await get_default_context().get_coin_float_attr(
        symbol, attr_name, service, fallback
    )


async def refresh_all_active_providers() -> None:
    """Refresh the providers used through the default context."""
    await get_default_context().refresh_all_active_providers()
