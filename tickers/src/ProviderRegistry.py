"""ProviderRegistry: Active provider services by name.

The registry instantiates one TickerService per active adapter when it is
built and never changes afterwards. Adapters that are defined in the catalog
but not listed as active stay dormant: they can be enabled through
configuration without touching code.

.. code-block:: python

    >>> registry = ProviderRegistry(["coingecko", "binance"])
    >>> registry.names
    ['coingecko', 'binance']
    >>> registry.get("coingecko")
    TickerService('coingecko', coins=0)
    >>> registry.get("kraken") is None
    True
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .HttpFetcher import HttpFetcher
from .providers import TickerAdapter, get_adapter_class, get_available_adapters
from .TickerService import TickerService

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Immutable mapping from provider name to TickerService.

    :ivar fetcher: Transport shared by all services.
    """

    def __init__(
        self,
        active: Iterable[str | TickerAdapter],
        fetcher: HttpFetcher | None = None,
    ) -> None:
        """Build services for the active adapters.

        :param active: Adapter names from the catalog, or adapter instances,
            in lookup order.
        :param fetcher: Shared transport (default: new HttpFetcher).
        :raises ValueError: If an active name matches no defined adapter,
            or two adapters share a name.
        """
        active = list(active)
        available = get_available_adapters()
        invalid = [
            item for item in active
            if isinstance(item, str) and get_adapter_class(item) is None
        ]
        if invalid:
            raise ValueError(f"Unknown providers: {invalid}. Available: {available}")

        self.fetcher = fetcher or HttpFetcher()
        self._services: dict[str, TickerService] = {}
        from_catalog: set[str] = set()
        for item in active:
            if isinstance(item, str):
                if item in from_catalog:
                    continue
                adapter = get_adapter_class(item)()
                from_catalog.add(item)
            else:
                adapter = item
            if adapter.name in self._services:
                raise ValueError(f"Duplicate provider name '{adapter.name}'")
            self._services[adapter.name] = TickerService(adapter, self.fetcher)

        logger.debug(
            "Registered providers: %s (dormant: %s)",
            ", ".join(self._services),
            ", ".join(n for n in available if n not in self._services) or "none",
        )

    def get(self, name: str) -> TickerService | None:
        """Look up an active provider by exact name.

        :param name: Provider name.
        :returns: The service, or None if no active provider has that name.
        """
        return self._services.get(name)

    @property
    def names(self) -> list[str]:
        """Active provider names in registration order."""
        return list(self._services)

    def dormant(self) -> list[str]:
        """Defined adapters that are not active."""
        return [n for n in get_available_adapters() if n not in self._services]

    def __contains__(self, name: object) -> bool:
        return name in self._services

    def __len__(self) -> int:
        return len(self._services)

    def __iter__(self) -> Iterator[TickerService]:
        return iter(self._services.values())
