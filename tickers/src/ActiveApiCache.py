"""ActiveApiCache: Memo of the providers queried in this process.

Resolving a service name goes through the cache first, then the registry,
then the registry again with the default service name. Successful
resolutions are cached under the requested name, so the cache also records
which providers are in use; refresh-all only touches those.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ProviderRegistry import ProviderRegistry
    from .TickerService import TickerService

logger = logging.getLogger(__name__)


class ActiveApiCache:
    """Requested service name -> resolved TickerService.

    :ivar registry: Registry used on cache misses.
    :ivar default_service: Name used when the requested one is unknown.
    """

    def __init__(self, registry: ProviderRegistry, default_service: str) -> None:
        """Initialize an empty cache.

        :param registry: Provider registry.
        :param default_service: Default provider name.
        """
        self.registry = registry
        self.default_service = default_service
        self._entries: dict[str, TickerService] = {}

    def resolve(self, requested_name: str | None = None) -> TickerService | None:
        """Resolve a service name to a provider.

        :param requested_name: Provider name; None or "" means the default.
        :returns: The provider, or None if neither the name nor the default
            matches a registered provider.
        """
        key = requested_name or ""
        service = self._entries.get(key)
        if service is not None:
            return service

        service = self.registry.get(key) if key else None
        if service is None:
            service = self.registry.get(self.default_service)

        if service is None:
            # Not cached, so the next call resolves again
            logger.debug(
                f"No provider for '{key}' and default service "
                f"'{self.default_service}' is not registered"
            )
            return None

        if key and key != service.name:
            logger.info(f"Unknown service '{key}', using '{service.name}'")
        self._entries[key] = service
        return service

    def services(self) -> list[TickerService]:
        """Distinct providers resolved so far, in first-use order."""
        seen: dict[int, TickerService] = {}
        for service in self._entries.values():
            seen.setdefault(id(service), service)
        return list(seen.values())

    def names(self) -> list[str]:
        """Requested names cached so far."""
        return list(self._entries)

    def clear(self) -> None:
        """Forget all resolutions."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
