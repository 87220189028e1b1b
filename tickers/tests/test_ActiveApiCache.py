"""Unit tests for ActiveApiCache."""

from unittest.mock import patch

from tickers.src.ActiveApiCache import ActiveApiCache
from tickers.src.ProviderRegistry import ProviderRegistry


class TestActiveApiCacheResolve:
    """Test service name resolution."""

    def test_resolves_registered_name(self, fetcher) -> None:
        registry = ProviderRegistry(["coingecko", "binance"], fetcher=fetcher)
        cache = ActiveApiCache(registry, "coingecko")

        assert cache.resolve("binance") is registry.get("binance")

    def test_empty_name_uses_default(self, fetcher) -> None:
        registry = ProviderRegistry(["coingecko", "binance"], fetcher=fetcher)
        cache = ActiveApiCache(registry, "binance")

        assert cache.resolve(None) is registry.get("binance")
        assert cache.resolve("") is registry.get("binance")

    def test_unknown_name_falls_back_to_default(self, fetcher) -> None:
        """An unknown name with a valid default resolves to the default."""
        registry = ProviderRegistry(["coingecko"], fetcher=fetcher)
        cache = ActiveApiCache(registry, "coingecko")

        assert cache.resolve("nonexistent-name") is registry.get("coingecko")

    def test_unknown_name_and_invalid_default(self, fetcher) -> None:
        """Nothing resolves when the default is invalid too."""
        registry = ProviderRegistry(["coingecko"], fetcher=fetcher)
        cache = ActiveApiCache(registry, "also-missing")

        assert cache.resolve("nonexistent-name") is None
        assert len(cache) == 0

    def test_unresolved_names_leave_no_state(self, fetcher) -> None:
        """Failed resolutions are neither cached nor remembered."""
        registry = ProviderRegistry(["coingecko"], fetcher=fetcher)
        cache = ActiveApiCache(registry, "also-missing")
        for i in range(100):
            assert cache.resolve(f"missing-{i}") is None

        assert len(cache) == 0
        assert cache.names() == []

    def test_resolution_is_cached(self, fetcher) -> None:
        """Second resolution does not consult the registry."""
        registry = ProviderRegistry(["coingecko"], fetcher=fetcher)
        cache = ActiveApiCache(registry, "coingecko")
        first = cache.resolve("coingecko")

        with patch.object(registry, "get") as mock_get:
            assert cache.resolve("coingecko") is first
            mock_get.assert_not_called()

    def test_cached_under_requested_name(self, fetcher) -> None:
        registry = ProviderRegistry(["coingecko"], fetcher=fetcher)
        cache = ActiveApiCache(registry, "coingecko")
        cache.resolve("unknown")
        cache.resolve(None)

        assert cache.names() == ["unknown", ""]


class TestActiveApiCacheServices:
    """Test the set of providers in use."""

    def test_services_deduplicated(self, fetcher) -> None:
        """Names resolving to one provider list it once."""
        registry = ProviderRegistry(["coingecko", "binance"], fetcher=fetcher)
        cache = ActiveApiCache(registry, "coingecko")
        cache.resolve("coingecko")
        cache.resolve(None)
        cache.resolve("typo")
        cache.resolve("binance")

        assert cache.services() == [registry.get("coingecko"), registry.get("binance")]

    def test_unused_providers_not_listed(self, fetcher) -> None:
        registry = ProviderRegistry(["coingecko", "binance"], fetcher=fetcher)
        cache = ActiveApiCache(registry, "coingecko")
        cache.resolve("binance")

        assert cache.services() == [registry.get("binance")]

    def test_clear(self, fetcher) -> None:
        registry = ProviderRegistry(["coingecko"], fetcher=fetcher)
        cache = ActiveApiCache(registry, "coingecko")
        cache.resolve(None)
        cache.clear()

        assert cache.services() == []
