"""Unit tests for TickerContext and the module-level query functions."""

import math

import pytest

from tickers.src.config import TickersConfig
from tickers.src.ProviderRegistry import ProviderRegistry
from tickers.src.TickerContext import (
    TickerContext,
    get_coin_attr,
    get_coin_float_attr,
    get_coin_price,
    get_default_context,
    refresh_all_active_providers,
    set_default_context,
)

MOCK_URL = "https://mock.test/all"


@pytest.fixture
def context(fetcher, mock_adapter, single_adapter) -> TickerContext:
    """Context with the bulk mock provider as default and a single-symbol one."""
    fetcher.responses[MOCK_URL] = {"BTC": {"price_usd": "100.5", "name": "Bitcoin"}}
    fetcher.responses["https://single.test/ETH"] = {"ETH": {"price_usd": 3000}}
    fetcher.responses["https://single.test/BTC"] = {"BTC": {"price_usd": 100}}
    registry = ProviderRegistry([mock_adapter, single_adapter], fetcher=fetcher)
    config = TickersConfig(default_service="mock", providers=["mock", "single"])
    return TickerContext(config, registry=registry)


class TestTickerContextQueries:
    """Test the query entry points."""

    @pytest.mark.asyncio
    async def test_price_end_to_end(self, context) -> None:
        """Listed coin returns its price, unlisted returns 0."""
        assert await context.get_coin_price("BTC") == 100.5
        assert await context.get_coin_price("ETH") == 0.0

    @pytest.mark.asyncio
    async def test_named_service(self, context) -> None:
        assert await context.get_coin_price("ETH", "single") == 3000.0

    @pytest.mark.asyncio
    async def test_unknown_service_uses_default(self, context, fetcher) -> None:
        assert await context.get_coin_price("BTC", "nonexistent-name") == 100.5
        assert fetcher.calls == [MOCK_URL]

    @pytest.mark.asyncio
    async def test_attr(self, context) -> None:
        assert await context.get_coin_attr("BTC", "name") == "Bitcoin"
        assert await context.get_coin_attr("BTC", "rank", fallback=-1) == -1
        assert await context.get_coin_attr("ETH", "name", fallback="?") == "?"

    @pytest.mark.asyncio
    async def test_float_attr(self, context) -> None:
        assert await context.get_coin_float_attr("BTC", "price_usd") == 100.5
        assert await context.get_coin_float_attr("ETH", "price_usd", fallback="x") == 0.0
        assert math.isnan(await context.get_coin_float_attr("BTC", "name", fallback=5))

    @pytest.mark.asyncio
    async def test_invalid_default_never_raises(self, fetcher, mock_adapter) -> None:
        """Without any provider, queries return no value or the fallback."""
        registry = ProviderRegistry([mock_adapter], fetcher=fetcher)
        config = TickersConfig(default_service="missing", providers=["mock"])
        context = TickerContext(config, registry=registry)

        assert context.resolve_provider("nonexistent-name") is None
        assert await context.get_coin_price("BTC", "nonexistent-name") is None
        assert await context.get_coin_attr("BTC", "name", "nonexistent-name") is None
        assert await context.get_coin_attr("BTC", "name", "nonexistent-name", "-") == "-"
        assert await context.get_coin_float_attr("BTC", "x", "nonexistent-name", "2") == 2.0
        assert await context.get_coin_float_attr("BTC", "x", "nonexistent-name", "n/a") == 0.0
        assert fetcher.calls == []

    def test_builds_registry_from_config(self) -> None:
        config = TickersConfig(default_service="binance", providers=["binance", "kraken"])
        context = TickerContext(config)

        assert context.registry.names == ["binance", "kraken"]
        assert context.registry.fetcher.timeout == config.fetch_timeout

    def test_unknown_configured_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown providers"):
            TickerContext(TickersConfig(providers=["mtgox"]))


class TestTickerContextRefreshAll:
    """Test refresh of all active providers."""

    @pytest.mark.asyncio
    async def test_one_fetch_per_active_provider(self, context, fetcher) -> None:
        """Each used provider is refetched once, however many symbols were queried."""
        for symbol in ("BTC", "ETH", "XRP", "DOGE"):
            await context.get_coin_price(symbol)
        await context.get_coin_price("ETH", "single")
        fetcher.calls.clear()

        await context.refresh_all_active_providers()

        assert sorted(fetcher.calls) == sorted([MOCK_URL, "https://single.test/ETH"])

    @pytest.mark.asyncio
    async def test_aliases_refresh_provider_once(self, context, fetcher) -> None:
        """Default, explicit and unknown names for one provider refresh it once."""
        await context.get_coin_price("BTC")
        await context.get_coin_price("BTC", "mock")
        await context.get_coin_price("BTC", "typo")
        fetcher.calls.clear()

        await context.refresh_all_active_providers()

        assert fetcher.calls == [MOCK_URL]

    @pytest.mark.asyncio
    async def test_unused_providers_untouched(self, context, fetcher) -> None:
        await context.get_coin_price("BTC")
        fetcher.calls.clear()

        await context.refresh_all_active_providers()

        assert "https://single.test/ETH" not in fetcher.calls
        assert fetcher.calls == [MOCK_URL]

    @pytest.mark.asyncio
    async def test_nothing_active(self, context, fetcher) -> None:
        await context.refresh_all_active_providers()
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_refresh_picks_up_new_data(self, context, fetcher) -> None:
        assert await context.get_coin_price("BTC") == 100.5
        fetcher.responses[MOCK_URL] = {"BTC": {"price_usd": 101}}

        await context.refresh_all_active_providers()

        assert await context.get_coin_price("BTC") == 101.0

    @pytest.mark.asyncio
    async def test_failed_provider_keeps_data(self, context, fetcher) -> None:
        await context.get_coin_price("BTC")
        fetcher.responses[MOCK_URL] = b"oops"

        await context.refresh_all_active_providers()

        assert await context.get_coin_price("BTC") == 100.5


class TestDefaultContext:
    """Test the module-level functions."""

    @pytest.fixture(autouse=True)
    def reset_default(self):
        yield
        set_default_context(None)

    @pytest.mark.asyncio
    async def test_module_functions_use_default_context(self, context, fetcher) -> None:
        set_default_context(context)

        assert get_default_context() is context
        assert await get_coin_price("BTC") == 100.5
        assert await get_coin_attr("BTC", "name") == "Bitcoin"
        assert await get_coin_float_attr("BTC", "price_usd", "mock") == 100.5

        fetcher.calls.clear()
        await refresh_all_active_providers()
        assert fetcher.calls == [MOCK_URL]

    def test_default_context_created_lazily(self, monkeypatch) -> None:
        monkeypatch.setenv("TICKERS_PROVIDERS", "coingecko")
        monkeypatch.setenv("TICKERS_DEFAULT_SERVICE", "coingecko")
        set_default_context(None)

        context = get_default_context()

        assert context.registry.names == ["coingecko"]
        assert get_default_context() is context
