"""Shared fixtures: an in-memory transport and minimal adapters."""

import asyncio
import json
from typing import Any

import pytest

from tickers.src.providers import Coin, TickerAdapter
from tickers.src.TickerService import TickerService


class FakeFetcher:
    """Transport serving canned bodies by URL and recording every call.

    Dicts and lists are served as JSON, exceptions are raised, bytes are
    served as-is. Unknown URLs get an empty body.
    """

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[str] = []

    async def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        # Yield like a real request so concurrent callers interleave
        await asyncio.sleep(0)
        response = self.responses.get(url, b"")
        if isinstance(response, Exception):
            raise response
        if isinstance(response, (dict, list)):
            return json.dumps(response).encode()
        return response

    async def aclose(self) -> None:
        pass


class MockAdapter(TickerAdapter):
    """Bulk provider whose payload already is a symbol -> coin object."""

    name = "mock"
    BASE_URL = "https://mock.test"

    def all_coins_url(self, context_symbol: str | None = None) -> str:
        return f"{self.BASE_URL}/all"

    def parse_all_coin_data(self, data: Any) -> dict[str, Coin]:
        if not isinstance(data, dict):
            return {}
        return dict(data)

    def coin_price_key(self) -> str:
        return "price_usd"


class SingleSymbolAdapter(MockAdapter):
    """Provider answering one symbol per request."""

    name = "single"
    BASE_URL = "https://single.test"
    single_symbol = True

    def all_coins_url(self, context_symbol: str | None = None) -> str:
        return f"{self.BASE_URL}/{context_symbol}"


MOCK_URL = "https://mock.test/all"


@pytest.fixture
def fetcher() -> FakeFetcher:
    """Empty fake transport; tests fill ``responses``."""
    return FakeFetcher()


@pytest.fixture
def mock_adapter() -> MockAdapter:
    return MockAdapter()


@pytest.fixture
def single_adapter() -> SingleSymbolAdapter:
    return SingleSymbolAdapter()


@pytest.fixture
def mock_service(mock_adapter: MockAdapter, fetcher: FakeFetcher) -> TickerService:
    """Service over the bulk mock provider serving BTC at 100.5."""
    fetcher.responses[MOCK_URL] = {"BTC": {"price_usd": "100.5", "name": "Bitcoin"}}
    return TickerService(mock_adapter, fetcher)
