"""Runtime configuration read from environment variables.

Variables:
    TICKERS_DEFAULT_SERVICE: Provider used when a query names none or an
        unknown one (default: coinmarketcap).
    TICKERS_PROVIDERS: Comma-separated active providers.
    TICKERS_FETCH_TIMEOUT: HTTP request timeout in seconds (default: 10.0).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

DEFAULT_SERVICE = "coinmarketcap"

# Defined adapters not listed here stay dormant.
DEFAULT_PROVIDERS: tuple[str, ...] = (
    "coinmarketcap",
    "coingecko",
    "coinpaprika",
    "binance",
    "cryptocompare",
    "coinbase",
)

DEFAULT_FETCH_TIMEOUT = 10.0


@dataclass
class TickersConfig:
    """Ticker service settings.

    :ivar default_service: Provider name used as the fallback service.
    :ivar providers: Active provider names.
    :ivar fetch_timeout: HTTP request timeout in seconds.
    """

    default_service: str = DEFAULT_SERVICE
    providers: list[str] = field(default_factory=lambda: list(DEFAULT_PROVIDERS))
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT

    def __post_init__(self) -> None:
        if self.fetch_timeout <= 0:
            raise ValueError("fetch_timeout must be positive")
        if not self.providers:
            raise ValueError("At least one provider must be active")


def parse_providers(value: str) -> list[str]:
    """Parse a comma-separated provider list.

    :param value: e.g. "coingecko, Binance".
    :returns: Lowercase names without blanks or repeats.
    """
    providers: list[str] = []
    for item in value.split(","):
        name = item.strip().lower()
        if name and name not in providers:
            providers.append(name)
    return providers


def load_config(environ: Mapping[str, str] | None = None) -> TickersConfig:
    """Build a TickersConfig from environment variables.

    Unset or empty variables keep their defaults.

    :param environ: Variables to read (default: os.environ).
    :returns: Parsed configuration.
    :raises ValueError: If a variable holds an invalid value.
    """
    if environ is None:
        environ = os.environ

    kwargs: dict = {}

    default_service = environ.get("TICKERS_DEFAULT_SERVICE", "").strip()
    if default_service:
        kwargs["default_service"] = default_service.lower()

    providers = environ.get("TICKERS_PROVIDERS", "")
    if providers.strip():
        kwargs["providers"] = parse_providers(providers)

    timeout = environ.get("TICKERS_FETCH_TIMEOUT", "").strip()
    if timeout:
        try:
            kwargs["fetch_timeout"] = float(timeout)
        except ValueError as e:
            raise ValueError(f"TICKERS_FETCH_TIMEOUT must be a number, got {timeout!r}") from e

    return TickersConfig(**kwargs)
