#!/usr/bin/env python3
"""Ticker Normalizer CLI.

Queries coin prices and attributes from any registered ticker provider
through one interface.
"""

import argparse
import asyncio
import logging
import math
import sys

from .src.config import DEFAULT_FETCH_TIMEOUT, TickersConfig, load_config, parse_providers
from .src.providers import get_available_adapters
from .src.TickerContext import TickerContext

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def build_parser(env_config: TickersConfig) -> argparse.ArgumentParser:
    """Build the argument parser with defaults taken from the environment.

    :param env_config: Configuration read from environment variables.
    :returns: Configured parser.
    """
    available = get_available_adapters()

    parser = argparse.ArgumentParser(
        description="Ticker Normalizer: one query interface over many ticker APIs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Available providers:
  {', '.join(available)}

Examples:
  # Price from the default service
  python -m tickers.main price BTC

  # Raw attribute from a specific provider
  python -m tickers.main attr btc name --service coingecko

  # Numeric attribute with a fallback for unlisted coins
  python -m tickers.main float BTC percent_change_24h --fallback 0

Environment variables (CLI args take precedence):
  TICKERS_DEFAULT_SERVICE, TICKERS_PROVIDERS, TICKERS_FETCH_TIMEOUT
""",
    )

    parser.add_argument(
        "--default-service",
        dest="default_service",
        type=str,
        help=f"Provider used when none or an unknown one is named (default: {env_config.default_service})",
        default=env_config.default_service,
    )

    parser.add_argument(
        "--providers",
        type=str,
        help=f"Comma-separated active providers. Available: {', '.join(available)}",
        default=",".join(env_config.providers),
    )

    parser.add_argument(
        "--fetch-timeout",
        dest="fetch_timeout",
        type=float,
        help=f"Timeout for HTTP requests in seconds (default: {DEFAULT_FETCH_TIMEOUT})",
        default=env_config.fetch_timeout,
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    price = commands.add_parser("price", help="Print the price of a coin")
    price.add_argument("symbol", help="Provider symbol (case-sensitive)")
    price.add_argument("--service", help="Provider name")

    attr = commands.add_parser("attr", help="Print a raw coin attribute")
    attr.add_argument("symbol", help="Provider symbol (case-sensitive)")
    attr.add_argument("attr_name", help="Provider-specific attribute name")
    attr.add_argument("--service", help="Provider name")

    float_attr = commands.add_parser("float", help="Print a coin attribute as a number")
    float_attr.add_argument("symbol", help="Provider symbol (case-sensitive)")
    float_attr.add_argument("attr_name", help="Provider-specific attribute name")
    float_attr.add_argument("--service", help="Provider name")
    float_attr.add_argument(
        "--fallback",
        default="0",
        help="Value printed when the coin is not listed (default: 0)",
    )

    commands.add_parser("providers", help="List active and dormant providers")

    return parser


async def run_command(context: TickerContext, args: argparse.Namespace) -> str:
    """Execute a query subcommand.

    :param context: Ticker context to query.
    :param args: Parsed arguments.
    :returns: Text to print.
    """
    try:
        if args.command == "price":
            value = await context.get_coin_price(args.symbol, args.service)
        elif args.command == "attr":
            value = await context.get_coin_attr(args.symbol, args.attr_name, args.service)
        else:
            value = await context.get_coin_float_attr(
                args.symbol, args.attr_name, args.service, args.fallback
            )
    finally:
        await context.aclose()

    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value)


def format_providers(context: TickerContext) -> str:
    """Describe active and dormant providers.

    :param context: Ticker context.
    :returns: One line per provider.
    """
    lines = []
    for name in context.registry.names:
        marker = " (default)" if name == context.config.default_service else ""
        lines.append(f"{name}: active{marker}")
    for name in context.registry.dormant():
        lines.append(f"{name}: dormant")
    return "\n".join(lines)


def main() -> None:
    """Main entry point for the Ticker Normalizer CLI."""
    try:
        env_config = load_config()
    except ValueError as e:
        logger.error(f"Invalid environment configuration: {e}")
        sys.exit(1)

    parser = build_parser(env_config)
    args = parser.parse_args()

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    providers = parse_providers(args.providers)
    if not providers:
        parser.error("At least one provider must be specified")

    invalid = [p for p in providers if p not in get_available_adapters()]
    if invalid:
        parser.error(
            f"Unknown providers: {invalid}. "
            f"Available: {', '.join(get_available_adapters())}"
        )

    if args.fetch_timeout <= 0:
        parser.error("--fetch-timeout must be positive")

    config = TickersConfig(
        default_service=args.default_service.strip().lower(),
        providers=providers,
        fetch_timeout=args.fetch_timeout,
    )
    context = TickerContext(config)

    if args.command == "providers":
        print(format_providers(context))
        return

    try:
        output = asyncio.run(run_command(context, args))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)
    print(output)


if __name__ == "__main__":
    main()
