"""Command-line interface for the price oracle client."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .config import AppConfig, load_config
from .errors import OracleClientError
from .logging_setup import configure_logging
from .models import PriceUpdate
from .oracles import PriceParams, PythClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="oracle-client",
        description="Query Pyth price updates",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: $ORACLE_CLIENT_CONFIG or ./config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    latest_parser = sub.add_parser("latest", help="Latest price updates")
    latest_parser.add_argument(
        "ids", nargs="*", help="Feed ids (decimal or 0x hex) or configured symbols"
    )

    price_parser = sub.add_parser("price", help="Price updates at a timestamp")
    price_parser.add_argument(
        "--timestamp", type=int, required=True, help="Unix time in seconds"
    )
    price_parser.add_argument(
        "ids", nargs="*", help="Feed ids (decimal or 0x hex) or configured symbols"
    )

    return parser


def resolve_feed_ids(tokens: list[str], feeds: dict[str, int]) -> list[int]:
    """Turn CLI tokens into feed ids, looking up symbols in ``feeds`` first."""
    ids: list[int] = []
    for token in tokens:
        if token in feeds:
            ids.append(feeds[token])
            continue
        try:
            ids.append(int(token, 0))
        except ValueError:
            raise ValueError(f"Unknown feed '{token}'") from None
    return ids


def format_update(update: PriceUpdate) -> list[str]:
    lines = []
    for item in update.parsed:
        p = item.price
        lines.append(
            f"{item.id} {p.value:.8g} "
            f"(conf {p.conf}, expo {p.expo}, published {p.publish_time})"
        )
    return lines


async def _run(args: argparse.Namespace, config: AppConfig) -> None:
    """Execute the selected command."""
    ids = resolve_feed_ids(args.ids, config.feeds)

    async with PythClient.from_config(config.pyth) as client:
        if args.command == "latest":
            update = await client.get_latest_price(ids)
        else:
            update = await client.get_price(PriceParams(tuple(ids), args.timestamp))

    logger.info("Received %d price update(s)", len(update.parsed))
    for line in format_update(update):
        print(line)


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)
    try:
        config = load_config(args.config)
        asyncio.run(_run(args, config))
    except (OracleClientError, ValueError, FileNotFoundError) as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
