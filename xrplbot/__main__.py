"""Command line entry point.

Usage::

    python -m xrplbot explain <HASH> [--config xrplbot.toml]

Prints the markdown the bot would post for a transaction, without posting it.
"""
import argparse
import asyncio
import sys

from loguru import logger

from xrplbot.clients.xrpl_fetcher import XrplTransactionFetcher
from xrplbot.config import load_config
from xrplbot.handler import create_renderer
from xrplbot.protocols.transaction_fetcher import FetchError


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


def _parse_cli_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="xrplbot",
        description="Explain XRP Ledger transactions as GitHub-flavoured markdown.",
    )
    parser.add_argument("--config", default=None, help="Path to a TOML config file (default: xrplbot.toml)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    explain = subparsers.add_parser("explain", help="Render the comment for a transaction hash")
    explain.add_argument("tx_hash", help="64 character transaction hash")
    explain.add_argument("--rpc-url", default=None, help="JSON-RPC endpoint (default: XRPLBOT_RPC_URL or xrplcluster.com)")
    return parser.parse_args(argv)


async def _explain(tx_hash: str, config) -> int:
    fetcher = XrplTransactionFetcher(config.rpc_url)
    renderer = create_renderer(config)
    result = await fetcher.fetch(tx_hash.upper())
    if isinstance(result, FetchError):
        logger.error(f"Could not fetch {tx_hash}: {result.error} ({result.detail})")
        print(renderer.render_error())
        return 1
    await renderer.prepare()
    print(renderer.render(result))
    return 0


def main(argv=None) -> int:
    args = _parse_cli_args(argv)
    overrides = {}
    if getattr(args, "rpc_url", None):
        overrides["rpc_url"] = args.rpc_url
    config = load_config(args.config, **overrides)
    _configure_logging(config.log_level)
    return asyncio.run(_explain(args.tx_hash, config))


if __name__ == "__main__":
    sys.exit(main())
