#!/usr/bin/env python3
"""Command-line access to GTE market data, quotes and unsigned transactions"""

import argparse
import asyncio
import dataclasses
import json
import sys
from typing import Any, Optional

from gte_sdk import GteSdk, GteSdkError, TokenSummary, get_chain_config
from gte_sdk.logging_config import setup_logging

DEFAULT_CHAIN = "megaeth-testnet"


def _jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {k: _jsonable(v) for k, v in dataclasses.asdict(value).items()}
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, int) and not isinstance(value, bool) and abs(value) > 2**53:
        # keep uint256 values exact for JS consumers
        return str(value)
    return value


def print_json(value: Any) -> None:
    print(json.dumps(_jsonable(value), indent=2))


async def _load_token(sdk: GteSdk, address: str) -> TokenSummary:
    token = await sdk.get_token(address)
    if token is None:
        raise GteSdkError(f"Token {address} not found")
    return token


async def cli_markets(sdk: GteSdk, limit: int, market_type: Optional[str]) -> None:
    markets = await sdk.get_markets(limit=limit, market_type=market_type)
    for market in markets:
        print(
            f"{market.address}  {market.base_token.symbol}/{market.quote_token.symbol:<8} "
            f"{market.market_type:<14} price={market.price} vol24h=${market.volume_24_hr_usd}"
        )
    if not markets:
        print("No markets returned")


async def cli_portfolio(sdk: GteSdk, address: str) -> None:
    print_json(await sdk.get_user_portfolio(address))


async def cli_quote(sdk: GteSdk, args: argparse.Namespace) -> None:
    token_in = await _load_token(sdk, args.token_in)
    token_out = await _load_token(sdk, args.token_out)
    if args.exact_out:
        quote = await sdk.get_quote_exact_out(token_in, token_out, args.amount, slippage_bps=args.slippage_bps)
    else:
        quote = await sdk.get_quote(token_in, token_out, args.amount, slippage_bps=args.slippage_bps)
    print_json(quote)


async def cli_approve(sdk: GteSdk, args: argparse.Namespace) -> None:
    tx = await sdk.build_approve(
        args.token,
        spender=args.spender,
        amount=args.amount,
        decimals=args.decimals,
    )
    print_json(tx.to_dict())


async def cli_swap(sdk: GteSdk, args: argparse.Namespace) -> None:
    token_in = await _load_token(sdk, args.token_in)
    token_out = await _load_token(sdk, args.token_out)
    build = sdk.build_swap_exact_out if args.exact_out else sdk.build_swap_exact_in
    result = await build(
        token_in,
        token_out,
        args.amount,
        recipient=args.recipient,
        slippage_bps=args.slippage_bps,
        deadline_seconds=args.deadline_seconds,
        use_native_in=args.native_in,
        use_native_out=args.native_out,
    )
    print_json({"tx": result.tx.to_dict(), "quote": result.quote, "deadline": result.deadline})


def _add_trade_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("token_in", help="Input token address")
    parser.add_argument("token_out", help="Output token address")
    parser.add_argument("amount", help="Amount in token units (input, or output with --exact-out)")
    parser.add_argument("--exact-out", action="store_true", help="Treat amount as the exact output")
    parser.add_argument("--slippage-bps", type=int, default=None, help="Slippage tolerance in basis points")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GTE SDK CLI")
    parser.add_argument("--chain", default=DEFAULT_CHAIN, help=f"Chain preset (default: {DEFAULT_CHAIN})")
    parser.add_argument("--rpc-url", default=None, help="Override the chain RPC URL")
    parser.add_argument("--router", default=None, help="Override the Uniswap V2 router address")
    parser.add_argument("--log-level", default=None, help="Log level (default: from GTE_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command")

    markets_parser = subparsers.add_parser("markets", help="List markets")
    markets_parser.add_argument("--limit", type=int, default=10)
    markets_parser.add_argument("--market-type", default=None, choices=["amm", "bonding-curve", "clob-spot", "perps"])

    portfolio_parser = subparsers.add_parser("portfolio", help="Get a user's portfolio")
    portfolio_parser.add_argument("address", help="Wallet address")

    quote_parser = subparsers.add_parser("quote", help="Quote a router swap")
    _add_trade_args(quote_parser)

    approve_parser = subparsers.add_parser("approve", help="Build an ERC-20 approval")
    approve_parser.add_argument("token", help="Token address")
    approve_parser.add_argument("--spender", default=None, help="Spender (default: router)")
    approve_parser.add_argument("--amount", default=None, help="Amount (default: unlimited)")
    approve_parser.add_argument("--decimals", type=int, default=None, help="Token decimals for --amount")

    swap_parser = subparsers.add_parser("swap", help="Build an unsigned router swap")
    _add_trade_args(swap_parser)
    swap_parser.add_argument("--recipient", required=True, help="Address receiving the output")
    swap_parser.add_argument("--deadline-seconds", type=int, default=None)
    swap_parser.add_argument("--native-in", action="store_true", help="Pay with the native asset")
    swap_parser.add_argument("--native-out", action="store_true", help="Receive the native asset")

    return parser


async def run(args: argparse.Namespace) -> None:
    chain = get_chain_config(args.chain)
    async with GteSdk(chain, rpc_url=args.rpc_url, uniswap_router_address=args.router) as sdk:
        command = args.command.lower()
        if command == "markets":
            await cli_markets(sdk, args.limit, args.market_type)
        elif command == "portfolio":
            await cli_portfolio(sdk, args.address)
        elif command == "quote":
            await cli_quote(sdk, args)
        elif command == "approve":
            await cli_approve(sdk, args)
        elif command == "swap":
            await cli_swap(sdk, args)


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.log_level)
    try:
        asyncio.run(run(args))
    except (GteSdkError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
