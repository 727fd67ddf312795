"""
Tests for the command-line front end.
"""

from cli import DEFAULT_CHAIN, _jsonable, build_parser
from gte_sdk.constants import MAX_UINT256
from gte_sdk.models import PreparedTransaction


def test_parser_defaults_to_testnet_chain():
    args = build_parser().parse_args(["markets", "--limit", "3"])

    assert args.chain == DEFAULT_CHAIN == "megaeth-testnet"
    assert args.command == "markets"
    assert args.limit == 3


def test_swap_arguments():
    args = build_parser().parse_args([
        "swap", "0xaaa", "0xbbb", "1.5",
        "--recipient", "0xccc",
        "--exact-out",
        "--native-in",
        "--slippage-bps", "75",
    ])

    assert (args.token_in, args.token_out, args.amount) == ("0xaaa", "0xbbb", "1.5")
    assert args.exact_out and args.native_in and not args.native_out
    assert args.slippage_bps == 75
    assert args.deadline_seconds is None


def test_jsonable_keeps_uint256_exact():
    tx = PreparedTransaction(to="0x1", data="0x", value=MAX_UINT256, chain_id=6342)

    rendered = _jsonable(tx)

    assert rendered["value"] == str(MAX_UINT256)
    assert rendered["chain_id"] == 6342
