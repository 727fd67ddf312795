"""
Tests for router and ERC-20 calldata encoding.
"""

import pytest
from eth_utils import function_signature_to_4byte_selector

from gte_sdk.constants import ERC20_ABI, MAX_UINT256, UNISWAP_V2_ROUTER_ABI
from gte_sdk.encoder import (
    decode_function_call,
    encode_approve,
    encode_function_call,
    encode_swap_calldata,
)
from gte_sdk.errors import ConflictingNativeFlags, InvalidNativePath
from gte_sdk.models import QuoteExactOutResult, QuoteResult, SwapDirection

WETH = "0x776401b9BC8aAe31A685731B7147D4445fD9FB19"
TOKEN_A = "0x0000000000000000000000000000000000000b01"
TOKEN_B = "0x0000000000000000000000000000000000000c01"
RECIPIENT = "0x0000000000000000000000000000000000000f01"
DEADLINE = 1_700_000_000


def _exact_in(path) -> QuoteResult:
    return QuoteResult(
        amount_in="1",
        amount_in_atomic=10**18,
        expected_amount_out="2",
        expected_amount_out_atomic=2 * 10**18,
        min_amount_out="1.99",
        min_amount_out_atomic=199 * 10**16,
        price="2",
        slippage_bps=50,
        path=tuple(path),
    )


def _exact_out(path) -> QuoteExactOutResult:
    return QuoteExactOutResult(
        amount_out="2",
        amount_out_atomic=2 * 10**18,
        expected_amount_in="1",
        expected_amount_in_atomic=10**18,
        max_amount_in="1.005",
        max_amount_in_atomic=1005 * 10**15,
        price="2",
        slippage_bps=50,
        path=tuple(path),
    )


def _lower(addresses):
    return [a.lower() for a in addresses]


# =============================================================================
# Generic encoding
# =============================================================================

def test_encode_approve_layout():
    spender = "0x86470efcEa37e50F94E74649463b737C87ada367"
    data = encode_approve(spender, MAX_UINT256)

    selector = "0x" + function_signature_to_4byte_selector("approve(address,uint256)").hex()
    assert selector == "0x095ea7b3"
    assert data.startswith(selector)
    assert len(data) == len(selector) + 64 * 2
    assert data.endswith("f" * 64)

    name, args = decode_function_call(ERC20_ABI, data)
    assert name == "approve"
    assert args[0].lower() == spender.lower()
    assert args[1] == MAX_UINT256


def test_encode_function_call_checks_arity():
    with pytest.raises(ValueError):
        encode_function_call(ERC20_ABI, "approve", [TOKEN_A])


def test_encode_function_call_unknown_function():
    with pytest.raises(ValueError):
        encode_function_call(ERC20_ABI, "transferFrom", [])


def test_decode_function_call_unknown_selector():
    with pytest.raises(ValueError):
        decode_function_call(ERC20_ABI, "0xdeadbeef")


# =============================================================================
# Router swap shapes
# =============================================================================

def test_exact_in_token_to_token():
    quote = _exact_in([TOKEN_A, TOKEN_B])
    encoded = encode_swap_calldata(quote, RECIPIENT, DEADLINE, weth_address=WETH)

    assert encoded.function_name == "swapExactTokensForTokens"
    assert encoded.direction is SwapDirection.EXACT_IN
    assert encoded.value == 0
    name, args = decode_function_call(UNISWAP_V2_ROUTER_ABI, encoded.data)
    assert name == "swapExactTokensForTokens"
    assert args[0] == quote.amount_in_atomic
    assert args[1] == quote.min_amount_out_atomic
    assert _lower(args[2]) == _lower(quote.path)
    assert args[3].lower() == RECIPIENT
    assert args[4] == DEADLINE


def test_exact_in_native_in():
    quote = _exact_in([WETH, TOKEN_B])
    encoded = encode_swap_calldata(quote, RECIPIENT, DEADLINE, use_native_in=True, weth_address=WETH)

    assert encoded.function_name == "swapExactETHForTokens"
    assert encoded.value == quote.amount_in_atomic
    name, args = decode_function_call(UNISWAP_V2_ROUTER_ABI, encoded.data)
    assert name == "swapExactETHForTokens"
    assert args[0] == quote.min_amount_out_atomic
    assert _lower(args[1]) == _lower(quote.path)
    assert args[2].lower() == RECIPIENT
    assert args[3] == DEADLINE


def test_exact_in_native_out():
    quote = _exact_in([TOKEN_A, WETH.lower()])
    encoded = encode_swap_calldata(quote, RECIPIENT, DEADLINE, use_native_out=True, weth_address=WETH)

    assert encoded.function_name == "swapExactTokensForETH"
    assert encoded.value == 0
    name, args = decode_function_call(UNISWAP_V2_ROUTER_ABI, encoded.data)
    assert name == "swapExactTokensForETH"
    assert list(args[:2]) == [quote.amount_in_atomic, quote.min_amount_out_atomic]
    assert _lower(args[2]) == _lower(quote.path)
    assert args[4] == DEADLINE


def test_exact_out_token_to_token():
    quote = _exact_out([TOKEN_A, TOKEN_B])
    encoded = encode_swap_calldata(quote, RECIPIENT, DEADLINE, weth_address=WETH)

    assert encoded.function_name == "swapTokensForExactTokens"
    assert encoded.direction is SwapDirection.EXACT_OUT
    assert encoded.value == 0
    name, args = decode_function_call(UNISWAP_V2_ROUTER_ABI, encoded.data)
    assert name == "swapTokensForExactTokens"
    assert args[0] == quote.amount_out_atomic
    assert args[1] == quote.max_amount_in_atomic
    assert _lower(args[2]) == _lower(quote.path)
    assert args[3].lower() == RECIPIENT
    assert args[4] == DEADLINE


def test_exact_out_native_in_attaches_max_input():
    quote = _exact_out([WETH, TOKEN_B])
    encoded = encode_swap_calldata(quote, RECIPIENT, DEADLINE, use_native_in=True, weth_address=WETH)

    assert encoded.function_name == "swapETHForExactTokens"
    assert encoded.value == quote.max_amount_in_atomic
    name, args = decode_function_call(UNISWAP_V2_ROUTER_ABI, encoded.data)
    assert name == "swapETHForExactTokens"
    assert args[0] == quote.amount_out_atomic
    assert _lower(args[1]) == _lower(quote.path)
    assert args[2].lower() == RECIPIENT
    assert args[3] == DEADLINE


def test_exact_out_native_out():
    quote = _exact_out([TOKEN_A, TOKEN_B, WETH])
    encoded = encode_swap_calldata(quote, RECIPIENT, DEADLINE, use_native_out=True, weth_address=WETH)

    assert encoded.function_name == "swapTokensForExactETH"
    assert encoded.value == 0
    name, args = decode_function_call(UNISWAP_V2_ROUTER_ABI, encoded.data)
    assert name == "swapTokensForExactETH"
    assert list(args[:2]) == [quote.amount_out_atomic, quote.max_amount_in_atomic]
    assert _lower(args[2]) == _lower(quote.path)


# =============================================================================
# Native flag validation
# =============================================================================

@pytest.mark.parametrize("quote", [_exact_in([WETH, TOKEN_B]), _exact_out([WETH, WETH])])
def test_conflicting_native_flags(quote):
    with pytest.raises(ConflictingNativeFlags):
        encode_swap_calldata(
            quote, RECIPIENT, DEADLINE, use_native_in=True, use_native_out=True, weth_address=WETH
        )


@pytest.mark.parametrize("quote", [_exact_in([TOKEN_A, WETH]), _exact_out([TOKEN_A, WETH])])
def test_native_in_requires_weth_first(quote):
    with pytest.raises(InvalidNativePath):
        encode_swap_calldata(quote, RECIPIENT, DEADLINE, use_native_in=True, weth_address=WETH)


@pytest.mark.parametrize("quote", [_exact_in([WETH, TOKEN_B]), _exact_out([WETH, TOKEN_B])])
def test_native_out_requires_weth_last(quote):
    with pytest.raises(InvalidNativePath):
        encode_swap_calldata(quote, RECIPIENT, DEADLINE, use_native_out=True, weth_address=WETH)
