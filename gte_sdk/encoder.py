"""
Calldata encoding for ERC-20 approvals and Uniswap V2 router swaps.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from .constants import ERC20_ABI, UNISWAP_V2_ROUTER_ABI, Abi
from .errors import ConflictingNativeFlags, InvalidNativePath
from .models import AnyQuote, QuoteExactOutResult, QuoteResult, SwapDirection


def _strip_0x(value: str) -> str:
    return value[2:] if value.startswith("0x") else value


def _find_function(abi: Abi, name: str) -> Dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == name:
            return entry
    raise ValueError(f"Function {name} not found in ABI")


def _input_types(entry: Dict[str, Any]) -> List[str]:
    return [param["type"] for param in entry["inputs"]]


def _signature(entry: Dict[str, Any]) -> str:
    return f"{entry['name']}({','.join(_input_types(entry))})"


def _selector(entry: Dict[str, Any]) -> bytes:
    return function_signature_to_4byte_selector(_signature(entry))


def _normalize_arg(abi_type: str, value: Any) -> Any:
    if abi_type == "address":
        return to_checksum_address(value)
    if abi_type == "address[]":
        return [to_checksum_address(v) for v in value]
    return value


def encode_function_call(abi: Abi, function_name: str, args: Sequence[Any]) -> str:
    """ABI-encode a call: 4-byte selector followed by the encoded arguments."""
    entry = _find_function(abi, function_name)
    types = _input_types(entry)
    if len(types) != len(args):
        raise ValueError(f"{function_name} expects {len(types)} arguments, got {len(args)}")
    normalized = [_normalize_arg(t, v) for t, v in zip(types, args)]
    return "0x" + (_selector(entry) + encode(types, normalized)).hex()


def decode_function_call(abi: Abi, data: str) -> Tuple[str, Tuple[Any, ...]]:
    """Inverse of ``encode_function_call``: returns the function name and decoded arguments."""
    raw = bytes.fromhex(_strip_0x(data))
    if len(raw) < 4:
        raise ValueError("Calldata is shorter than a function selector")
    for entry in abi:
        if entry.get("type") != "function":
            continue
        if _selector(entry) == raw[:4]:
            return entry["name"], tuple(decode(_input_types(entry), raw[4:]))
    raise ValueError(f"No function in ABI matches selector 0x{raw[:4].hex()}")


def encode_approve(spender: str, amount: int) -> str:
    """Encode ERC-20 ``approve(address spender, uint256 amount)``."""
    return encode_function_call(ERC20_ABI, "approve", [spender, amount])


@dataclass(frozen=True)
class EncodedSwap:
    direction: SwapDirection
    function_name: str
    data: str
    value: int


def _same_address(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def encode_swap_calldata(
    quote: AnyQuote,
    recipient: str,
    deadline: int,
    *,
    use_native_in: bool = False,
    use_native_out: bool = False,
    weth_address: str,
) -> EncodedSwap:
    """
    Select the router entry point for a quote and encode it.

    Exact-in quotes map to ``swapExact*For*`` and exact-out quotes to
    ``swap*ForExact*``; the native flags pick the ETH variants. Native input
    attaches the full input (or max input) as call value.
    """
    if use_native_in and use_native_out:
        raise ConflictingNativeFlags("Cannot use native token for both input and output")
    path = list(quote.path)
    if use_native_in and (not path or not _same_address(path[0], weth_address)):
        raise InvalidNativePath("Native input swaps must start the path with the wrapped native token")
    if use_native_out and (not path or not _same_address(path[-1], weth_address)):
        raise InvalidNativePath("Native output swaps must end the path with the wrapped native token")

    if isinstance(quote, QuoteResult):
        if use_native_in:
            name = "swapExactETHForTokens"
            args = [quote.min_amount_out_atomic, path, recipient, deadline]
            value = quote.amount_in_atomic
        else:
            name = "swapExactTokensForETH" if use_native_out else "swapExactTokensForTokens"
            args = [quote.amount_in_atomic, quote.min_amount_out_atomic, path, recipient, deadline]
            value = 0
    elif isinstance(quote, QuoteExactOutResult):
        if use_native_in:
            name = "swapETHForExactTokens"
            args = [quote.amount_out_atomic, path, recipient, deadline]
            # exact spend is unknown until execution; the router refunds the excess
            value = quote.max_amount_in_atomic
        else:
            name = "swapTokensForExactETH" if use_native_out else "swapTokensForExactTokens"
            args = [quote.amount_out_atomic, quote.max_amount_in_atomic, path, recipient, deadline]
            value = 0
    else:
        raise TypeError(f"Unsupported quote type: {type(quote).__name__}")

    return EncodedSwap(
        direction=quote.direction,
        function_name=name,
        data=encode_function_call(UNISWAP_V2_ROUTER_ABI, name, args),
        value=value,
    )
