"""
Router-backed swap quoting.

Amounts are read from the router's ``getAmountsOut`` / ``getAmountsIn`` view
functions; this module only converts units and applies the slippage bound.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Tuple

from .chain import ContractReader
from .constants import BPS_DENOMINATOR, DEFAULT_SLIPPAGE_BPS, UNISWAP_V2_ROUTER_ABI
from .errors import ContractReadError, InvalidPath, InvalidSlippage
from .models import QuoteExactOutResult, QuoteResult
from .router import RouterAddressResolver
from .types import TokenSummary
from .units import Amount, format_units, to_atomic, to_decimal_string

logger = logging.getLogger(__name__)


def min_amount_out(expected_out: int, slippage_bps: int) -> int:
    """Worst acceptable output for an exact-input swap (truncating)."""
    return expected_out * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR


def max_amount_in(expected_in: int, slippage_bps: int) -> int:
    """Worst acceptable input for an exact-output swap (truncating)."""
    return expected_in * (BPS_DENOMINATOR + slippage_bps) // BPS_DENOMINATOR


def format_price(numerator: str, denominator: str) -> str:
    """Display ratio of two decimal strings; ``"0"`` for zero input or non-finite results."""
    try:
        top, bottom = float(numerator), float(denominator)
    except ValueError:
        return "0"
    if bottom <= 0:
        return "0"
    price = top / bottom
    if not math.isfinite(price):
        return "0"
    text = repr(price)
    return text[:-2] if text.endswith(".0") else text


def _display_amount(amount: Amount, atomic: int, decimals: int) -> str:
    # int input is already atomic, so show it in token units instead
    if isinstance(amount, int):
        return format_units(atomic, decimals)
    return to_decimal_string(amount)


def _resolve_path(
    token_in: TokenSummary,
    token_out: TokenSummary,
    path: Optional[Sequence[str]],
) -> Tuple[str, ...]:
    resolved = tuple(path) if path is not None else (token_in.address, token_out.address)
    if len(resolved) < 2:
        raise InvalidPath("Quote path must include at least tokenIn and tokenOut")
    return resolved


class QuoteEngine:
    """Produces exact-in and exact-out quotes from router view calls."""

    def __init__(
        self,
        reader: ContractReader,
        resolver: RouterAddressResolver,
        default_slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
    ) -> None:
        self._reader = reader
        self._resolver = resolver
        self.default_slippage_bps = default_slippage_bps

    def _slippage(self, slippage_bps: Optional[int], *, exact_in: bool) -> int:
        value = self.default_slippage_bps if slippage_bps is None else slippage_bps
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidSlippage(f"Slippage must be a non-negative integer of basis points, got {value!r}")
        if exact_in and value > BPS_DENOMINATOR:
            raise InvalidSlippage(
                f"Exact-input slippage cannot exceed {BPS_DENOMINATOR} bps, got {value}"
            )
        return value

    async def _read_amounts(self, function_name: str, amount: int, path: Tuple[str, ...]) -> list:
        router = await self._resolver.resolve()
        amounts = await self._reader.read_contract(
            router,
            UNISWAP_V2_ROUTER_ABI,
            function_name,
            [amount, list(path)],
        )
        if not amounts:
            raise ContractReadError(
                f"{function_name} returned no amounts", function_name=function_name, address=router
            )
        return [int(a) for a in amounts]

    async def quote_exact_in(
        self,
        token_in: TokenSummary,
        token_out: TokenSummary,
        amount_in: Amount,
        slippage_bps: Optional[int] = None,
        path: Optional[Sequence[str]] = None,
    ) -> QuoteResult:
        resolved_path = _resolve_path(token_in, token_out, path)
        slippage = self._slippage(slippage_bps, exact_in=True)
        amount_in_atomic = to_atomic(amount_in, token_in.decimals)

        amounts_out = await self._read_amounts("getAmountsOut", amount_in_atomic, resolved_path)
        expected_out_atomic = amounts_out[-1]
        expected_out = format_units(expected_out_atomic, token_out.decimals)
        min_out_atomic = min_amount_out(expected_out_atomic, slippage)

        amount_in_text = _display_amount(amount_in, amount_in_atomic, token_in.decimals)
        logger.debug(
            "Quoted %s %s -> %s %s (min %s, %d bps)",
            amount_in_text,
            token_in.symbol,
            expected_out,
            token_out.symbol,
            min_out_atomic,
            slippage,
        )
        return QuoteResult(
            amount_in=amount_in_text,
            amount_in_atomic=amount_in_atomic,
            expected_amount_out=expected_out,
            expected_amount_out_atomic=expected_out_atomic,
            min_amount_out=format_units(min_out_atomic, token_out.decimals),
            min_amount_out_atomic=min_out_atomic,
            price=format_price(expected_out, amount_in_text),
            slippage_bps=slippage,
            path=resolved_path,
        )

    async def quote_exact_out(
        self,
        token_in: TokenSummary,
        token_out: TokenSummary,
        amount_out: Amount,
        slippage_bps: Optional[int] = None,
        path: Optional[Sequence[str]] = None,
    ) -> QuoteExactOutResult:
        resolved_path = _resolve_path(token_in, token_out, path)
        slippage = self._slippage(slippage_bps, exact_in=False)
        amount_out_atomic = to_atomic(amount_out, token_out.decimals)

        amounts_in = await self._read_amounts("getAmountsIn", amount_out_atomic, resolved_path)
        expected_in_atomic = amounts_in[0]
        expected_in = format_units(expected_in_atomic, token_in.decimals)
        max_in_atomic = max_amount_in(expected_in_atomic, slippage)

        amount_out_text = _display_amount(amount_out, amount_out_atomic, token_out.decimals)
        logger.debug(
            "Quoted %s %s for %s %s (max %s, %d bps)",
            expected_in,
            token_in.symbol,
            amount_out_text,
            token_out.symbol,
            max_in_atomic,
            slippage,
        )
        return QuoteExactOutResult(
            amount_out=amount_out_text,
            amount_out_atomic=amount_out_atomic,
            expected_amount_in=expected_in,
            expected_amount_in_atomic=expected_in_atomic,
            max_amount_in=format_units(max_in_atomic, token_in.decimals),
            max_amount_in_atomic=max_in_atomic,
            price=format_price(amount_out_text, expected_in),
            slippage_bps=slippage,
            path=resolved_path,
        )
