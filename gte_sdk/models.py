"""
Quote and transaction value types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Union


class SwapDirection(str, Enum):
    """Which side of the swap is fixed."""
    EXACT_IN = "exact_in"
    EXACT_OUT = "exact_out"


@dataclass(frozen=True)
class QuoteResult:
    """Exact-input quote: input fixed, output estimated by the router."""
    amount_in: str
    amount_in_atomic: int
    expected_amount_out: str
    expected_amount_out_atomic: int
    min_amount_out: str
    min_amount_out_atomic: int
    price: str                                  # tokenOut per tokenIn
    slippage_bps: int
    path: Tuple[str, ...]

    direction = SwapDirection.EXACT_IN


@dataclass(frozen=True)
class QuoteExactOutResult:
    """Exact-output quote: output fixed, input estimated by the router."""
    amount_out: str
    amount_out_atomic: int
    expected_amount_in: str
    expected_amount_in_atomic: int
    max_amount_in: str
    max_amount_in_atomic: int
    price: str                                  # tokenOut per tokenIn
    slippage_bps: int
    path: Tuple[str, ...]

    direction = SwapDirection.EXACT_OUT


AnyQuote = Union[QuoteResult, QuoteExactOutResult]


@dataclass(frozen=True)
class PreparedTransaction:
    """An unsigned transaction ready to be handed to a wallet."""
    to: str
    data: str                                   # Encoded calldata (hex)
    value: int = 0                              # Wei to send
    chain_id: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for signing."""
        return {
            "to": self.to,
            "data": self.data,
            "value": hex(self.value),
            "chainId": self.chain_id,
        }


@dataclass(frozen=True)
class BuildSwapExactInResult:
    tx: PreparedTransaction
    quote: QuoteResult
    deadline: int


@dataclass(frozen=True)
class BuildSwapExactOutResult:
    tx: PreparedTransaction
    quote: QuoteExactOutResult
    deadline: int
