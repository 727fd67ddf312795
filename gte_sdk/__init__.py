"""Python SDK for the GTE exchange: market data, router quotes and unsigned swap transactions."""

from .chain import ContractReader, Web3ContractReader
from .config import CHAIN_PRESETS, MEGAETH_TESTNET, ChainConfig, Eip1559Config, Settings, get_chain_config
from .constants import DEFAULT_SLIPPAGE_BPS, ERC20_ABI, GTE_ROUTER_MIN_ABI, MAX_UINT256, UNISWAP_V2_ROUTER_ABI
from .encoder import EncodedSwap, decode_function_call, encode_approve, encode_function_call, encode_swap_calldata
from .errors import (
    ConflictingNativeFlags,
    ContractReadError,
    GteSdkError,
    InvalidAmountFormat,
    InvalidNativePath,
    InvalidPath,
    InvalidSlippage,
    JsonDecodeError,
    QuoteDirectionMismatch,
    TransportError,
)
from .http import RestClient
from .models import (
    BuildSwapExactInResult,
    BuildSwapExactOutResult,
    PreparedTransaction,
    QuoteExactOutResult,
    QuoteResult,
    SwapDirection,
)
from .quotes import QuoteEngine
from .router import RouterAddressResolver
from .sdk import GteSdk
from .types import (
    MarketCandle,
    MarketOrderBookLevel,
    MarketOrderBookSnapshot,
    MarketSummary,
    MarketTrade,
    TokenBalance,
    TokenSummary,
    UserPortfolio,
)
from .units import format_units, to_atomic, to_decimal_string

__all__ = [
    "BuildSwapExactInResult",
    "BuildSwapExactOutResult",
    "CHAIN_PRESETS",
    "ChainConfig",
    "ConflictingNativeFlags",
    "ContractReadError",
    "ContractReader",
    "DEFAULT_SLIPPAGE_BPS",
    "ERC20_ABI",
    "Eip1559Config",
    "EncodedSwap",
    "GTE_ROUTER_MIN_ABI",
    "GteSdk",
    "GteSdkError",
    "InvalidAmountFormat",
    "InvalidNativePath",
    "InvalidPath",
    "InvalidSlippage",
    "JsonDecodeError",
    "MAX_UINT256",
    "MEGAETH_TESTNET",
    "MarketCandle",
    "MarketOrderBookLevel",
    "MarketOrderBookSnapshot",
    "MarketSummary",
    "MarketTrade",
    "PreparedTransaction",
    "QuoteDirectionMismatch",
    "QuoteEngine",
    "QuoteExactOutResult",
    "QuoteResult",
    "RestClient",
    "RouterAddressResolver",
    "Settings",
    "SwapDirection",
    "TokenBalance",
    "TokenSummary",
    "UNISWAP_V2_ROUTER_ABI",
    "UserPortfolio",
    "Web3ContractReader",
    "decode_function_call",
    "encode_approve",
    "encode_function_call",
    "encode_swap_calldata",
    "format_units",
    "get_chain_config",
    "to_atomic",
    "to_decimal_string",
]
