"""
GteSdk: market data reads, router quotes and unsigned swap transactions.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional, Sequence

from .chain import ContractReader, Web3ContractReader
from .config import ChainConfig, settings
from .constants import MAX_UINT256
from .encoder import encode_approve, encode_swap_calldata
from .errors import InvalidAmountFormat, QuoteDirectionMismatch
from .http import RestClient
from .models import (
    BuildSwapExactInResult,
    BuildSwapExactOutResult,
    PreparedTransaction,
    QuoteExactOutResult,
    QuoteResult,
)
from .quotes import QuoteEngine
from .router import RouterAddressResolver
from .types import (
    MarketCandle,
    MarketOrderBookSnapshot,
    MarketSortBy,
    MarketSummary,
    MarketTrade,
    MarketType,
    TokenSummary,
    UserPortfolio,
)
from .units import Amount, parse_integer_amount, to_atomic

logger = logging.getLogger(__name__)


class GteSdk:
    """
    Client for the GTE exchange.

    Example usage:
        async with GteSdk(MEGAETH_TESTNET) as sdk:
            markets = await sdk.get_markets(limit=1, market_type="amm")
            quote = await sdk.get_quote(markets[0].base_token, markets[0].quote_token, "0.01")
            result = await sdk.build_swap_exact_in(
                markets[0].base_token, markets[0].quote_token, "0.01",
                recipient="0x...", quote=quote,
            )

    The chain configuration is required; bundled presets live in
    ``gte_sdk.config.CHAIN_PRESETS``.
    """

    def __init__(
        self,
        chain_config: ChainConfig,
        *,
        rest_client: Optional[RestClient] = None,
        contract_reader: Optional[ContractReader] = None,
        rpc_url: Optional[str] = None,
        uniswap_router_address: Optional[str] = None,
        rest_options: Optional[Dict[str, Any]] = None,
    ):
        self._chain = chain_config
        self.rpc_url = rpc_url or chain_config.rpc_http_url

        if rest_client is None:
            options = dict(rest_options or {})
            base_url = options.pop("base_url", None) or chain_config.api_url
            rest_client = RestClient(base_url, **options)
        self.rest = rest_client

        self._owns_reader = contract_reader is None
        self.contract_reader: ContractReader = contract_reader or Web3ContractReader(self.rpc_url)
        self.router_resolver = RouterAddressResolver(
            self.contract_reader,
            chain_config.router_address,
            override=uniswap_router_address,
        )
        self.quotes = QuoteEngine(
            self.contract_reader,
            self.router_resolver,
            default_slippage_bps=settings.default_slippage_bps,
        )

    async def __aenter__(self) -> "GteSdk":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.rest.aclose()
        if self._owns_reader:
            await self.contract_reader.aclose()

    def get_chain_config(self) -> ChainConfig:
        return self._chain.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Market data

    async def get_markets(
        self,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        market_type: Optional[MarketType] = None,
        sort_by: Optional[MarketSortBy] = None,
        token_address: Optional[str] = None,
        newly_graduated: Optional[bool] = None,
    ) -> List[MarketSummary]:
        query = {
            "limit": limit,
            "offset": offset,
            "marketType": market_type,
            "sortBy": sort_by,
            "tokenAddress": token_address,
            "newlyGraduated": newly_graduated,
        }
        payload = await self.rest.get("/markets", query)
        return [MarketSummary.model_validate(item) for item in payload or []]

    async def get_market(self, market_address: str) -> Optional[MarketSummary]:
        payload = await self.rest.get(f"/markets/{market_address}")
        return MarketSummary.model_validate(payload) if payload is not None else None

    async def get_tokens(
        self,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        market_type: Optional[MarketType] = None,
        creator: Optional[str] = None,
        metadata: Optional[bool] = None,
    ) -> List[TokenSummary]:
        query = {
            "limit": limit,
            "offset": offset,
            "marketType": market_type,
            "creator": creator,
            "metadata": metadata,
        }
        payload = await self.rest.get("/tokens", query)
        return [TokenSummary.model_validate(item) for item in payload or []]

    async def get_token(self, token_address: str) -> Optional[TokenSummary]:
        payload = await self.rest.get(f"/tokens/{token_address}")
        return TokenSummary.model_validate(payload) if payload is not None else None

    async def get_market_trades(
        self,
        market_address: str,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[MarketTrade]:
        payload = await self.rest.get(
            f"/markets/{market_address}/trades",
            {"limit": limit, "offset": offset},
        )
        return [MarketTrade.model_validate(item) for item in payload or []]

    async def get_order_book(
        self,
        market_address: str,
        *,
        limit: Optional[int] = None,
    ) -> MarketOrderBookSnapshot:
        payload = await self.rest.get(f"/markets/{market_address}/book", {"limit": limit})
        return MarketOrderBookSnapshot.model_validate(payload or {})

    async def get_candles(
        self,
        market_address: str,
        *,
        interval: str,
        start_time: int,
        end_time: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[MarketCandle]:
        query = {
            "interval": interval,
            "startTime": start_time,
            "endTime": end_time,
            "limit": limit,
        }
        payload = await self.rest.get(f"/markets/{market_address}/candles", query)
        return [MarketCandle.model_validate(item) for item in payload or []]

    async def get_user_portfolio(self, user_address: str) -> Optional[UserPortfolio]:
        payload = await self.rest.get(f"/users/{user_address}/portfolio")
        return UserPortfolio.model_validate(payload) if payload is not None else None

    # ------------------------------------------------------------------
    # Quotes

    async def get_uniswap_router_address(self) -> str:
        return await self.router_resolver.resolve()

    async def get_quote(
        self,
        token_in: TokenSummary,
        token_out: TokenSummary,
        amount_in: Amount,
        *,
        slippage_bps: Optional[int] = None,
        path: Optional[Sequence[str]] = None,
    ) -> QuoteResult:
        return await self.quotes.quote_exact_in(token_in, token_out, amount_in, slippage_bps, path)

    async def get_quote_exact_out(
        self,
        token_in: TokenSummary,
        token_out: TokenSummary,
        amount_out: Amount,
        *,
        slippage_bps: Optional[int] = None,
        path: Optional[Sequence[str]] = None,
    ) -> QuoteExactOutResult:
        return await self.quotes.quote_exact_out(token_in, token_out, amount_out, slippage_bps, path)

    # ------------------------------------------------------------------
    # Transaction builders

    async def build_approve(
        self,
        token_address: str,
        *,
        spender: Optional[str] = None,
        amount: Optional[Amount] = None,
        decimals: Optional[int] = None,
    ) -> PreparedTransaction:
        """Build an ERC-20 approval; defaults to an unlimited allowance for the router."""
        spender = spender or await self.router_resolver.resolve()
        amount_atomic = self._resolve_approval_amount(amount, decimals)
        return PreparedTransaction(
            to=token_address,
            data=encode_approve(spender, amount_atomic),
            value=0,
            chain_id=self._chain.id,
        )

    async def build_swap_exact_in(
        self,
        token_in: TokenSummary,
        token_out: TokenSummary,
        amount_in: Amount,
        *,
        recipient: str,
        slippage_bps: Optional[int] = None,
        path: Optional[Sequence[str]] = None,
        deadline_seconds: Optional[int] = None,
        quote: Optional[QuoteResult] = None,
        use_native_in: bool = False,
        use_native_out: bool = False,
    ) -> BuildSwapExactInResult:
        if quote is None:
            quote = await self.get_quote(
                token_in, token_out, amount_in, slippage_bps=slippage_bps, path=path
            )
        elif not isinstance(quote, QuoteResult):
            raise QuoteDirectionMismatch(
                f"build_swap_exact_in needs an exact-input quote, got {type(quote).__name__}"
            )
        router = await self.router_resolver.resolve()
        deadline = self._deadline(deadline_seconds)
        encoded = encode_swap_calldata(
            quote,
            recipient,
            deadline,
            use_native_in=use_native_in,
            use_native_out=use_native_out,
            weth_address=self._chain.weth_address,
        )
        logger.debug("Built %s via %s (value=%d, deadline=%d)", encoded.function_name, router, encoded.value, deadline)
        return BuildSwapExactInResult(
            tx=PreparedTransaction(to=router, data=encoded.data, value=encoded.value, chain_id=self._chain.id),
            quote=quote,
            deadline=deadline,
        )

    async def build_swap_exact_out(
        self,
        token_in: TokenSummary,
        token_out: TokenSummary,
        amount_out: Amount,
        *,
        recipient: str,
        slippage_bps: Optional[int] = None,
        path: Optional[Sequence[str]] = None,
        deadline_seconds: Optional[int] = None,
        quote: Optional[QuoteExactOutResult] = None,
        use_native_in: bool = False,
        use_native_out: bool = False,
    ) -> BuildSwapExactOutResult:
        if quote is None:
            quote = await self.get_quote_exact_out(
                token_in, token_out, amount_out, slippage_bps=slippage_bps, path=path
            )
        elif not isinstance(quote, QuoteExactOutResult):
            raise QuoteDirectionMismatch(
                f"build_swap_exact_out needs an exact-output quote, got {type(quote).__name__}"
            )
        router = await self.router_resolver.resolve()
        deadline = self._deadline(deadline_seconds)
        encoded = encode_swap_calldata(
            quote,
            recipient,
            deadline,
            use_native_in=use_native_in,
            use_native_out=use_native_out,
            weth_address=self._chain.weth_address,
        )
        logger.debug("Built %s via %s (value=%d, deadline=%d)", encoded.function_name, router, encoded.value, deadline)
        return BuildSwapExactOutResult(
            tx=PreparedTransaction(to=router, data=encoded.data, value=encoded.value, chain_id=self._chain.id),
            quote=quote,
            deadline=deadline,
        )

    @staticmethod
    def _deadline(deadline_seconds: Optional[int]) -> int:
        seconds = settings.default_deadline_seconds if deadline_seconds is None else deadline_seconds
        return int(time.time()) + seconds

    @staticmethod
    def _resolve_approval_amount(amount: Optional[Amount], decimals: Optional[int]) -> int:
        if amount is None:
            return MAX_UINT256
        if decimals is None or isinstance(amount, int):
            value = parse_integer_amount(amount)
        else:
            value = to_atomic(amount, decimals)
        if not 0 <= value <= MAX_UINT256:
            raise InvalidAmountFormat(f"Approval amount {amount!r} does not fit in uint256")
        return value
