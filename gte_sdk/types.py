"""Pydantic models for GTE API payloads."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MarketType = Literal["amm", "bonding-curve", "clob-spot", "perps"]
MarketSortBy = Literal["marketCap", "createdAt", "volume"]


class ApiModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class TokenSummary(ApiModel):
    address: str = Field(description="Token contract address")
    decimals: int = Field(ge=0, description="Token decimal places")
    name: str = Field(description="Full token name")
    symbol: str = Field(description="Token symbol")
    logo_uri: Optional[str] = Field(default=None, description="Token logo URL")
    price_usd: Optional[str] = Field(default=None, description="Price per token in USD")
    total_supply: Optional[str] = Field(default=None, description="Total supply (human units)")


class MarketSummary(ApiModel):
    market_type: MarketType
    address: str
    base_token: TokenSummary
    quote_token: TokenSummary
    price: str
    price_usd: str
    volume_24_hr_usd: str = Field(alias="volume24HrUsd")
    volume_1_hr_usd: str = Field(alias="volume1HrUsd")
    market_cap_usd: str
    created_at: int
    tvl_usd: Optional[str] = None


class MarketTrade(ApiModel):
    price: str
    size: str
    side: Literal["buy", "sell"]
    timestamp: int
    tx_hash: Optional[str] = None


class MarketOrderBookLevel(ApiModel):
    price: str
    size: str


class MarketOrderBookSnapshot(ApiModel):
    bids: List[MarketOrderBookLevel] = Field(default_factory=list)
    asks: List[MarketOrderBookLevel] = Field(default_factory=list)


class MarketCandle(ApiModel):
    timestamp: int
    open: str
    high: str
    low: str
    close: str
    volume: str
    num_trades: Optional[int] = None


class TokenBalance(ApiModel):
    token: TokenSummary
    balance: str
    balance_usd: str
    realized_pnl_usd: str
    unrealized_pnl_usd: str


class UserPortfolio(ApiModel):
    tokens: List[TokenBalance] = Field(default_factory=list)
    total_usd_balance: str
