from pathlib import Path
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_DEADLINE_SECONDS, DEFAULT_SLIPPAGE_BPS


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GTE_",
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="INFO", description="Logging level")

    # REST transport
    rest_max_retries: int = Field(default=3, ge=0, description="Retries for failed GET requests")
    rest_retry_delay_ms: int = Field(default=500, ge=0, description="Base delay between retries (linear backoff)")
    rest_rate_limit_ms: int = Field(default=0, ge=0, description="Minimum spacing between consecutive requests")
    rest_timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout")

    # Trade building
    default_slippage_bps: int = Field(default=DEFAULT_SLIPPAGE_BPS, ge=0, description="Slippage tolerance used when a request omits it")
    default_deadline_seconds: int = Field(default=DEFAULT_DEADLINE_SECONDS, gt=0, description="Swap deadline offset from now")


class Eip1559Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_fee_gwei: float
    max_block_gas: int
    target_block_gas: int


class ChainConfig(BaseModel):
    """Network identity, endpoints and canonical contract addresses for one chain."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    api_url: str
    ws_url: str
    rpc_http_url: str
    rpc_ws_url: str
    router_address: str
    weth_address: str
    clob_manager_address: str
    launchpad_address: str
    explorer_url: str
    performance_dashboard_url: str
    native_symbol: str = "ETH"
    eip1559: Eip1559Config


MEGAETH_TESTNET = ChainConfig(
    id=6342,
    name="MegaETH Testnet",
    api_url="https://api-testnet.gte.xyz/v1",
    ws_url="wss://api-testnet.gte.xyz/ws",
    rpc_http_url="https://api-testnet.gte.xyz/v1/exchange",
    rpc_ws_url="wss://carrot.megaeth.com/ws",
    router_address="0x86470efcEa37e50F94E74649463b737C87ada367",
    weth_address="0x776401b9BC8aAe31A685731B7147D4445fD9FB19",
    clob_manager_address="0xD7310f8A0D569Dd0803D28BB29f4E0A471fA84F6",
    launchpad_address="0x0B6cD1DefCe3189Df60A210326E315383fbC14Ed",
    explorer_url="https://megaexplorer.xyz",
    performance_dashboard_url="https://uptime.megaeth.com",
    native_symbol="ETH",
    eip1559=Eip1559Config(
        base_fee_gwei=0.0025,
        max_block_gas=2_000_000_000,
        target_block_gas=1_000_000_000,
    ),
)

CHAIN_PRESETS: Dict[str, ChainConfig] = {
    "megaeth-testnet": MEGAETH_TESTNET,
}


def get_chain_config(name: str) -> ChainConfig:
    """Look up a bundled chain preset by name (e.g. ``megaeth-testnet``)."""
    key = (name or "").strip().lower()
    if key not in CHAIN_PRESETS:
        raise ValueError(
            f"Unknown chain preset: {name!r}. Available: {', '.join(sorted(CHAIN_PRESETS))}"
        )
    return CHAIN_PRESETS[key]


# Global settings instance
settings = Settings()
