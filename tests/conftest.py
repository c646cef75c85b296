"""Shared test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from config.settings import Settings
from src.models.token import LiquidityMetrics, OwnershipMetrics, TokenMetrics
from src.parsers.starknet.client import StarknetRpcClient

TOKEN_ADDRESS = "0x0123abc"
OWNER_ADDRESS = "0x7a11ce"


def make_metrics(
    *,
    ownership_pct: float = 10.0,
    liquidity_locked: str = "1000",
    holders_count: int = 500,
    **kwargs,
) -> TokenMetrics:
    defaults = {
        "total_supply": "1000000",
        "circulating_supply": "900000",
        "holders_count": holders_count,
        "liquidity": LiquidityMetrics(
            total_liquidity="5000", liquidity_locked=liquidity_locked, lock_period=86400
        ),
        "ownership": OwnershipMetrics(
            owner_address=OWNER_ADDRESS, ownership_percentage=ownership_pct, renounced=False
        ),
        "name": "Doge Moon",
        "symbol": "DMOON",
    }
    defaults.update(kwargs)
    return TokenMetrics(**defaults)


def rpc_responses(
    *,
    total_supply: int = 1000,
    circulating_supply: int = 900,
    owner: str = OWNER_ADDRESS,
    owner_balance: int = 100,
) -> dict[str, list[str]]:
    """Raw felts a well-behaved token contract returns, keyed by entry point."""
    return {
        "name": [hex(int.from_bytes(b"Doge Moon", "big"))],
        "symbol": [hex(int.from_bytes(b"DMOON", "big"))],
        "totalSupply": [hex(total_supply), "0x0"],
        "circulatingSupply": [hex(circulating_supply), "0x0"],
        "owner": [owner],
        "balanceOf": [hex(owner_balance), "0x0"],
    }


def make_rpc(responses: dict[str, list[str] | Exception]) -> MagicMock:
    """StarknetRpcClient stand-in answering ``call`` from ``responses``."""

    async def _call(contract_address, entry_point, calldata=(), **kwargs):
        value = responses[entry_point]
        if isinstance(value, Exception):
            raise value
        return value

    rpc = MagicMock(spec=StarknetRpcClient)
    rpc.call = AsyncMock(side_effect=_call)
    rpc.close = AsyncMock()
    return rpc


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        agent_api_key="agent-key",
        llm_api_key="llm-key",
        starknet_rpc_url="https://rpc.example/starknet",
        request_timeout_sec=5.0,
    )
