"""Metrics collector — read-only contract calls assembled into TokenMetrics.

A single failed read aborts collection; no field falls back to a default
after a failed call.

Holder count and liquidity figures need an indexer and are reported as
zero placeholders.
"""

from dataclasses import dataclass
from decimal import Decimal

from loguru import logger

from src.models.token import LiquidityMetrics, OwnershipMetrics, TokenMetrics
from src.parsers.exceptions import ContractReadError
from src.parsers.starknet.client import StarknetRpcClient
from src.parsers.starknet.decoder import decode_address, decode_string, decode_uint


@dataclass(frozen=True)
class ContractHandle:
    """A deployed contract and the provider used to call it."""

    address: str
    rpc: StarknetRpcClient


def ownership_pct(owner_balance: int, total_supply: int) -> float:
    """Owner's share of total supply as a percentage, clamped to [0, 100]."""
    if total_supply <= 0:
        return 0.0
    pct = Decimal(owner_balance) * 100 / Decimal(total_supply)
    return float(min(Decimal(100), max(Decimal(0), pct)).quantize(Decimal("0.0001")))


async def collect_metrics(handle: ContractHandle) -> TokenMetrics:
    """Read supply and ownership figures for the contract behind ``handle``.

    Raises ContractReadError if any read fails, times out or cannot be decoded.
    """
    address = handle.address
    rpc = handle.rpc

    try:
        name = decode_string(await rpc.call(address, "name"))
        symbol = decode_string(await rpc.call(address, "symbol"))
        total_supply = decode_uint(await rpc.call(address, "totalSupply"))
        circulating_supply = decode_uint(await rpc.call(address, "circulatingSupply"))
        owner = decode_address(await rpc.call(address, "owner"))
        owner_balance = decode_uint(await rpc.call(address, "balanceOf", [owner]))
    except (ValueError, TypeError) as e:
        raise ContractReadError(f"Could not decode contract response: {e}") from e

    renounced = int(owner, 16) == 0
    metrics = TokenMetrics(
        total_supply=str(total_supply),
        circulating_supply=str(circulating_supply),
        holders_count=0,
        liquidity=LiquidityMetrics(total_liquidity="0", liquidity_locked="0", lock_period=0),
        ownership=OwnershipMetrics(
            owner_address=owner,
            ownership_percentage=0.0 if renounced else ownership_pct(owner_balance, total_supply),
            renounced=renounced,
        ),
        name=name,
        symbol=symbol,
    )
    logger.debug(
        f"[METRICS] {address[:14]} {symbol or '?'}: supply={total_supply} "
        f"owner_pct={metrics.ownership.ownership_percentage:.2f}"
    )
    return metrics
