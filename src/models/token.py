"""Token metrics and safety analysis records.

Built once per analysis request and never mutated or persisted. Supply
figures stay base-10 integer strings so large token amounts never pass
through float.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

_INTEGER_RE = re.compile(r"[0-9]+")


def _check_supply(name: str, value: str) -> None:
    if not isinstance(value, str) or not _INTEGER_RE.fullmatch(value):
        raise ValueError(f"{name} must be a non-negative base-10 integer string, got {value!r}")


def _check_pct(name: str, value: float) -> None:
    if not 0 <= value <= 100:
        raise ValueError(f"{name} must be within [0, 100], got {value}")


@dataclass(frozen=True)
class LiquidityMetrics:
    total_liquidity: str = "0"
    liquidity_locked: str = "0"
    lock_period: int = 0  # seconds

    def __post_init__(self) -> None:
        _check_supply("total_liquidity", self.total_liquidity)
        _check_supply("liquidity_locked", self.liquidity_locked)
        if self.lock_period < 0:
            raise ValueError(f"lock_period must be >= 0, got {self.lock_period}")

    @property
    def is_locked(self) -> bool:
        return int(self.liquidity_locked) > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalLiquidity": self.total_liquidity,
            "liquidityLocked": self.liquidity_locked,
            "lockPeriod": self.lock_period,
        }


@dataclass(frozen=True)
class OwnershipMetrics:
    owner_address: str = "0x0"
    ownership_percentage: float = 0.0  # 0-100
    renounced: bool = False

    def __post_init__(self) -> None:
        _check_pct("ownership_percentage", self.ownership_percentage)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ownerAddress": self.owner_address,
            "ownershipPercentage": self.ownership_percentage,
            "renounced": self.renounced,
        }


@dataclass(frozen=True)
class TokenMetrics:
    """On-chain figures a safety score is computed from."""

    total_supply: str
    circulating_supply: str
    holders_count: int = 0
    liquidity: LiquidityMetrics = field(default_factory=LiquidityMetrics)
    ownership: OwnershipMetrics = field(default_factory=OwnershipMetrics)
    name: str = ""
    symbol: str = ""

    def __post_init__(self) -> None:
        _check_supply("total_supply", self.total_supply)
        _check_supply("circulating_supply", self.circulating_supply)
        if self.holders_count < 0:
            raise ValueError(f"holders_count must be >= 0, got {self.holders_count}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalSupply": self.total_supply,
            "circulatingSupply": self.circulating_supply,
            "holdersCount": self.holders_count,
            "liquidityMetrics": self.liquidity.to_dict(),
            "ownershipMetrics": self.ownership.to_dict(),
        }


@dataclass(frozen=True)
class SafetyAnalysisResult:
    """Outcome of one analysis request, rendered as-is by the UI."""

    contract_address: str
    token_name: str
    token_symbol: str
    safety_score: int
    risks: tuple[str, ...]
    recommendations: tuple[str, ...]
    token_metrics: TokenMetrics

    def __post_init__(self) -> None:
        if not isinstance(self.safety_score, int) or not 0 <= self.safety_score <= 100:
            raise ValueError(f"safety_score must be an int within [0, 100], got {self.safety_score!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "contractAddress": self.contract_address,
            "tokenName": self.token_name,
            "tokenSymbol": self.token_symbol,
            "safetyScore": self.safety_score,
            "risks": list(self.risks),
            "recommendations": list(self.recommendations),
            "tokenMetrics": self.token_metrics.to_dict(),
        }
