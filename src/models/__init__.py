from src.models.token import (
    LiquidityMetrics,
    OwnershipMetrics,
    SafetyAnalysisResult,
    TokenMetrics,
)

__all__ = [
    "LiquidityMetrics",
    "OwnershipMetrics",
    "TokenMetrics",
    "SafetyAnalysisResult",
]
