"""Safety score — 100 minus the penalties whose conditions hold, clamped to 0-100.

Penalties live in a table rather than in branches. They are evaluated in
table order and summed independently; the table order is also the order
triggered penalties are reported in.

The agent's analysis text does not feed into the score.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from src.models.token import TokenMetrics

MAX_SCORE = 100
MIN_SCORE = 0


@dataclass(frozen=True)
class PenaltyRule:
    name: str
    points: int
    applies: Callable[[TokenMetrics], bool]
    description: str = ""


DEFAULT_PENALTIES: tuple[PenaltyRule, ...] = (
    PenaltyRule(
        name="owner_concentration",
        points=30,
        applies=lambda m: m.ownership.ownership_percentage > 50,
        description="Owner holds more than 50% of supply",
    ),
    PenaltyRule(
        name="liquidity_unlocked",
        points=20,
        applies=lambda m: not m.liquidity.is_locked,
        description="Liquidity is not locked",
    ),
    PenaltyRule(
        name="few_holders",
        points=10,
        applies=lambda m: m.holders_count < 100,
        description="Fewer than 100 holders",
    ),
)


def triggered_penalties(
    metrics: TokenMetrics,
    penalties: Sequence[PenaltyRule] = DEFAULT_PENALTIES,
) -> list[PenaltyRule]:
    """Rules whose condition holds for ``metrics``, in table order."""
    return [rule for rule in penalties if rule.applies(metrics)]


def compute_score(
    metrics: TokenMetrics,
    penalties: Sequence[PenaltyRule] = DEFAULT_PENALTIES,
) -> int:
    """Compute a 0-100 safety score. Higher is safer."""
    score = MAX_SCORE - sum(rule.points for rule in triggered_penalties(metrics, penalties))
    return max(MIN_SCORE, min(MAX_SCORE, score))
