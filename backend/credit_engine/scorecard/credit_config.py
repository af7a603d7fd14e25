"""
Credit Policy - System Defaults for Weekly Credit Scoring

This module holds the numeric policy behind the Weekly Credit Score (WCS):
the default EC/OC/CC split, the execution-credit hour tiers, the key-result
score scale and the achievement thresholds.

The policy is an immutable value handed to the resolvers and the composer,
so a test (or a future per-tenant setup) can swap in alternate defaults
without touching module state.
"""

from dataclasses import dataclass, field
from typing import Tuple

from credit_engine.scorecard.values import CreditWeights


# Hours worked -> execution credit. Checked top-down, first match wins.
EXECUTION_CREDIT_TIERS: Tuple[Tuple[float, float], ...] = (
    (20.0, 1.0),   # full-time threshold
    (15.0, 0.8),
    (10.0, 0.5),
)

# Allowed per-key-result completion scores
KEY_RESULT_SCALE: Tuple[float, ...] = (0.0, 0.4, 0.6, 0.8, 1.0)


@dataclass(frozen=True)
class CreditPolicy:
    """Numeric policy used to turn weekly inputs into a WCS."""

    default_weights: CreditWeights = field(
        default_factory=lambda: CreditWeights(ec=40, oc=50, cc=10)
    )
    execution_tiers: Tuple[Tuple[float, float], ...] = EXECUTION_CREDIT_TIERS
    key_result_scale: Tuple[float, ...] = KEY_RESULT_SCALE
    check_mark_min_hours: float = 20.0
    min_multiplier: float = 0.5
    max_multiplier: float = 2.0
    default_multiplier: float = 1.0
    streak_threshold: float = 0.8
    score_precision: int = 2

    @property
    def full_time_hours(self) -> float:
        """Hours at which execution credit saturates at 1.0."""
        return min(hours for hours, credit in self.execution_tiers if credit >= 1.0)


DEFAULT_POLICY = CreditPolicy()
