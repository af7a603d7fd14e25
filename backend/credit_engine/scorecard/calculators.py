"""Component score calculators.

Pure functions that normalize raw weekly inputs into the three credits
(EC, OC, CC), each in [0, 1]. None of them touch the database.
"""

from typing import Iterable, Sequence

from credit_engine.scorecard.credit_config import DEFAULT_POLICY, CreditPolicy
from credit_engine.scorecard.values import KeyResult


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(upper, value))


def calc_ec(hours_worked: float, policy: CreditPolicy = DEFAULT_POLICY) -> float:
    """Execution credit from hours worked.

    Step curve over the policy's hour tiers: saturates at 1.0 from the
    full-time threshold and is 0 below the lowest tier.
    """
    hours = max(0.0, float(hours_worked))
    for threshold, credit in sorted(policy.execution_tiers, reverse=True):
        if hours >= threshold:
            return credit
    return 0.0


def calc_oc(key_results: Sequence[KeyResult]) -> float:
    """Objective credit: weighted average of key-result scores.

    No key results means no evidence of outcomes, so the credit is 0.
    """
    if not key_results:
        return 0.0

    total_weight = sum(kr.weight for kr in key_results)
    if total_weight <= 0:
        return 0.0
    weighted = sum(kr.score * kr.weight for kr in key_results)
    return clamp(weighted / total_weight)


def calc_cc(raw_collaboration: float) -> float:
    """Collaboration credit. Out-of-range input is clamped, not rejected."""
    return clamp(float(raw_collaboration))


def calc_cc_from_activity(
    pr_reviews: int,
    daily_posts: int,
    retro_insights: bool,
    precision: int = 2,
) -> float:
    """Collaboration credit derived from the week's team activity.

    0.33 per PR review (max 3), minus 0.2 per missed daily post out of five,
    minus 0.2 when no retro insights were shared.
    """
    cc = min(pr_reviews, 3) * 0.33
    cc -= (5 - daily_posts) * 0.2
    if not retro_insights:
        cc -= 0.2
    return clamp(round(cc, precision))


def build_key_results(
    raw: Iterable[dict], policy: CreditPolicy = DEFAULT_POLICY
) -> list:
    """Turn raw ``{"score": .., "weight": ..}`` dicts into validated key results."""
    return [
        KeyResult.create(item.get("score"), item.get("weight", 1), scale=policy.key_result_scale)
        for item in raw
    ]
