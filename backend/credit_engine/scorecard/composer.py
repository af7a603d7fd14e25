"""
Credit Score Composer - Weekly Credit Score Computation

Combines the three normalized credits with the team's weight split and the
user's performance multiplier into the Weekly Credit Score (WCS), and
derives the check-mark achievement flag.

The composer returns the full decomposition (base score, multiplier,
weights) so callers can show how the final number was reached.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from credit_engine.errors import ValidationError
from credit_engine.scorecard.calculators import clamp
from credit_engine.scorecard.credit_config import DEFAULT_POLICY, CreditPolicy
from credit_engine.scorecard.values import CreditComponents, CreditWeights

logger = logging.getLogger(__name__)


class WeightResolver(Protocol):
    def resolve_weights(self, team_id: Optional[str] = None) -> CreditWeights: ...


class MultiplierResolver(Protocol):
    def resolve_multiplier(self, user_id: str) -> float: ...


@dataclass(frozen=True)
class ScoreBreakdown:
    """Result of composing one week's score."""

    base_score: float
    final_score: float
    multiplier: float
    weights: CreditWeights
    check_mark: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_score": self.base_score,
            "final_score": self.final_score,
            "multiplier": self.multiplier,
            "weights": self.weights.as_dict(),
            "check_mark": self.check_mark,
        }


def blend_credits(components: CreditComponents, weights: CreditWeights) -> float:
    """Weighted blend of EC/OC/CC, in [0, 1] when the weights sum to 100."""
    return (
        components.ec * weights.ec
        + components.oc * weights.oc
        + components.cc * weights.cc
    ) / 100


def earns_check_mark(
    hours_worked: float, oc: float, policy: CreditPolicy = DEFAULT_POLICY
) -> bool:
    """Check mark: minimum hours met and a perfect raw objective credit."""
    return hours_worked >= policy.check_mark_min_hours and oc == 1


class CreditScoreComposer:
    """
    Computes the WCS for a user's week.

    Example:
        >>> composer = CreditScoreComposer(weight_service, rating_service)
        >>> breakdown = composer.compose_score(1.0, 1.0, 0.8, "u-1", None, hours_worked=40)
        >>> breakdown.final_score
        0.98
    """

    def __init__(
        self,
        weight_resolver: WeightResolver,
        multiplier_resolver: MultiplierResolver,
        policy: CreditPolicy = DEFAULT_POLICY,
    ):
        self.weight_resolver = weight_resolver
        self.multiplier_resolver = multiplier_resolver
        self.policy = policy

    def compose_score(
        self,
        ec: float,
        oc: float,
        cc: float,
        user_id: str,
        team_id: Optional[str],
        hours_worked: float,
    ) -> ScoreBreakdown:
        """Compose the weekly score from normalized credits.

        Args:
            ec, oc, cc: Normalized credits in [0, 1]
            user_id: Subject user (multiplier lookup)
            team_id: Subject user's team (weights lookup), may be None
            hours_worked: Raw hours, used only for the check mark

        Raises:
            ValidationError: If a credit is out of range, or the resolved
                weights do not sum to 100.
        """
        components = CreditComponents.create(ec, oc, cc)

        weights = self.weight_resolver.resolve_weights(team_id)
        if weights.total != 100:
            logger.error(f"Resolved weights for team {team_id} sum to {weights.total}, refusing to score")
            raise ValidationError(
                f"Credit weights for team {team_id} sum to {weights.total}%, expected 100%"
            )

        precision = self.policy.score_precision
        base_score = round(blend_credits(components, weights), precision)

        multiplier = self.multiplier_resolver.resolve_multiplier(user_id)
        final_score = round(clamp(base_score * multiplier), precision)

        check_mark = earns_check_mark(hours_worked, components.oc, self.policy)

        logger.debug(
            f"Composed score for user {user_id}: "
            f"base={base_score} x{multiplier} -> {final_score}"
        )
        return ScoreBreakdown(
            base_score=base_score,
            final_score=final_score,
            multiplier=multiplier,
            weights=weights,
            check_mark=check_mark,
        )
