"""
Weekly Scoring Service - end-to-end score submission.

An administrator enters a user's raw weekly numbers; this service resolves
the user's team weights and multiplier, normalizes the inputs, composes the
WCS and upserts the weekly record.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from sqlalchemy.orm import Session

from credit_engine.cache import TTLCache
from credit_engine.errors import PermissionDeniedError, ValidationError
from credit_engine.models.models import WeeklyScore
from credit_engine.scorecard.calculators import build_key_results, calc_cc, calc_ec, calc_oc
from credit_engine.scorecard.composer import CreditScoreComposer, ScoreBreakdown
from credit_engine.scorecard.credit_config import DEFAULT_POLICY, CreditPolicy
from credit_engine.scorecard.values import as_number
from credit_engine.services.access_service import AccessService, Actor
from credit_engine.services.rating_service import PerformanceRatingService
from credit_engine.services.score_record_service import ScoreRecordService
from credit_engine.services.weight_config_service import WeightConfigService
from credit_engine.utils.week import parse_week_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeeklyScoreResult:
    record: WeeklyScore
    breakdown: ScoreBreakdown

    def to_dict(self) -> Dict[str, Any]:
        return {"record": self.record.to_dict(), "breakdown": self.breakdown.to_dict()}


class WeeklyScoringService:
    def __init__(
        self,
        db: Session,
        cache: Optional[TTLCache] = None,
        policy: CreditPolicy = DEFAULT_POLICY,
    ):
        self.db = db
        self.policy = policy
        self.weights = WeightConfigService(db, cache=cache, policy=policy)
        self.ratings = PerformanceRatingService(db, cache=cache, policy=policy)
        self.records = ScoreRecordService(db)
        self.composer = CreditScoreComposer(self.weights, self.ratings, policy)

    def submit_weekly_score(
        self,
        actor: Actor,
        user_id: str,
        week_id: str,
        hours_worked,
        key_results: Iterable[Dict[str, Any]],
        collaboration,
        expected_version: Optional[int] = None,
    ) -> WeeklyScoreResult:
        """Score a user's week and store it, replacing any earlier entry.

        Raises:
            ValidationError: Bad week label, hours, key results or collaboration
            NotFoundError: Unknown user
            PermissionDeniedError: Actor may not manage the user
            StaleScoreError: expected_version does not match the stored record
        """
        parse_week_id(week_id)
        hours = as_number("Hours worked", hours_worked)
        if hours < 0:
            raise ValidationError(f"Hours worked cannot be negative, got {hours_worked!r}")
        collaboration_value = as_number("Collaboration score", collaboration)
        krs = build_key_results(key_results, self.policy)

        access = AccessService(self.db)
        target = access.get_user(user_id)
        access.require_manager(actor)
        if not access.can_manage_user(actor, target):
            logger.warning(f"{actor.user_id} ({actor.role}) tried to score {user_id} ({target.role})")
            raise PermissionDeniedError("Admins can only enter scores for members")

        ec = calc_ec(hours, self.policy)
        oc = calc_oc(krs)
        cc = calc_cc(collaboration_value)

        breakdown = self.composer.compose_score(ec, oc, cc, user_id, target.team_id, hours)
        record = self.records.upsert_score(
            user_id=user_id,
            week_id=week_id,
            ec=ec,
            oc=oc,
            cc=cc,
            wcs=breakdown.final_score,
            check_mark=breakdown.check_mark,
            hours_worked=hours,
            entered_by=actor.user_id,
            expected_version=expected_version,
        )
        return WeeklyScoreResult(record=record, breakdown=breakdown)
