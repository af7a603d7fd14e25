"""
Performance Rating Service - per-user performance multipliers.

Provides:
- Resolve a user's multiplier (1.0 when unrated)
- Save (replace) a rating, validated and scoped to the manager's team
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from credit_engine.cache import TTLCache, get_resolver_cache, user_multiplier_key
from credit_engine.errors import CreditEngineError, PermissionDeniedError
from credit_engine.models.models import PerformanceRating
from credit_engine.scorecard.credit_config import DEFAULT_POLICY, CreditPolicy
from credit_engine.scorecard.values import validate_multiplier
from credit_engine.services.access_service import AccessService, Actor

logger = logging.getLogger(__name__)


class PerformanceRatingService:
    def __init__(
        self,
        db: Session,
        cache: Optional[TTLCache] = None,
        policy: CreditPolicy = DEFAULT_POLICY,
    ):
        self.db = db
        self.cache = cache if cache is not None else get_resolver_cache()
        self.policy = policy

    def resolve_multiplier(self, user_id: str) -> float:
        """Return the user's multiplier, or the policy default if unrated."""
        key = user_multiplier_key(user_id)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Multiplier cache hit for user {user_id}")
            return cached

        rating = self.get_rating(user_id)
        multiplier = rating.multiplier if rating else self.policy.default_multiplier
        bounded = min(self.policy.max_multiplier, max(self.policy.min_multiplier, multiplier))
        if bounded != multiplier:
            logger.warning(f"Stored multiplier {multiplier} for user {user_id} out of bounds, using {bounded}")
            multiplier = bounded
        self.cache.set(key, multiplier)
        return multiplier

    def get_rating(self, user_id: str) -> Optional[PerformanceRating]:
        return self.db.query(PerformanceRating).filter(
            PerformanceRating.user_id == user_id
        ).first()

    def save_rating(
        self,
        user_id: str,
        multiplier,
        notes: Optional[str],
        actor: Actor,
    ) -> PerformanceRating:
        """Replace the user's rating.

        Raises:
            ValidationError: Multiplier outside the policy bounds
            NotFoundError: Unknown user
            PermissionDeniedError: Actor is not an owner, or is a manager
                rating someone outside their own team
        """
        try:
            value = validate_multiplier(
                multiplier, self.policy.min_multiplier, self.policy.max_multiplier
            )

            access = AccessService(self.db)
            target = access.get_user(user_id)
            access.require_manager(actor)
            if not actor.is_owner and (actor.team_id is None or target.team_id != actor.team_id):
                raise PermissionDeniedError("You can only rate members of your own team")

            rating = self.get_rating(user_id)
            if rating is None:
                rating = PerformanceRating(user_id=user_id)
                self.db.add(rating)

            rating.multiplier = value
            rating.notes = notes
            rating.updated_by = actor.user_id
            rating.updated_at = datetime.utcnow()

            self.db.commit()
        except CreditEngineError as e:
            self.db.rollback()
            logger.warning(f"Rejected rating for user {user_id} by {actor.user_id}: {e.message}")
            raise
        except Exception:
            self.db.rollback()
            raise

        self.cache.clear(user_multiplier_key(user_id))
        self.db.refresh(rating)
        logger.info(f"User {user_id} performance multiplier set to {value} by {actor.user_id}")
        return rating
