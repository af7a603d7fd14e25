"""
Weight Config Service - per-team credit weights.

Provides:
- Resolve a team's EC/OC/CC split, falling back to the policy default
- Save (replace) a team's split, validated and permission-checked
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from credit_engine.cache import TTLCache, get_resolver_cache, team_weights_key
from credit_engine.errors import CreditEngineError, PermissionDeniedError
from credit_engine.models.models import TeamCreditConfig
from credit_engine.scorecard.credit_config import DEFAULT_POLICY, CreditPolicy
from credit_engine.scorecard.values import CreditWeights
from credit_engine.services.access_service import AccessService, Actor

logger = logging.getLogger(__name__)


class WeightConfigService:
    """Resolves and stores team credit weights.

    Reads go through the resolver cache; saves invalidate the team's key.

    Example:
        >>> svc = WeightConfigService(db)
        >>> svc.resolve_weights("t-eng").as_dict()
        {'EC': 40, 'OC': 50, 'CC': 10}
    """

    def __init__(
        self,
        db: Session,
        cache: Optional[TTLCache] = None,
        policy: CreditPolicy = DEFAULT_POLICY,
    ):
        self.db = db
        self.cache = cache if cache is not None else get_resolver_cache()
        self.policy = policy

    def resolve_weights(self, team_id: Optional[str] = None) -> CreditWeights:
        """Return the team's stored weights verbatim, or the policy default.

        Never raises for a missing team or config.
        """
        if not team_id:
            return self.policy.default_weights

        key = team_weights_key(team_id)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Weights cache hit for team {team_id}")
            return cached

        config = self.db.query(TeamCreditConfig).filter(
            TeamCreditConfig.team_id == team_id
        ).first()
        weights = (
            CreditWeights.from_dict(config.to_weights_dict())
            if config
            else self.policy.default_weights
        )
        self.cache.set(key, weights)
        return weights

    def get_config(self, team_id: str) -> Optional[TeamCreditConfig]:
        return self.db.query(TeamCreditConfig).filter(
            TeamCreditConfig.team_id == team_id
        ).first()

    def save_weights(self, team_id: str, ec, oc, cc, actor: Actor) -> TeamCreditConfig:
        """Replace the team's weight config.

        Raises:
            ValidationError: Weights outside [0, 100] or not summing to 100
            NotFoundError: Unknown team
            PermissionDeniedError: Actor is neither an owner nor the team lead
        """
        try:
            weights = CreditWeights.create(ec, oc, cc)

            lead_id = AccessService(self.db).team_lead_id(team_id)
            if not actor.is_owner and lead_id != actor.user_id:
                raise PermissionDeniedError("You can only modify your own team's credit weights")

            config = self.get_config(team_id)
            if config is None:
                config = TeamCreditConfig(team_id=team_id)
                self.db.add(config)

            config.ec_weight = weights.ec
            config.oc_weight = weights.oc
            config.cc_weight = weights.cc
            config.updated_by = actor.user_id
            config.updated_at = datetime.utcnow()

            self.db.commit()
        except CreditEngineError as e:
            self.db.rollback()
            logger.warning(f"Rejected weight save for team {team_id} by {actor.user_id}: {e.message}")
            raise
        except Exception:
            self.db.rollback()
            raise

        self.cache.clear(team_weights_key(team_id))
        self.db.refresh(config)
        logger.info(f"Team {team_id} credit weights set to {weights.as_dict()} by {actor.user_id}")
        return config
