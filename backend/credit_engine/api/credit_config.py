from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from credit_engine.api.deps import get_current_actor
from credit_engine.db.database import get_db
from credit_engine.schemas.schemas import (
    RatingResponse,
    RatingUpdate,
    WeightsResponse,
    WeightsUpdate,
)
from credit_engine.services.access_service import Actor
from credit_engine.services.rating_service import PerformanceRatingService
from credit_engine.services.weight_config_service import WeightConfigService

router = APIRouter(prefix="/api/credit", tags=["credit-config"])


def _weights_response(svc: WeightConfigService, team_id: str) -> WeightsResponse:
    config = svc.get_config(team_id)
    weights = svc.resolve_weights(team_id)
    return WeightsResponse(
        team_id=team_id,
        **weights.as_dict(),
        is_default=config is None,
        updated_by=config.updated_by if config else None,
        updated_at=config.updated_at if config else None,
    )


# =========================
# TEAM WEIGHTS
# =========================
@router.get("/weights/{team_id}", response_model=WeightsResponse)
def get_team_weights(team_id: str, db: Session = Depends(get_db)):
    """Resolved EC/OC/CC split for a team (system default when unset)."""
    return _weights_response(WeightConfigService(db), team_id)


@router.put("/weights/{team_id}", response_model=WeightsResponse)
def save_team_weights(
    team_id: str,
    body: WeightsUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Replace a team's weight split. Owners, or the team's lead."""
    svc = WeightConfigService(db)
    svc.save_weights(team_id, body.ec, body.oc, body.cc, actor)
    return _weights_response(svc, team_id)


# =========================
# PERFORMANCE RATINGS
# =========================
@router.get("/ratings/{user_id}", response_model=RatingResponse)
def get_user_rating(user_id: str, db: Session = Depends(get_db)):
    svc = PerformanceRatingService(db)
    rating = svc.get_rating(user_id)
    return RatingResponse(
        user_id=user_id,
        multiplier=svc.resolve_multiplier(user_id),
        notes=rating.notes if rating else None,
        is_default=rating is None,
        updated_by=rating.updated_by if rating else None,
        updated_at=rating.updated_at if rating else None,
    )


@router.put("/ratings/{user_id}", response_model=RatingResponse)
def save_user_rating(
    user_id: str,
    body: RatingUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Set a user's performance multiplier (0.5x - 2.0x)."""
    rating = PerformanceRatingService(db).save_rating(user_id, body.multiplier, body.notes, actor)
    return RatingResponse(
        user_id=user_id,
        multiplier=rating.multiplier,
        notes=rating.notes,
        is_default=False,
        updated_by=rating.updated_by,
        updated_at=rating.updated_at,
    )
