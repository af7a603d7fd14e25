from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from credit_engine.api.deps import get_current_actor
from credit_engine.db.database import get_db
from credit_engine.schemas.schemas import LeaderboardEntryResponse
from credit_engine.services.access_service import AccessService, Actor
from credit_engine.services.aggregation_service import DEFAULT_WINDOW, build_leaderboard
from credit_engine.services.audit_service import AuditLogService
from credit_engine.services.score_record_service import ScoreRecordService

router = APIRouter(prefix="/api", tags=["reports"])


@router.get("/leaderboard", response_model=List[LeaderboardEntryResponse])
def get_leaderboard(
    view: str = "overall",
    limit: int = Query(10, ge=1, le=100),
    window: int = Query(DEFAULT_WINDOW, ge=1, le=104),
    db: Session = Depends(get_db),
):
    """
    Ranked users by total score (QS*100 + streak*10 + check marks*5).

    ``view`` re-orders the rows by ``qs``, ``streak`` or ``checkmarks``;
    rank always reflects the overall total.
    """
    records = ScoreRecordService(db)
    by_user = {user_id: records.list_scores(user_id) for user_id in records.list_user_ids()}
    entries = build_leaderboard(by_user, view=view, limit=limit, window_size=window)
    return [
        LeaderboardEntryResponse(
            rank=e.rank,
            user_id=e.user_id,
            current_qs=round(e.current_qs, 4),
            wcs_streak=e.wcs_streak,
            check_marks=e.check_marks,
            total_score=round(e.total_score, 2),
        )
        for e in entries
    ]


@router.get("/audit")
def get_audit_log(
    event_type: Optional[str] = None,
    user_id: Optional[str] = None,
    limit: int = Query(20, ge=1, le=500),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Audit trail, newest first. Owners only."""
    AccessService.require_owner(actor)
    entries = AuditLogService(db).list_entries(event_type=event_type, user_id=user_id, limit=limit)
    return {"total": len(entries), "entries": entries}
