# backend/credit_engine/api/weekly_scores.py

from typing import List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from credit_engine.api.deps import get_current_actor
from credit_engine.db.database import get_db
from credit_engine.schemas.schemas import (
    QuarterScoreResponse,
    QuarterSnapshotRequest,
    ScoreSummaryResponse,
    TrendPoint,
    WeeklyScoreResponse,
    WeeklyScoreSubmit,
    WeeklyScoreSubmitResponse,
)
from credit_engine.services.access_service import Actor
from credit_engine.services.aggregation_service import DEFAULT_WINDOW, aggregate, trend_frame, wcs_streak
from credit_engine.services.quarter_score_service import QuarterScoreService
from credit_engine.services.score_record_service import ScoreRecordService
from credit_engine.services.weekly_scoring_service import WeeklyScoringService

router = APIRouter(prefix="/api/scores", tags=["weekly-scores"])


@router.post("/{user_id}/weeks/{week_id}", response_model=WeeklyScoreSubmitResponse)
def submit_weekly_score(
    user_id: str,
    week_id: str,
    body: WeeklyScoreSubmit,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """
    Score a user's week and store it.

    Re-submitting the same week replaces the earlier entry. Pass
    ``expected_version`` to reject the write if someone else saved first.
    """
    result = WeeklyScoringService(db).submit_weekly_score(
        actor=actor,
        user_id=user_id,
        week_id=week_id,
        hours_worked=body.hours_worked,
        key_results=[kr.model_dump() for kr in body.key_results],
        collaboration=body.collaboration,
        expected_version=body.expected_version,
    )
    return WeeklyScoreSubmitResponse(
        record=WeeklyScoreResponse.model_validate(result.record),
        breakdown=result.breakdown.to_dict(),
    )


@router.get("/{user_id}", response_model=List[WeeklyScoreResponse])
def list_weekly_scores(user_id: str, db: Session = Depends(get_db)):
    """All weekly records for a user, newest week first (empty when none)."""
    return ScoreRecordService(db).list_scores(user_id)


@router.delete("/{user_id}/weeks/{week_id}", status_code=204)
def delete_weekly_score(
    user_id: str,
    week_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Remove a weekly record. Owners only; the deletion is audited."""
    ScoreRecordService(db).delete_score(user_id, week_id, actor)
    return Response(status_code=204)


@router.get("/{user_id}/summary", response_model=ScoreSummaryResponse)
def get_score_summary(
    user_id: str,
    window: int = Query(DEFAULT_WINDOW, ge=1, le=104),
    db: Session = Depends(get_db),
):
    records = ScoreRecordService(db).list_scores(user_id)
    summary = aggregate(records, window)
    return ScoreSummaryResponse(
        user_id=user_id,
        window=window,
        average_wcs=round(summary.average_wcs, 4),
        check_mark_count=summary.check_mark_count,
        weeks_counted=summary.weeks_counted,
        streak=wcs_streak(records),
    )


@router.get("/{user_id}/trend", response_model=List[TrendPoint])
def get_score_trend(
    user_id: str,
    window: int = Query(DEFAULT_WINDOW, ge=1, le=104),
    db: Session = Depends(get_db),
):
    """Recent WCS values (oldest first) with a trailing rolling mean."""
    frame = trend_frame(ScoreRecordService(db).list_scores(user_id), window)
    return [
        TrendPoint(
            week_id=week_id,
            wcs=float(row["wcs"]),
            check_mark=bool(row["check_mark"]),
            rolling_wcs=round(float(row["rolling_wcs"]), 4),
        )
        for week_id, row in frame.iterrows()
    ]


# =========================
# QUARTER SNAPSHOTS
# =========================
@router.post("/{user_id}/quarters/{year}/{quarter}", response_model=QuarterScoreResponse)
def snapshot_quarter(
    user_id: str,
    year: int,
    quarter: int,
    body: QuarterSnapshotRequest = QuarterSnapshotRequest(),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return QuarterScoreService(db).snapshot(user_id, year, quarter, actor, body.assessment)


@router.get("/{user_id}/quarters", response_model=List[QuarterScoreResponse])
def list_quarter_scores(user_id: str, db: Session = Depends(get_db)):
    return QuarterScoreService(db).list_quarters(user_id)
