"""Quarter Score Service - persists quarter score (QS) snapshots."""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from credit_engine.models.models import QuarterScore
from credit_engine.services.access_service import AccessService, Actor
from credit_engine.services.aggregation_service import quarter_summary
from credit_engine.services.score_record_service import ScoreRecordService

logger = logging.getLogger(__name__)


class QuarterScoreService:
    def __init__(self, db: Session):
        self.db = db

    def snapshot(
        self,
        user_id: str,
        year: int,
        quarter: int,
        actor: Actor,
        assessment: Optional[str] = None,
    ) -> QuarterScore:
        """Compute and store the user's QS for a quarter, replacing any prior snapshot."""
        try:
            access = AccessService(self.db)
            access.require_manager(actor)
            access.get_user(user_id)

            records = ScoreRecordService(self.db).list_scores(user_id)
            summary = quarter_summary(records, year, quarter)

            row = self.db.query(QuarterScore).filter(
                QuarterScore.user_id == user_id,
                QuarterScore.year == year,
                QuarterScore.quarter == quarter,
            ).first()
            if row is None:
                row = QuarterScore(user_id=user_id, year=year, quarter=quarter)
                self.db.add(row)

            row.qs = round(summary.qs, 4)
            row.weeks_counted = summary.weeks_counted
            row.cumulative_check_marks = summary.cumulative_check_marks
            row.assessment = assessment
            row.created_at = datetime.utcnow()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(row)
        logger.info(f"Quarter score {year}-Q{quarter} for user {user_id}: QS={row.qs}")
        return row

    def list_quarters(self, user_id: str) -> List[QuarterScore]:
        return (
            self.db.query(QuarterScore)
            .filter(QuarterScore.user_id == user_id)
            .order_by(QuarterScore.year.desc(), QuarterScore.quarter.desc())
            .all()
        )
