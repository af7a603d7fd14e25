"""
Score Record Service - weekly WCS records.

Provides:
- Upsert one record per (user, ISO week); a resubmission replaces it
- List a user's records, most recent week first
- Owner-only delete, committed together with its audit entry
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from credit_engine.errors import (
    CreditEngineError,
    NotFoundError,
    StaleScoreError,
    ValidationError,
)
from credit_engine.models.models import AuditLog, WeeklyScore
from credit_engine.scorecard.values import CreditComponents, as_number
from credit_engine.services.access_service import AccessService, Actor
from credit_engine.utils.week import parse_week_id

logger = logging.getLogger(__name__)

DELETE_EVENT = "DELETE_WEEKLY_SCORE"


class _KeyedLocks:
    """One lock per (user_id, week_id) so writers to the same week serialize.

    Entries live only while some thread holds or waits on them.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Tuple[str, str], List] = {}  # {key: [lock, users]}

    @contextmanager
    def hold(self, user_id: str, week_id: str) -> Iterator[None]:
        key = (user_id, week_id)
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


_week_locks = _KeyedLocks()


class ScoreRecordService:
    """Persistence for weekly score records.

    Example:
        >>> svc = ScoreRecordService(db)
        >>> svc.upsert_score("u-1", "2025-W07", 1.0, 1.0, 0.8, 0.98, True)
        >>> [r.week_id for r in svc.list_scores("u-1")]
        ['2025-W07']
    """

    def __init__(self, db: Session):
        self.db = db

    def get_score(self, user_id: str, week_id: str) -> Optional[WeeklyScore]:
        return self.db.query(WeeklyScore).filter(
            WeeklyScore.user_id == user_id,
            WeeklyScore.week_id == week_id,
        ).first()

    def list_scores(self, user_id: str) -> List[WeeklyScore]:
        """All of a user's records, most recent ISO week first."""
        return (
            self.db.query(WeeklyScore)
            .filter(WeeklyScore.user_id == user_id)
            .order_by(WeeklyScore.year.desc(), WeeklyScore.week_number.desc())
            .all()
        )

    def list_user_ids(self) -> List[str]:
        rows = self.db.query(WeeklyScore.user_id).distinct().all()
        return sorted(row[0] for row in rows)

    def upsert_score(
        self,
        user_id: str,
        week_id: str,
        ec: float,
        oc: float,
        cc: float,
        wcs: float,
        check_mark: bool,
        hours_worked: Optional[float] = None,
        entered_by: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> WeeklyScore:
        """Insert or replace the record for (user_id, week_id).

        Args:
            expected_version: If given, the write only happens when the stored
                record has this version (0 means "no record yet").

        Raises:
            ValidationError: Bad week label or a credit outside [0, 1]
            StaleScoreError: expected_version does not match
        """
        year, week_number = parse_week_id(week_id)
        components = CreditComponents.create(ec, oc, cc)
        wcs = as_number("WCS", wcs)
        if not 0 <= wcs <= 1:
            raise ValidationError(f"WCS must be between 0 and 1, got {wcs!r}")

        args = (
            user_id, week_id, year, week_number, components, wcs,
            check_mark, hours_worked, entered_by, expected_version,
        )
        with _week_locks.hold(user_id, week_id):
            try:
                try:
                    record = self._write(*args)
                except IntegrityError:
                    # Another process inserted the same week first; replace it.
                    self.db.rollback()
                    logger.info(f"Concurrent insert for {user_id} {week_id}, retrying as update")
                    record = self._write(*args)
            except Exception:
                self.db.rollback()
                raise

        logger.info(f"Upserted score for user {user_id} week {week_id}: WCS={wcs} v{record.version}")
        return record

    def _write(
        self,
        user_id: str,
        week_id: str,
        year: int,
        week_number: int,
        components: CreditComponents,
        wcs: float,
        check_mark: bool,
        hours_worked: Optional[float],
        entered_by: Optional[str],
        expected_version: Optional[int],
    ) -> WeeklyScore:
        record = self.get_score(user_id, week_id)
        current_version = record.version if record else 0
        if expected_version is not None and expected_version != current_version:
            raise StaleScoreError(
                f"Score for {week_id} was changed by someone else "
                f"(expected version {expected_version}, found {current_version})"
            )

        now = datetime.utcnow()
        if record is None:
            record = WeeklyScore(
                user_id=user_id,
                week_id=week_id,
                year=year,
                week_number=week_number,
                version=1,
                created_at=now,
            )
            self.db.add(record)
        else:
            record.version = current_version + 1

        record.ec = components.ec
        record.oc = components.oc
        record.cc = components.cc
        record.wcs = wcs
        record.check_mark = bool(check_mark)
        record.hours_worked = hours_worked
        record.entered_by = entered_by
        record.updated_at = now

        self.db.commit()
        self.db.refresh(record)
        return record

    def delete_score(self, user_id: str, week_id: str, actor: Actor) -> Dict[str, Any]:
        """Delete a weekly record and write its audit entry in one commit.

        Returns:
            The deleted record's content.

        Raises:
            PermissionDeniedError: Actor is not an owner
            NotFoundError: No record for that week
        """
        try:
            AccessService.require_owner(actor)
            with _week_locks.hold(user_id, week_id):
                record = self.get_score(user_id, week_id)
                if record is None:
                    raise NotFoundError(f"No score recorded for user {user_id} in week {week_id}")

                deleted = record.to_dict()
                self.db.add(AuditLog(
                    event_type=DELETE_EVENT,
                    actor_id=actor.user_id,
                    user_id=user_id,
                    week_id=week_id,
                    timestamp=datetime.utcnow(),
                    request_payload={"deleted_score": deleted},
                ))
                self.db.delete(record)
                self.db.commit()
        except CreditEngineError as e:
            self.db.rollback()
            logger.warning(f"Rejected delete of {user_id} {week_id} by {actor.user_id}: {e.message}")
            raise
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Deleted score for user {user_id} week {week_id} by {actor.user_id}")
        return deleted
