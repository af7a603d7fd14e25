from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from credit_engine.models.models import AuditLog


class AuditLogService:
    """Read access to the audit trail."""

    def __init__(self, db: Session):
        self.db = db

    def list_entries(
        self,
        event_type: Optional[str] = None,
        user_id: Optional[str] = None,
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        query = self.db.query(AuditLog)
        if event_type:
            query = query.filter(AuditLog.event_type == event_type)
        if user_id:
            query = query.filter(AuditLog.user_id == user_id)

        logs = query.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit).all()
        return [
            {
                "id": log.id,
                "event_type": log.event_type,
                "actor_id": log.actor_id,
                "user_id": log.user_id,
                "week_id": log.week_id,
                "timestamp": log.timestamp.isoformat() if log.timestamp else None,
                "details": log.request_payload,
            }
            for log in logs
        ]
