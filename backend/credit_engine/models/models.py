from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text, JSON, Index, Boolean, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
from credit_engine.db.database import Base


class Role(str, enum.Enum):
    MEMBER = "member"
    ADMIN = "admin"
    OWNER = "owner"


# ============= DIRECTORY (identity / team collaborators) =============

class Team(Base):
    __tablename__ = "teams"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String, nullable=False)
    lead_id = Column(String(64), nullable=True)  # user id of the team lead
    created_at = Column(DateTime, default=datetime.utcnow)

    members = relationship("User", back_populates="team", foreign_keys="[User.team_id]")


class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True)
    # Stored as plain string, same as the rest of the schema
    role = Column(String(20), nullable=False, default=Role.MEMBER.value)
    team_id = Column(String(64), ForeignKey("teams.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    team = relationship("Team", back_populates="members", foreign_keys=[team_id])


# ============= CREDIT CONFIGURATION =============

class TeamCreditConfig(Base):
    """Per-team EC/OC/CC weight split. Absence means system default."""
    __tablename__ = "team_credit_configs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    team_id = Column(String(64), ForeignKey("teams.id"), unique=True, nullable=False, index=True)
    ec_weight = Column(Integer, nullable=False)
    oc_weight = Column(Integer, nullable=False)
    cc_weight = Column(Integer, nullable=False)
    updated_by = Column(String(64), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_weights_dict(self):
        return {"EC": self.ec_weight, "OC": self.oc_weight, "CC": self.cc_weight}


class PerformanceRating(Base):
    """Manually assigned performance multiplier. Absence means 1.0."""
    __tablename__ = "performance_ratings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("users.id"), unique=True, nullable=False, index=True)
    multiplier = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)
    updated_by = Column(String(64), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


# ============= WEEKLY SCORES =============

class WeeklyScore(Base):
    """One WCS record per (user, ISO week)."""
    __tablename__ = "weekly_scores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    week_id = Column(String(8), nullable=False)  # YYYY-Www
    year = Column(Integer, nullable=False)
    week_number = Column(Integer, nullable=False)
    hours_worked = Column(Float, nullable=True)
    ec = Column(Float, nullable=False)
    oc = Column(Float, nullable=False)
    cc = Column(Float, nullable=False)
    wcs = Column(Float, nullable=False)
    check_mark = Column(Boolean, nullable=False, default=False)
    version = Column(Integer, nullable=False, default=1)  # bumped on every replace
    entered_by = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "week_id", name="uq_weekly_scores_user_week"),
        CheckConstraint("length(week_id) = 8", name="ck_weekly_scores_week_id_len"),
        Index('idx_weekly_scores_user_year_week', 'user_id', 'year', 'week_number'),
    )

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "week_id": self.week_id,
            "hours_worked": self.hours_worked,
            "EC": self.ec,
            "OC": self.oc,
            "CC": self.cc,
            "WCS": self.wcs,
            "check_mark": bool(self.check_mark),
            "version": self.version,
            "entered_by": self.entered_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class QuarterScore(Base):
    """Snapshot of a user's quarter score (QS) and cumulative check marks."""
    __tablename__ = "quarter_scores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    quarter = Column(Integer, nullable=False)  # 1-4
    qs = Column(Float, nullable=False)
    weeks_counted = Column(Integer, nullable=False, default=0)
    cumulative_check_marks = Column(Integer, nullable=False, default=0)
    assessment = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "year", "quarter", name="uq_quarter_scores_user_quarter"),
    )


# ============= AUDIT =============

class AuditLog(Base):
    """Audit trail for destructive operations"""
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_type = Column(String, nullable=False, index=True)
    actor_id = Column(String(64), nullable=False)
    user_id = Column(String(64), index=True)  # subject user
    week_id = Column(String(8), nullable=True)
    timestamp = Column(DateTime, default=datetime.utcnow, index=True)
    request_payload = Column(JSON)
