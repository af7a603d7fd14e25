from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List, Dict


# =========================
# WEIGHT CONFIG SCHEMAS
# =========================
class WeightsUpdate(BaseModel):
    # Range and sum checks happen in the service so they surface as 400s
    ec: int
    oc: int
    cc: int


class WeightsResponse(BaseModel):
    team_id: Optional[str]
    EC: int
    OC: int
    CC: int
    is_default: bool
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None


# =========================
# PERFORMANCE RATING SCHEMAS
# =========================
class RatingUpdate(BaseModel):
    multiplier: float
    notes: Optional[str] = Field(None, max_length=2000)


class RatingResponse(BaseModel):
    user_id: str
    multiplier: float
    notes: Optional[str] = None
    is_default: bool
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None


# =========================
# WEEKLY SCORE SCHEMAS
# =========================
class KeyResultIn(BaseModel):
    score: float
    weight: float = 1.0


class WeeklyScoreSubmit(BaseModel):
    hours_worked: float
    key_results: List[KeyResultIn] = []
    collaboration: float
    expected_version: Optional[int] = Field(None, ge=0)


class WeeklyScoreResponse(BaseModel):
    user_id: str
    week_id: str
    hours_worked: Optional[float] = None
    ec: float
    oc: float
    cc: float
    wcs: float
    check_mark: bool
    version: int
    entered_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ScoreBreakdownResponse(BaseModel):
    base_score: float
    final_score: float
    multiplier: float
    weights: Dict[str, int]
    check_mark: bool


class WeeklyScoreSubmitResponse(BaseModel):
    record: WeeklyScoreResponse
    breakdown: ScoreBreakdownResponse


# =========================
# AGGREGATE SCHEMAS
# =========================
class ScoreSummaryResponse(BaseModel):
    user_id: str
    window: int
    average_wcs: float
    check_mark_count: int
    weeks_counted: int
    streak: int


class TrendPoint(BaseModel):
    week_id: str
    wcs: float
    check_mark: bool
    rolling_wcs: float


class QuarterScoreResponse(BaseModel):
    user_id: str
    year: int
    quarter: int
    qs: float
    weeks_counted: int
    cumulative_check_marks: int
    assessment: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class QuarterSnapshotRequest(BaseModel):
    assessment: Optional[str] = None


class LeaderboardEntryResponse(BaseModel):
    rank: int
    user_id: str
    current_qs: float
    wcs_streak: int
    check_marks: int
    total_score: float
