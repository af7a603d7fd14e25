"""
Aggregation Service - quarter and trend statistics over weekly records.

All functions are pure: they take records (anything with ``week_id``,
``wcs`` and ``check_mark`` attributes, e.g. ``WeeklyScore`` rows or
``WeekRecord`` tuples) and never touch the database. Records may arrive in
any order; they are sorted by ISO week here.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, NamedTuple, Sequence

import pandas as pd

from credit_engine.config import settings
from credit_engine.errors import ValidationError
from credit_engine.scorecard.credit_config import DEFAULT_POLICY
from credit_engine.utils.week import quarter_of_week, week_sort_key

DEFAULT_WINDOW = settings.quarter_window_weeks

# Leaderboard total = QS*100 + streak*10 + check marks*5
QS_POINTS = 100
STREAK_POINTS = 10
CHECK_MARK_POINTS = 5

LEADERBOARD_VIEWS = ("overall", "qs", "streak", "checkmarks")


class WeekRecord(NamedTuple):
    """Minimal weekly record shape accepted by the aggregators."""
    week_id: str
    wcs: float
    check_mark: bool = False


@dataclass(frozen=True)
class AggregateSummary:
    average_wcs: float
    check_mark_count: int
    weeks_counted: int


@dataclass(frozen=True)
class QuarterSummary:
    year: int
    quarter: int
    qs: float
    weeks_counted: int
    cumulative_check_marks: int


@dataclass
class LeaderboardEntry:
    user_id: str
    current_qs: float
    wcs_streak: int
    check_marks: int
    total_score: float
    rank: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


def most_recent_first(records: Iterable) -> List:
    return sorted(records, key=lambda r: week_sort_key(r.week_id), reverse=True)


def _mean_wcs(records: Sequence) -> float:
    if not records:
        return 0.0
    return sum(float(r.wcs) for r in records) / len(records)


def aggregate(records: Iterable, window_size: int = DEFAULT_WINDOW) -> AggregateSummary:
    """Windowed average WCS and lifetime check-mark count.

    ``average_wcs`` covers the ``window_size`` most recent weeks (or all of
    them if fewer exist) and is 0 for an empty history. ``check_mark_count``
    covers the full history.
    """
    if window_size < 1:
        raise ValidationError(f"Window size must be at least 1, got {window_size}")

    ordered = most_recent_first(records)
    window = ordered[:window_size]
    return AggregateSummary(
        average_wcs=_mean_wcs(window),
        check_mark_count=sum(1 for r in ordered if r.check_mark),
        weeks_counted=len(window),
    )


def wcs_streak(records: Iterable, threshold: float = DEFAULT_POLICY.streak_threshold) -> int:
    """Consecutive most-recent weeks with WCS at or above ``threshold``."""
    streak = 0
    for record in most_recent_first(records):
        if record.wcs < threshold:
            break
        streak += 1
    return streak


def quarter_summary(records: Iterable, year: int, quarter: int) -> QuarterSummary:
    """QS for one calendar quarter plus check marks earned up to its end."""
    if quarter not in (1, 2, 3, 4):
        raise ValidationError(f"Quarter must be 1-4, got {quarter}")

    in_quarter = []
    cumulative = 0
    for record in records:
        week_quarter = quarter_of_week(record.week_id)
        if week_quarter == (year, quarter):
            in_quarter.append(record)
        if week_quarter <= (year, quarter) and record.check_mark:
            cumulative += 1

    return QuarterSummary(
        year=year,
        quarter=quarter,
        qs=_mean_wcs(in_quarter),
        weeks_counted=len(in_quarter),
        cumulative_check_marks=cumulative,
    )


def build_leaderboard(
    records_by_user: Dict[str, Sequence],
    view: str = "overall",
    limit: int = 10,
    window_size: int = DEFAULT_WINDOW,
) -> List[LeaderboardEntry]:
    """Rank users by combined total score and return the requested view.

    Ranks always come from the overall total; ``view`` only changes the
    order of the returned rows.
    """
    if view not in LEADERBOARD_VIEWS:
        raise ValidationError(f"Unknown leaderboard view {view!r}; use one of {', '.join(LEADERBOARD_VIEWS)}")

    entries = []
    for user_id, records in records_by_user.items():
        if not records:
            continue
        summary = aggregate(records, window_size)
        streak = wcs_streak(records)
        entries.append(LeaderboardEntry(
            user_id=user_id,
            current_qs=summary.average_wcs,
            wcs_streak=streak,
            check_marks=summary.check_mark_count,
            total_score=(
                summary.average_wcs * QS_POINTS
                + streak * STREAK_POINTS
                + summary.check_mark_count * CHECK_MARK_POINTS
            ),
        ))

    entries.sort(key=lambda e: (-e.total_score, e.user_id))
    for index, entry in enumerate(entries):
        entry.rank = index + 1

    sort_keys = {
        "qs": lambda e: (-e.current_qs, e.rank),
        "streak": lambda e: (-e.wcs_streak, e.rank),
        "checkmarks": lambda e: (-e.check_marks, e.rank),
    }
    if view in sort_keys:
        entries.sort(key=sort_keys[view])
    return entries[:limit]


def trend_frame(records: Iterable, window: int = DEFAULT_WINDOW) -> pd.DataFrame:
    """WCS trend for the ``window`` most recent weeks, oldest first.

    Columns: ``wcs``, ``check_mark``, ``rolling_wcs`` (trailing mean over
    up to ``window`` weeks). Indexed by ``week_id``.
    """
    if window < 1:
        raise ValidationError(f"Window size must be at least 1, got {window}")

    recent = list(reversed(most_recent_first(records)[:window]))
    index = pd.Index([r.week_id for r in recent], name="week_id", dtype="object")
    frame = pd.DataFrame(
        {
            "wcs": pd.Series([float(r.wcs) for r in recent], index=index, dtype="float64"),
            "check_mark": pd.Series([bool(r.check_mark) for r in recent], index=index, dtype="bool"),
        },
        index=index,
    )
    frame["rolling_wcs"] = frame["wcs"].rolling(window=window, min_periods=1).mean()
    return frame
