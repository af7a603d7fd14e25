"""ISO week label helpers (``YYYY-Www``)."""

import re
from datetime import date
from typing import Optional, Tuple

from credit_engine.errors import ValidationError

WEEK_ID_PATTERN = re.compile(r"(\d{4})-W(\d{2})", re.ASCII)


def _weeks_in_year(year: int) -> int:
    # Dec 28th always falls in the last ISO week of its year
    return date(year, 12, 28).isocalendar()[1]


def parse_week_id(week_id: str) -> Tuple[int, int]:
    """
    Split an ISO week label into (year, week).

    Raises:
        ValidationError: If the label is malformed or the week does not
            exist in that ISO year.

    Example:
        >>> parse_week_id("2025-W07")
        (2025, 7)
    """
    if not isinstance(week_id, str):
        raise ValidationError(f"Week must be a string like YYYY-Www, got {week_id!r}")
    match = WEEK_ID_PATTERN.fullmatch(week_id)
    if not match:
        raise ValidationError(f"Week must look like YYYY-Www, got {week_id!r}")

    year, week = int(match.group(1)), int(match.group(2))
    if year < 1 or week < 1 or week > _weeks_in_year(year):
        raise ValidationError(f"Week {week_id} does not exist in ISO year {year}")
    return year, week


def format_week_id(year: int, week: int) -> str:
    return f"{year:04d}-W{week:02d}"


def current_week_id(today: Optional[date] = None) -> str:
    iso = (today or date.today()).isocalendar()
    return format_week_id(iso[0], iso[1])


def quarter_of_week(week_id: str) -> Tuple[int, int]:
    """Return (year, quarter) for the week, using the week's Thursday."""
    year, week = parse_week_id(week_id)
    thursday = date.fromisocalendar(year, week, 4)
    return thursday.year, (thursday.month - 1) // 3 + 1


def week_sort_key(week_id: str) -> Tuple[int, int]:
    return parse_week_id(week_id)
