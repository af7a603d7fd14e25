from credit_engine.utils.week import (
    current_week_id,
    format_week_id,
    parse_week_id,
    quarter_of_week,
    week_sort_key,
)

__all__ = [
    "current_week_id",
    "format_week_id",
    "parse_week_id",
    "quarter_of_week",
    "week_sort_key",
]
