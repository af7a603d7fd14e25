from datetime import date

import pytest

from credit_engine.errors import ValidationError
from credit_engine.utils.week import (
    current_week_id,
    format_week_id,
    parse_week_id,
    quarter_of_week,
    week_sort_key,
)


class TestWeekIds:
    def test_parse(self):
        assert parse_week_id("2025-W07") == (2025, 7)

    @pytest.mark.parametrize("bad", ["2025-7", "2025-W7", "25-W07", "2025W07", "", None, "2025-W00"])
    def test_malformed(self, bad):
        with pytest.raises(ValidationError):
            parse_week_id(bad)

    @pytest.mark.parametrize("bad", ["2025-W07\n", " 2025-W07", "2025-W07 ", "２０２５-W07", "2025-W٠7"])
    def test_surrounding_whitespace_and_non_ascii_digits_rejected(self, bad):
        with pytest.raises(ValidationError):
            parse_week_id(bad)

    @pytest.mark.parametrize("bad", [202507, 2025.07, b"2025-W07", ("2025", 7)])
    def test_non_string_rejected(self, bad):
        with pytest.raises(ValidationError, match="string"):
            parse_week_id(bad)

    def test_week_53_only_in_long_years(self):
        assert parse_week_id("2020-W53") == (2020, 53)
        with pytest.raises(ValidationError):
            parse_week_id("2025-W53")

    def test_format_pads(self):
        assert format_week_id(2025, 3) == "2025-W03"

    def test_current_week_uses_iso_year(self):
        # Dec 30 2024 belongs to ISO week 1 of 2025
        assert current_week_id(date(2024, 12, 30)) == "2025-W01"

    def test_quarter_of_week(self):
        assert quarter_of_week("2025-W01") == (2025, 1)
        assert quarter_of_week("2025-W14") == (2025, 2)
        assert quarter_of_week("2020-W53") == (2020, 4)

    def test_sort_key_orders_across_years(self):
        ids = ["2025-W02", "2024-W52", "2025-W10"]
        assert sorted(ids, key=week_sort_key) == ["2024-W52", "2025-W02", "2025-W10"]
