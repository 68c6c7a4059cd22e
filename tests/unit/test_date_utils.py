"""Unit tests for calendar-month helpers"""

from datetime import date, datetime
from wealth_core.utils.date_utils import add_months, month_range, month_start, months_between


def test_month_start_truncates_datetime():
    assert month_start(datetime(2024, 2, 29, 18, 30)) == date(2024, 2, 1)


def test_add_months_across_year_end():
    assert add_months(date(2024, 11, 30), 2) == date(2025, 1, 1)
    assert add_months(date(2024, 1, 15), -1) == date(2023, 12, 1)
    assert add_months(date(2024, 5, 1), 0) == date(2024, 5, 1)


def test_months_between_ignores_day():
    assert months_between(date(2024, 1, 31), date(2024, 2, 1)) == 1
    assert months_between(date(2024, 1, 10), date(2025, 1, 10)) == 12
    assert months_between(date(2024, 6, 1), date(2024, 1, 1)) == -5


def test_month_range_inclusive():
    assert month_range(date(2023, 11, 20), date(2024, 1, 5)) == [
        date(2023, 11, 1),
        date(2023, 12, 1),
        date(2024, 1, 1),
    ]
