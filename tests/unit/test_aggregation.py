"""Unit tests for month bucketing"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from wealth_core.domain.models import Expense, MonthKey, MonthlyEvent
from wealth_core.domain.aggregation import bucket_by_month, bucket_series, top_categories, trailing_months
from wealth_core.domain.deposits import deposit_contribution_events
from wealth_core.domain.exceptions import InvalidInputError


def _event(when, amount: str) -> MonthlyEvent:
    return MonthlyEvent(date=when, amount=Decimal(amount))


def _expense(category: str, amount: str, when: date) -> Expense:
    return Expense(id=f"{category}_{amount}", description=category, amount=Decimal(amount), category=category, date=when)


def test_trailing_months_default_window(today):
    months = trailing_months(today)

    assert [m.label for m in months] == ["2024-01", "2024-02", "2024-03", "2024-04", "2024-05", "2024-06"]


def test_trailing_months_wraps_year():
    months = trailing_months(date(2024, 2, 10), 4)
    assert months == [MonthKey(2023, 11), MonthKey(2023, 12), MonthKey(2024, 1), MonthKey(2024, 2)]


def test_bucket_by_month_sums_and_fills_gaps(today):
    events = [
        _event(date(2024, 6, 1), "100"),
        _event(date(2024, 6, 30), "50.50"),
        _event(date(2024, 3, 15), "20"),
    ]
    buckets = bucket_by_month(events, anchor_date=today)

    assert list(buckets.keys()) == trailing_months(today)
    assert buckets[MonthKey(2024, 6)] == Decimal("150.50")
    assert buckets[MonthKey(2024, 3)] == Decimal("20")
    assert buckets[MonthKey(2024, 1)] == 0


def test_bucket_by_month_ignores_events_outside_window(today):
    events = [
        _event(date(2023, 12, 31), "999"),  # just before the window
        _event(date(2024, 7, 1), "999"),  # after the anchor month
        _event(date(2024, 1, 1), "1"),
    ]
    buckets = bucket_by_month(events, anchor_date=today)

    assert sum(buckets.values()) == Decimal("1")


def test_month_boundary_instants():
    """Last millisecond of March stays in March; first instant of April is April"""
    events = [
        _event(datetime(2024, 3, 31, 23, 59, 59, 999000), "10"),
        _event(datetime(2024, 4, 1, 0, 0, 0), "20"),
    ]
    buckets = bucket_by_month(events, window_months=2, anchor_date=date(2024, 4, 30))

    assert buckets == {MonthKey(2024, 3): Decimal("10"), MonthKey(2024, 4): Decimal("20")}


def test_bucket_by_month_custom_extractors(today):
    """Mutual fund purchases: value is units * NAV"""
    purchases = [
        {"purchase_date": date(2024, 5, 2), "units": Decimal("10"), "nav": Decimal("45.5")},
        {"purchase_date": date(2024, 5, 20), "units": Decimal("2"), "nav": Decimal("50")},
    ]
    buckets = bucket_by_month(
        purchases,
        window_months=3,
        anchor_date=today,
        amount_of=lambda p: p["units"] * p["nav"],
        date_of=lambda p: p["purchase_date"],
    )

    assert buckets[MonthKey(2024, 5)] == Decimal("555.0")


def test_bucket_by_month_with_deposit_installments(recurring_deposit, today):
    events = deposit_contribution_events(recurring_deposit, today)
    buckets = bucket_by_month(events, window_months=12, anchor_date=today)

    assert buckets[MonthKey(2023, 12)] == 0
    assert buckets[MonthKey(2024, 1)] == Decimal("5000")
    assert buckets[MonthKey(2024, 6)] == Decimal("5000")
    assert sum(buckets.values()) == Decimal("30000")


def test_bucket_by_month_requires_anchor():
    with pytest.raises(InvalidInputError):
        bucket_by_month([])


@pytest.mark.parametrize("window", [0, -3])
def test_bucket_by_month_rejects_empty_window(window, today):
    with pytest.raises(InvalidInputError):
        bucket_by_month([], window_months=window, anchor_date=today)


def test_bucket_by_month_rejects_undated_event(today):
    with pytest.raises(InvalidInputError):
        bucket_by_month([MonthlyEvent(date=None, amount=Decimal("1"))], anchor_date=today)


@pytest.mark.parametrize("when", ["2024-06-01", 20240601, Decimal("2024.06")])
def test_bucket_by_month_rejects_malformed_date(when, today):
    with pytest.raises(InvalidInputError, match="valid date"):
        bucket_by_month([MonthlyEvent(date=when, amount=Decimal("1"))], anchor_date=today)


def test_bucket_series_shares_window(today):
    series = bucket_series(
        {
            "income": [_event(date(2024, 6, 1), "50000")],
            "expense": [_event(date(2024, 5, 3), "1200"), _event(date(2024, 6, 9), "800")],
        },
        anchor_date=today,
    )

    assert list(series["income"].keys()) == list(series["expense"].keys())
    assert series["income"][MonthKey(2024, 6)] == Decimal("50000")
    assert series["expense"][MonthKey(2024, 5)] == Decimal("1200")


def test_top_categories_current_month(today):
    expenses = [
        _expense("food", "300", date(2024, 6, 2)),
        _expense("rent", "600", date(2024, 6, 1)),
        _expense("food", "100", date(2024, 6, 20)),
        _expense("travel", "5000", date(2024, 5, 28)),  # last month
    ]
    totals = top_categories(expenses, today)

    assert [(t.category, t.amount, t.percentage) for t in totals] == [
        ("rent", Decimal("600"), 60),
        ("food", Decimal("400"), 40),
    ]


def test_top_categories_limit(today):
    expenses = [_expense(f"cat{i}", str(100 + i), date(2024, 6, 1)) for i in range(8)]
    totals = top_categories(expenses, today, limit=5)

    assert len(totals) == 5
    assert totals[0].category == "cat7"
    assert [t.amount for t in totals] == sorted((t.amount for t in totals), reverse=True)


def test_top_categories_empty_month(today):
    assert top_categories([], today) == []


def test_top_categories_rejects_bad_limit(today):
    with pytest.raises(InvalidInputError):
        top_categories([], today, limit=0)


def test_top_categories_rejects_malformed_date(today):
    expense = Expense(id="e1", description="Lunch", amount=Decimal("250"), category="food", date="2024-06-02")
    with pytest.raises(InvalidInputError, match="valid date"):
        top_categories([expense], today)
