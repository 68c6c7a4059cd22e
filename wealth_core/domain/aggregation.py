"""Month bucketing for dashboard trend charts"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional
from wealth_core.domain.models import CategoryTotal, Expense, MonthKey
from wealth_core.domain.exceptions import InvalidInputError
from wealth_core.utils.date_utils import add_months
from wealth_core.utils.money import to_decimal

DEFAULT_WINDOW_MONTHS = 6


def _event_amount(event: Any) -> Decimal:
    return event.amount


def _event_date(event: Any) -> date:
    return event.date


def trailing_months(anchor_date: date, window_months: int = DEFAULT_WINDOW_MONTHS) -> List[MonthKey]:
    """Month keys for the window ending at anchor_date's month, oldest first"""
    if window_months < 1:
        raise InvalidInputError(f"Window must cover at least one month, got {window_months}")

    months = []
    for offset in range(window_months - 1, -1, -1):
        first = add_months(anchor_date, -offset)
        months.append(MonthKey(first.year, first.month))
    return months


def bucket_by_month(
    events: Iterable[Any],
    window_months: int = DEFAULT_WINDOW_MONTHS,
    anchor_date: Optional[date] = None,
    amount_of: Callable[[Any], Any] = _event_amount,
    date_of: Callable[[Any], date] = _event_date,
) -> Dict[MonthKey, Decimal]:
    """
    Sum event amounts per calendar month over a trailing window.

    Requirements:
    - Exactly window_months keys, oldest first, ending at anchor_date's month
    - Months with no events are 0
    - Events outside the window are ignored
    - Bucketing uses the event's own year/month fields, so the last instant
      of a month never spills into the next

    Works for any event stream (expenses, incomes, savings, fund purchases,
    deposit installments); pass amount_of/date_of to adapt other shapes.

    Example:
        anchor 2024-06-15, window 3 → {2024-04: .., 2024-05: .., 2024-06: ..}
    """
    if anchor_date is None:
        raise InvalidInputError("Anchor date is required")

    buckets: Dict[MonthKey, Decimal] = {key: Decimal(0) for key in trailing_months(anchor_date, window_months)}

    for event in events:
        when = date_of(event)
        if not isinstance(when, date):
            raise InvalidInputError(f"Event has no valid date: {event!r}")
        key = MonthKey(when.year, when.month)
        if key in buckets:
            buckets[key] += to_decimal(amount_of(event))

    return buckets


def bucket_series(
    streams: Mapping[str, Iterable[Any]],
    window_months: int = DEFAULT_WINDOW_MONTHS,
    anchor_date: Optional[date] = None,
    amount_of: Callable[[Any], Any] = _event_amount,
    date_of: Callable[[Any], date] = _event_date,
) -> Dict[str, Dict[MonthKey, Decimal]]:
    """Bucket several named streams over the same window (e.g. income vs expense)"""
    return {
        name: bucket_by_month(events, window_months, anchor_date, amount_of, date_of)
        for name, events in streams.items()
    }


def top_categories(expenses: Iterable[Expense], anchor_date: date, limit: int = 5) -> List[CategoryTotal]:
    """
    Largest expense categories in anchor_date's calendar month.

    Percentages are whole numbers of the month's total (0 when nothing was spent).
    """
    if limit < 1:
        raise InvalidInputError(f"Limit must be positive, got {limit}")

    totals: Dict[str, Decimal] = {}
    for expense in expenses:
        if not isinstance(expense.date, date):
            raise InvalidInputError(f"Expense {expense.id!r} has no valid date")
        if expense.date.year == anchor_date.year and expense.date.month == anchor_date.month:
            totals[expense.category] = totals.get(expense.category, Decimal(0)) + to_decimal(expense.amount)

    month_total = sum(totals.values(), Decimal(0))

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [
        CategoryTotal(
            category=category,
            amount=amount,
            percentage=int((amount / month_total * 100).to_integral_value(rounding=ROUND_HALF_UP)) if month_total > 0 else 0,
        )
        for category, amount in ranked
    ]
