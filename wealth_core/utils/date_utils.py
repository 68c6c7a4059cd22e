"""Calendar-month arithmetic"""

from datetime import date, datetime
from typing import List


def as_date(value: date) -> date:
    """Calendar date of value; datetimes lose their time of day"""
    return value.date() if isinstance(value, datetime) else value


def month_start(day: date) -> date:
    """First day of the month containing day (datetimes are truncated to a date)"""
    return date(day.year, day.month, 1)


def add_months(day: date, months: int) -> date:
    """Shift the first-of-month of day by months (negative goes back)"""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def months_between(start: date, end: date) -> int:
    """Whole calendar-month difference, ignoring day of month"""
    return (end.year - start.year) * 12 + (end.month - start.month)


def month_range(start: date, end: date) -> List[date]:
    """First-of-month dates from start's month to end's month (inclusive)"""
    return [add_months(start, i) for i in range(months_between(start, end) + 1)]
