"""Date parsing utilities for export ranges."""

from datetime import date, timedelta
from typing import Callable, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = ["this-month", "this-year", "this-week", "last-month", "last-year", "last-week"]


def _month_start(day: date) -> date:
    return day.replace(day=1)


def _year_start(day: date) -> date:
    return day.replace(month=1, day=1)


def _week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


# "<this|last|next> <unit>" -> first day of that period
_PERIOD_STARTS: dict[str, Callable[[date], date]] = {
    "this month": _month_start,
    "this year": _year_start,
    "this week": _week_start,
    "last month": lambda d: _month_start(d - relativedelta(months=1)),
    "last year": lambda d: _year_start(d) - relativedelta(years=1),
    "last week": lambda d: _week_start(d) - timedelta(days=7),
    "next month": lambda d: _month_start(d + relativedelta(months=1)),
    "next year": lambda d: _year_start(d) + relativedelta(years=1),
    "next week": lambda d: _week_start(d) + timedelta(days=7),
}


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Accepts ISO and other absolute dates understood by dateutil, plus
    "today", "yesterday", "tomorrow", "this/last/next week|month|year"
    (the first day of that period) and "last <weekday>".

    Args:
        date_str: Date string
        today: Reference date for relative expressions (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    offsets = {"today": 0, "yesterday": -1, "tomorrow": 1}
    if text in offsets:
        return today + timedelta(days=offsets[text])

    if text in _PERIOD_STARTS:
        return _PERIOD_STARTS[text](today)

    if text.startswith("last ") and text[5:] in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(text[5:])) % 7 or 7
        return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get inclusive start and end dates for a named period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    week, month or year.

    Raises:
        ValueError: If period string is not recognized
    """
    key = period.strip().lower()
    today = today or date.today()
    if key not in PERIODS:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")

    which, unit = key.split("-")
    start = _PERIOD_STARTS[f"{which} {unit}"](today)
    if which == "this":
        return start, today

    # End of a previous period is the day before the current one starts
    return start, _PERIOD_STARTS[f"this {unit}"](today) - timedelta(days=1)


def get_month_range(today: Optional[date] = None) -> tuple[date, date]:
    """Get the first and last day of the month containing ``today``."""
    start = _month_start(today or date.today())
    return start, start + relativedelta(months=1, days=-1)
