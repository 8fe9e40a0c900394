from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

from ..core.exceptions import ValidationError

# One year of headroom so UTC conversion of a local month never leaves datetime range.
MIN_YEAR = 2
MAX_YEAR = 9998


@dataclass(frozen=True)
class MonthWindow:
    """One calendar month in the business timezone.

    `start_utc`/`end_utc` are naive UTC datetimes (how timestamps are stored),
    `end_utc` is inclusive.
    """

    month: int
    year: int
    days_in_month: int
    start_utc: datetime
    end_utc: datetime


def require_month(month: int) -> int:
    """Months are 0-based (0 = January, 11 = December)."""
    month = int(month)
    if month < 0 or month > 11:
        raise ValidationError(f"month must be between 0 and 11, got {month}")
    return month


def require_year(year: int) -> int:
    year = int(year)
    if year < MIN_YEAR or year > MAX_YEAR:
        raise ValidationError(f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")
    return year


def month_window(month: int, year: int, tz_name: str) -> MonthWindow:
    month = require_month(month)
    year = require_year(year)
    tz = ZoneInfo(tz_name)

    days = calendar.monthrange(year, month + 1)[1]
    start_local = datetime.combine(date(year, month + 1, 1), time.min, tzinfo=tz)
    end_local = datetime.combine(date(year, month + 1, days), time.max, tzinfo=tz)

    return MonthWindow(
        month=month,
        year=year,
        days_in_month=days,
        start_utc=start_local.astimezone(timezone.utc).replace(tzinfo=None),
        end_utc=end_local.astimezone(timezone.utc).replace(tzinfo=None),
    )


def local_day_of_month(value: datetime, tz_name: str) -> int:
    """Calendar day of a stored timestamp, seen from the business timezone.

    Naive values are treated as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(tz_name)).day


def previous_month(month: int, year: int) -> tuple[int, int]:
    month = require_month(month)
    year = require_year(year)
    if month == 0:
        return 11, year - 1
    return month - 1, year

