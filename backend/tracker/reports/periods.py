"""
Period resolution for reports.

Maps a PeriodSelector onto a concrete [start, end) window. The current time
is always passed in explicitly, so resolution is deterministic.
"""

import calendar
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Callable, Dict, Optional, Tuple

from tracker.reports.exceptions import InvalidRangeError
from tracker.reports.schemas import PeriodKind, PeriodSelector, ResolvedPeriod

END_OF_DAY = time(23, 59, 59, 999000)


def _shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """
    Move a (year, month) pair by `delta` months.

    Examples:
        >>> _shift_month(2024, 12, 1)
        (2025, 1)
        >>> _shift_month(2024, 1, -1)
        (2023, 12)
    """
    years, month_index = divmod(year * 12 + (month - 1) + delta, 12)
    return years, month_index + 1


def _start_of(day: date, tz: Optional[tzinfo]) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def _short_date(day: date) -> str:
    return f"{calendar.month_abbr[day.month]} {day.day}"


def week_start(day: date) -> date:
    """Sunday on or before `day`."""
    days_since_sunday = (day.weekday() + 1) % 7
    return day - timedelta(days=days_since_sunday)


def _month(now: datetime, offset: int) -> ResolvedPeriod:
    year, month = _shift_month(now.year, now.month, offset)
    next_year, next_month = _shift_month(year, month, 1)
    return ResolvedPeriod(
        start=_start_of(date(year, month, 1), now.tzinfo),
        end=_start_of(date(next_year, next_month, 1), now.tzinfo),
        label=f"{calendar.month_name[month]} {year}",
    )


def _week(now: datetime, offset: int) -> ResolvedPeriod:
    first_day = week_start(now.date()) + timedelta(weeks=offset)
    last_day = first_day + timedelta(days=6)
    return ResolvedPeriod(
        start=_start_of(first_day, now.tzinfo),
        end=_start_of(first_day + timedelta(days=7), now.tzinfo),
        label=f"{_short_date(first_day)} - {_short_date(last_day)}",
    )


def _year(now: datetime, offset: int) -> ResolvedPeriod:
    year = now.year + offset
    return ResolvedPeriod(
        start=_start_of(date(year, 1, 1), now.tzinfo),
        end=_start_of(date(year + 1, 1, 1), now.tzinfo),
        label=str(year),
    )


def _custom(selector: PeriodSelector, now: datetime) -> ResolvedPeriod:
    if selector.start is None or selector.end is None:
        raise InvalidRangeError("Please select both a start and an end date")
    if selector.start > selector.end:
        raise InvalidRangeError(
            f"Start date {selector.start.isoformat()} is after end date {selector.end.isoformat()}"
        )
    return ResolvedPeriod(
        start=_start_of(selector.start, now.tzinfo),
        end=datetime.combine(selector.end, END_OF_DAY, tzinfo=now.tzinfo),
        label=f"Custom: {selector.start.isoformat()} to {selector.end.isoformat()}",
    )


_PRESETS: Dict[PeriodKind, Callable[[datetime], ResolvedPeriod]] = {
    PeriodKind.CURRENT_MONTH: lambda now: _month(now, 0),
    PeriodKind.LAST_MONTH: lambda now: _month(now, -1),
    PeriodKind.CURRENT_WEEK: lambda now: _week(now, 0),
    PeriodKind.LAST_WEEK: lambda now: _week(now, -1),
    PeriodKind.CURRENT_YEAR: lambda now: _year(now, 0),
    PeriodKind.LAST_YEAR: lambda now: _year(now, -1),
}


def resolve_period(selector: PeriodSelector, now: datetime) -> ResolvedPeriod:
    """
    Resolve a selector into a concrete window.

    Boundaries are wall-clock midnights in `now`'s timezone (naive if `now`
    is naive). Weeks start on Sunday.

    Args:
        selector: Preset period or custom range
        now: Current instant

    Returns:
        ResolvedPeriod with start <= end

    Raises:
        InvalidRangeError: If a custom range is missing a bound or start > end
    """
    if selector.kind == PeriodKind.CUSTOM:
        return _custom(selector, now)
    return _PRESETS[selector.kind](now)


def current_month(now: datetime) -> ResolvedPeriod:
    return resolve_period(PeriodSelector(kind=PeriodKind.CURRENT_MONTH), now)


def current_week(now: datetime) -> ResolvedPeriod:
    return resolve_period(PeriodSelector(kind=PeriodKind.CURRENT_WEEK), now)
