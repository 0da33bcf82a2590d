"""
FastAPI dependencies shared by routes that browse expenses by period.
"""
from datetime import date, datetime
from typing import Annotated, Optional
from zoneinfo import ZoneInfo

from fastapi import Depends, Query

from tracker.config import settings
from tracker.reports.schemas import PeriodKind, PeriodSelector


def current_time() -> datetime:
    """
    Current instant in the configured reporting timezone.

    Overridden in tests to pin the clock.
    """
    return datetime.now(ZoneInfo(settings.TIMEZONE))


async def get_period_selector(
    period: PeriodKind = Query(
        PeriodKind.CURRENT_MONTH,
        description="Preset period, or 'custom' together with start and end"
    ),
    start: Optional[date] = Query(
        None,
        description="First day of a custom range (YYYY-MM-DD, inclusive)"
    ),
    end: Optional[date] = Query(
        None,
        description="Last day of a custom range (YYYY-MM-DD, inclusive)"
    ),
) -> PeriodSelector:
    """
    Build a PeriodSelector from query parameters.

    Range validation happens in the period resolver, so an incomplete
    custom range surfaces as InvalidRangeError (HTTP 400).
    """
    return PeriodSelector(kind=period, start=start, end=end)


PeriodDependency = Annotated[PeriodSelector, Depends(get_period_selector)]
NowDependency = Annotated[datetime, Depends(current_time)]
