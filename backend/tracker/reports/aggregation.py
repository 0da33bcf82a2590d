"""
Expense aggregation over a resolved period.

Prices and dates are coerced record by record: a non-numeric price counts as
0 and an absent or unparsable date keeps the expense out of every
date-bounded window. Neither aborts the batch.
"""

import logging
from datetime import date, datetime, time, timezone, tzinfo
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Tuple

from tracker.categories.models import ExpenseCategory
from tracker.reports.schemas import CategoryStat, ExpenseRecord, PeriodAggregate, ResolvedPeriod

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
CENT = Decimal("0.01")
TENTH = Decimal("0.1")
HUNDRED = Decimal("100")
# Largest amount an expenses.price column (Numeric(12, 2)) can hold
MAX_PRICE = Decimal("9999999999.99")


def coerce_price(value: Any) -> Decimal:
    """
    Convert a raw price into a non-negative amount rounded to cents.

    Non-numeric, negative, non-finite and out-of-range (above MAX_PRICE)
    values count as 0.

    Examples:
        >>> coerce_price("12.5")
        Decimal('12.50')
        >>> coerce_price("abc")
        Decimal('0.00')
        >>> coerce_price(None)
        Decimal('0.00')
        >>> coerce_price("1e30")
        Decimal('0.00')
    """
    if isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not amount.is_finite() or amount < 0 or amount > MAX_PRICE:
        return ZERO
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def coerce_instant(value: Any, tz: Optional[tzinfo]) -> Optional[datetime]:
    """
    Convert a raw expense date into a datetime comparable with `tz` boundaries.

    Naive values are read as wall-clock time in `tz`. When `tz` is None,
    aware values are converted to naive UTC.

    Returns:
        The instant, or None when the value is absent or unparsable
    """
    if isinstance(value, datetime):
        instant = value
    elif isinstance(value, date):
        instant = datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        try:
            instant = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if tz is None:
        if instant.tzinfo is not None:
            return instant.astimezone(timezone.utc).replace(tzinfo=None)
        return instant
    if instant.tzinfo is None:
        return instant.replace(tzinfo=tz)
    return instant.astimezone(tz)


def percentage_of(amount: Decimal, total: Decimal) -> Decimal:
    """
    Share of `amount` in `total` as a percentage, rounded half-up to one
    decimal place.

    Examples:
        >>> percentage_of(Decimal("2"), Decimal("3"))
        Decimal('66.7')
    """
    if total == 0:
        return Decimal("0.0")
    return (amount / total * HUNDRED).quantize(TENTH, rounding=ROUND_HALF_UP)


def _in_period(expenses: Iterable[ExpenseRecord], period: ResolvedPeriod) -> List[Tuple[datetime, ExpenseRecord]]:
    tz = period.start.tzinfo
    matched: List[Tuple[datetime, ExpenseRecord]] = []
    for expense in expenses:
        instant = coerce_instant(expense.date, tz)
        if instant is None:
            logger.debug(f"Expense {expense.id} has no usable date, skipped for {period.label}")
            continue
        if period.contains(instant):
            matched.append((instant, expense))
    return matched


def _newest_first(matched: List[Tuple[datetime, ExpenseRecord]]) -> List[ExpenseRecord]:
    ordered = sorted(matched, key=lambda pair: pair[0], reverse=True)
    return [expense for _, expense in ordered]


def filter_by_period(expenses: Iterable[ExpenseRecord], period: ResolvedPeriod) -> List[ExpenseRecord]:
    """Expenses dated inside the period, newest first."""
    return _newest_first(_in_period(expenses, period))


def total_in_period(expenses: Iterable[ExpenseRecord], period: ResolvedPeriod) -> Decimal:
    return sum((coerce_price(expense.price) for _, expense in _in_period(expenses, period)), ZERO)


def lifetime_totals(expenses: Iterable[ExpenseRecord]) -> Tuple[Decimal, int]:
    """Total and count over every record, dated or not."""
    total = ZERO
    count = 0
    for expense in expenses:
        total += coerce_price(expense.price)
        count += 1
    return total, count


def aggregate(
    expenses: Iterable[ExpenseRecord],
    period: ResolvedPeriod,
    recent_limit: int = 5,
) -> PeriodAggregate:
    """
    Summarize the expenses that fall inside `period`.

    Args:
        expenses: Expense snapshot, in store order
        period: Window to aggregate
        recent_limit: Maximum number of recent expenses to return

    Returns:
        PeriodAggregate with totals, a per-category breakdown (largest first,
        ties in first-encountered order) and the newest expenses
    """
    matched = _in_period(expenses, period)

    totals: Dict[ExpenseCategory, Decimal] = {}
    counts: Dict[ExpenseCategory, int] = {}
    total_spent = ZERO
    for _, expense in matched:
        category = ExpenseCategory.coerce(expense.category)
        amount = coerce_price(expense.price)
        totals[category] = totals.get(category, ZERO) + amount
        counts[category] = counts.get(category, 0) + 1
        total_spent += amount

    breakdown = [
        CategoryStat(
            category=category,
            total=category_total,
            count=counts[category],
            percentage_of_period=percentage_of(category_total, total_spent),
        )
        for category, category_total in totals.items()
    ]
    breakdown.sort(key=lambda stat: stat.total, reverse=True)

    return PeriodAggregate(
        total_spent=total_spent,
        expense_count=len(matched),
        category_breakdown=breakdown,
        recent_expenses=_newest_first(matched)[:max(recent_limit, 0)],
    )
