"""
Report builder: composes period resolution, aggregation and budget
evaluation into a DashboardReport, and renders expenses as an export table.
"""

import calendar
import re
from datetime import date, datetime, tzinfo
from typing import Iterable, List, Optional

from tracker.categories.models import ExpenseCategory
from tracker.reports.aggregation import (
    ZERO,
    aggregate,
    coerce_instant,
    coerce_price,
    lifetime_totals,
    total_in_period,
)
from tracker.reports.budget import evaluate_budget
from tracker.reports.periods import current_month, current_week, resolve_period
from tracker.reports.schemas import (
    BudgetSettings,
    CategoryStat,
    DashboardReport,
    ExpenseRecord,
    ExpenseTable,
    PeriodSelector,
    TableRow,
)

ALL_CATEGORIES = "All"
NOT_AVAILABLE = "N/A"


def top_category(breakdown: Iterable[CategoryStat]) -> Optional[CategoryStat]:
    """Entry with the largest total; the first one wins a tie."""
    top = None
    for stat in breakdown:
        if top is None or stat.total > top.total:
            top = stat
    return top


def build_report(
    expenses: Iterable[ExpenseRecord],
    selector: PeriodSelector,
    budgets: BudgetSettings,
    now: datetime,
    recent_limit: int = 5,
) -> DashboardReport:
    """
    Build the dashboard report for one period selector.

    The selected period drives the totals, the breakdown and the recent
    expenses. The monthly and weekly budget statuses are always computed
    for the real current month and week around `now`.

    Raises:
        InvalidRangeError: If the selector is an invalid custom range
    """
    snapshot = list(expenses)
    period = resolve_period(selector, now)
    selected = aggregate(snapshot, period, recent_limit=recent_limit)

    monthly_spent = total_in_period(snapshot, current_month(now))
    weekly_spent = total_in_period(snapshot, current_week(now))
    lifetime_spent, lifetime_count = lifetime_totals(snapshot)

    return DashboardReport(
        period=period,
        total_spent=selected.total_spent,
        expense_count=selected.expense_count,
        category_breakdown=selected.category_breakdown,
        top_category=top_category(selected.category_breakdown),
        monthly=evaluate_budget(monthly_spent, budgets.monthly_budget),
        weekly=evaluate_budget(weekly_spent, budgets.weekly_budget),
        recent_expenses=selected.recent_expenses,
        lifetime_spent=lifetime_spent,
        lifetime_count=lifetime_count,
    )


def _format_date(instant: datetime) -> str:
    # e.g. "Mon, Oct 19, 2026"
    return (
        f"{calendar.day_abbr[instant.weekday()]}, "
        f"{calendar.month_abbr[instant.month]} {instant.day}, {instant.year}"
    )


def _format_time(instant: datetime) -> str:
    # e.g. "3:05 PM"
    hour = instant.hour % 12 or 12
    suffix = "AM" if instant.hour < 12 else "PM"
    return f"{hour}:{instant.minute:02d} {suffix}"


def _format_amount(currency: str, amount) -> str:
    return f"{currency} {amount:.2f}"


def render_table(
    expenses: Iterable[ExpenseRecord],
    category_filter: Optional[str] = ALL_CATEGORIES,
    currency: str = "Rs",
    tz: Optional[tzinfo] = None,
) -> ExpenseTable:
    """
    Render expenses as export rows, in the order given.

    Args:
        expenses: Expenses to render (usually the selected period, newest first)
        category_filter: Category name, or "All"/None for every category;
            an unknown name matches no expense
        currency: Symbol prefixed to prices
        tz: Timezone dates and times are shown in

    Returns:
        ExpenseTable whose total is the sum of the rendered rows' prices
    """
    filtered = category_filter is not None and category_filter != ALL_CATEGORIES

    rows: List[TableRow] = []
    total = ZERO
    for expense in expenses:
        category = ExpenseCategory.coerce(expense.category)
        if filtered and category.value != category_filter:
            continue
        price = coerce_price(expense.price)
        instant = coerce_instant(expense.date, tz)
        rows.append(TableRow(
            index=len(rows) + 1,
            name=expense.name,
            category=category,
            price=price,
            formatted_price=_format_amount(currency, price),
            formatted_date=_format_date(instant) if instant else NOT_AVAILABLE,
            formatted_time=_format_time(instant) if instant else NOT_AVAILABLE,
        ))
        total += price

    return ExpenseTable(rows=rows, total=total, formatted_total=_format_amount(currency, total))


def export_filename(label: Optional[str], today: date, extension: str = "pdf") -> str:
    """
    File name for an exported report.

    Examples:
        >>> export_filename("October 2026", date(2026, 10, 19))
        'expenses_October_2026.pdf'
        >>> export_filename(None, date(2026, 10, 19), "csv")
        'expenses_2026-10-19.csv'
    """
    if label and label.strip():
        slug = re.sub(r"\s+", "_", label.strip())
        return f"expenses_{slug}.{extension}"
    return f"expenses_{today.isoformat()}.{extension}"
