"""
Budget evaluation.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from tracker.reports.schemas import BudgetSettings, BudgetStatus

CENT = Decimal("0.01")
HUNDRED = Decimal("100")
DEFAULT_MONTHLY_BUDGET = Decimal("6000")
WEEKS_PER_MONTH = Decimal("4.33")

Amount = Union[Decimal, int, str]


def _to_decimal(value: Amount) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def evaluate_budget(spent: Amount, budget: Amount) -> BudgetStatus:
    """
    Compare spending against a budget ceiling.

    Args:
        spent: Amount spent in the budget window
        budget: Ceiling for the window

    Returns:
        BudgetStatus; percentage_used is 0 when the budget is 0 and
        is_over_budget is only set when spent is strictly above budget

    Examples:
        >>> evaluate_budget(150, 100).percentage_used
        Decimal('150.00')
        >>> evaluate_budget(100, 100).is_over_budget
        False
    """
    spent = _to_decimal(spent)
    budget = _to_decimal(budget)
    if budget > 0:
        percentage_used = (spent / budget * HUNDRED).quantize(CENT, rounding=ROUND_HALF_UP)
    else:
        percentage_used = Decimal("0.00")
    return BudgetStatus(
        spent=spent,
        budget=budget,
        percentage_used=percentage_used,
        is_over_budget=spent > budget,
    )


def resolve_budgets(
    monthly_budget: Optional[Decimal],
    weekly_budget: Optional[Decimal],
    default_monthly: Decimal = DEFAULT_MONTHLY_BUDGET,
    weeks_per_month: Decimal = WEEKS_PER_MONTH,
) -> BudgetSettings:
    """
    Fill in missing budget settings.

    An unset (or non-positive) monthly budget falls back to `default_monthly`;
    an unset weekly budget is the monthly budget spread over the average
    number of weeks in a month.
    """
    monthly = _to_decimal(monthly_budget) if monthly_budget is not None else None
    if monthly is None or monthly <= 0:
        monthly = _to_decimal(default_monthly)

    weekly = _to_decimal(weekly_budget) if weekly_budget is not None else None
    if weekly is None or weekly <= 0:
        weekly = (monthly / _to_decimal(weeks_per_month)).quantize(CENT, rounding=ROUND_HALF_UP)

    return BudgetSettings(monthly_budget=monthly, weekly_budget=weekly)
