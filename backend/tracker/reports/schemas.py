"""
Value schemas for expense reports.

Report values are derived on every request and never persisted, so they are
frozen (via ValueModel): two reports built from the same snapshot and the
same `now` compare equal.
"""

import enum
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Any, ClassVar, List, Optional

from pydantic import Field

from tracker.categories.models import ExpenseCategory
from tracker.common.schemas import ValueModel


class PeriodKind(str, enum.Enum):
    CURRENT_MONTH = "current_month"
    LAST_MONTH = "last_month"
    CURRENT_WEEK = "current_week"
    LAST_WEEK = "last_week"
    CURRENT_YEAR = "current_year"
    LAST_YEAR = "last_year"
    CUSTOM = "custom"


# --- Input Schemas ---
class PeriodSelector(ValueModel):
    """
    Which period the user wants to browse.

    `start` and `end` are only read for PeriodKind.CUSTOM; both are inclusive
    calendar dates.
    """
    kind: PeriodKind = Field(PeriodKind.CURRENT_MONTH, description="Preset period or custom range")
    start: Optional[date_type] = Field(None, description="First day of a custom range (inclusive)")
    end: Optional[date_type] = Field(None, description="Last day of a custom range (inclusive)")


class ExpenseRecord(ValueModel):
    """
    Expense as received from the data store.

    Fields are deliberately loose: price and date are coerced by the
    aggregator, so one malformed row never aborts a report.
    """
    id: Any = Field(None, description="Opaque identifier")
    name: str = Field("", description="Display name")
    price: Any = Field(None, description="Raw price; non-numeric values count as 0")
    category: Any = Field(None, description="Raw category; unknown values count as Other")
    date: Any = Field(None, description="Instant of the expense; datetime, ISO string or None")


class BudgetSettings(ValueModel):
    monthly_budget: Decimal = Field(..., ge=0, description="Monthly spending ceiling")
    weekly_budget: Decimal = Field(..., ge=0, description="Weekly spending ceiling")


# --- Derived Schemas ---
class ResolvedPeriod(ValueModel):
    """Concrete [start, end) window of a period selector."""
    start: datetime = Field(..., description="First instant inside the period")
    end: datetime = Field(..., description="First instant after the period (exclusive)")
    label: str = Field(..., min_length=1, description="Human readable period name")

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


class CategoryStat(ValueModel):
    """Category summary with amount, entry count and share of the period."""
    category: ExpenseCategory = Field(..., description="Category")
    total: Decimal = Field(..., ge=0, description="Total amount spent in this category")
    count: int = Field(..., gt=0, description="Number of expenses in this category")
    percentage_of_period: Decimal = Field(..., ge=0, le=100, description="Share of the period total (0-100, 1 dp)")


class BudgetStatus(ValueModel):
    spent: Decimal = Field(..., ge=0, description="Amount spent in the budget window")
    budget: Decimal = Field(..., ge=0, description="Budget ceiling for the window")
    percentage_used: Decimal = Field(..., ge=0, description="spent / budget * 100, 0 when budget is 0")
    is_over_budget: bool = Field(..., description="True when spent is strictly above budget")


class PeriodAggregate(ValueModel):
    total_spent: Decimal = Field(..., ge=0)
    expense_count: int = Field(..., ge=0)
    category_breakdown: List[CategoryStat] = Field(default_factory=list)
    recent_expenses: List[ExpenseRecord] = Field(default_factory=list)


class DashboardReport(ValueModel):
    """
    Everything the dashboard shows for one selector.

    Budget statuses always describe the real current month and week; the
    remaining figures describe the selected period.
    """
    period: ResolvedPeriod = Field(..., description="Selected period")
    total_spent: Decimal = Field(..., ge=0, description="Total spent in the selected period")
    expense_count: int = Field(..., ge=0, description="Number of expenses in the selected period")
    category_breakdown: List[CategoryStat] = Field(..., description="Categories with at least one expense, largest first")
    top_category: Optional[CategoryStat] = Field(None, description="Category with the largest total")
    monthly: BudgetStatus = Field(..., description="Current calendar month against the monthly budget")
    weekly: BudgetStatus = Field(..., description="Current week against the weekly budget")
    recent_expenses: List[ExpenseRecord] = Field(..., description="Newest expenses of the selected period")
    lifetime_spent: Decimal = Field(..., ge=0, description="Total of every expense regardless of date")
    lifetime_count: int = Field(..., ge=0, description="Number of expenses regardless of date")


# --- Export Schemas ---
class TableRow(ValueModel):
    index: int = Field(..., ge=1)
    name: str
    category: ExpenseCategory
    price: Decimal = Field(..., ge=0)
    formatted_price: str
    formatted_date: str
    formatted_time: str


class ExpenseTable(ValueModel):
    """Tabular rendering of expenses, consumed by document exporters."""
    HEADER: ClassVar[tuple] = ("#", "Item Name", "Category", "Price", "Date", "Time")

    rows: List[TableRow] = Field(default_factory=list)
    total: Decimal = Field(..., ge=0, description="Sum of the rendered rows' prices")
    formatted_total: str

    def as_rows(self) -> List[list]:
        """Data rows followed by the trailing total row."""
        body = [
            [row.index, row.name, row.category.value, row.formatted_price, row.formatted_date, row.formatted_time]
            for row in self.rows
        ]
        body.append(["", "Total", "", self.formatted_total, "", ""])
        return body
