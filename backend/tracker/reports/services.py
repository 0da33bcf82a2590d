"""
Report service: loads a user's expense snapshot and budget settings and
hands them to the report builder.

Load failures are logged and degrade to an empty expense list or default
budgets, so the builder always works on a complete snapshot.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import settings
from tracker.expenses.models import Expense
from tracker.expenses.services import to_record
from tracker.reports.aggregation import filter_by_period
from tracker.reports.budget import resolve_budgets
from tracker.reports.builder import build_report, export_filename, render_table
from tracker.reports.periods import resolve_period
from tracker.reports.schemas import (
    BudgetSettings,
    DashboardReport,
    ExpenseRecord,
    ExpenseTable,
    PeriodSelector,
)
from tracker.users.models import User

logger = logging.getLogger(__name__)


class ReportService:
    """
    Service for generating expense reports.

    This service does not inherit from AppService because it doesn't manage
    individual entities, but rather aggregates data across multiple entities.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_expenses(self, owner_id: int) -> List[ExpenseRecord]:
        """
        Load every expense of the user.

        Returns:
            Expense records in store order, or an empty list if loading fails
        """
        stmt = select(Expense).where(Expense.user_id == owner_id).order_by(Expense.id)
        try:
            result = await self.session.execute(stmt)
            expenses = result.scalars().all()
        except SQLAlchemyError as e:
            logger.warning(f"Could not load expenses for user {owner_id}: {e}", exc_info=True)
            return []
        return [to_record(expense) for expense in expenses]

    async def get_budget_settings(self, owner_id: int) -> BudgetSettings:
        """
        Load the user's budget settings with defaults filled in.

        Returns:
            BudgetSettings; defaults if the user or the settings cannot be loaded
        """
        monthly: Optional[Decimal] = None
        weekly: Optional[Decimal] = None
        try:
            result = await self.session.execute(
                select(User.monthly_budget, User.weekly_budget).where(User.id == owner_id)
            )
            row = result.one_or_none()
        except SQLAlchemyError as e:
            logger.warning(f"Could not load budget settings for user {owner_id}: {e}", exc_info=True)
            row = None

        if row is not None:
            monthly, weekly = row.monthly_budget, row.weekly_budget

        return resolve_budgets(
            monthly,
            weekly,
            default_monthly=settings.DEFAULT_MONTHLY_BUDGET,
            weeks_per_month=settings.WEEKS_PER_MONTH,
        )

    async def get_dashboard(self, owner_id: int, selector: PeriodSelector, now: datetime) -> DashboardReport:
        """
        Generate the dashboard report for the selected period.

        Args:
            owner_id: ID of the user requesting the report
            selector: Selected period
            now: Current instant; fixes the real current month and week

        Returns:
            DashboardReport

        Raises:
            InvalidRangeError: If the selector is an invalid custom range
        """
        # Validate the range before touching the database
        resolve_period(selector, now)

        logger.info(f"Generating dashboard for user {owner_id}, period: {selector.kind.value}")

        expenses = await self.list_expenses(owner_id)
        budgets = await self.get_budget_settings(owner_id)

        return build_report(
            expenses,
            selector,
            budgets,
            now,
            recent_limit=settings.RECENT_EXPENSES_LIMIT,
        )

    async def get_export(
        self,
        owner_id: int,
        selector: PeriodSelector,
        now: datetime,
        category: Optional[str] = None,
        extension: str = "csv",
    ) -> Tuple[ExpenseTable, str]:
        """
        Render the selected period's expenses as an export table.

        Args:
            owner_id: ID of the user requesting the export
            selector: Selected period
            now: Current instant
            category: Category name, or None/"All" for every category
            extension: File extension of the export

        Returns:
            Tuple of the table and the download file name

        Raises:
            InvalidRangeError: If the selector is an invalid custom range
        """
        period = resolve_period(selector, now)

        logger.info(f"Generating export for user {owner_id}, period: {period.label}, category: {category or 'All'}")

        expenses = filter_by_period(await self.list_expenses(owner_id), period)
        table = render_table(
            expenses,
            category_filter=category,
            currency=settings.CURRENCY_SYMBOL,
            tz=now.tzinfo,
        )
        return table, export_filename(period.label, now.date(), extension)
