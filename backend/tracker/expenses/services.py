import logging
from datetime import datetime
from typing import List, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.common.exceptions import ExpenseAccessDeniedError, ResourceNotFoundError
from tracker.common.services import AppService
from tracker.expenses.models import Expense
from tracker.expenses.schemas import ExpenseCreate, ExpenseReplace
from tracker.reports.aggregation import filter_by_period
from tracker.reports.periods import resolve_period
from tracker.reports.schemas import ExpenseRecord, PeriodSelector, ResolvedPeriod

logger = logging.getLogger(__name__)


def to_record(expense: Expense) -> ExpenseRecord:
    """Convert an Expense row into the record type consumed by reports."""
    return ExpenseRecord(
        id=expense.id,
        name=expense.name,
        price=expense.price,
        category=expense.category,
        date=expense.date,
    )


class ExpenseService(AppService[Expense]):
    def __init__(self, session: AsyncSession):
        super().__init__(model=Expense, session=session)

    async def get_owned(self, expense_id: int, user_id: int) -> Expense:
        """
        Get expense by ID with user ownership check.

        Raises:
            ResourceNotFoundError: If expense doesn't exist
            ExpenseAccessDeniedError: If expense exists but doesn't belong to user_id
        """
        stmt = select(Expense).where(Expense.id == expense_id)
        result = await self.session.execute(stmt)
        expense = result.scalar_one_or_none()

        if not expense:
            raise ResourceNotFoundError("Expense", expense_id)

        if expense.user_id != user_id:
            raise ExpenseAccessDeniedError(expense_id)

        return expense

    async def create(self, data: ExpenseCreate, user_id: int, now: datetime) -> Expense:
        """
        Log a new expense for the user.

        Args:
            data: Expense fields
            user_id: Owner of the new expense
            now: Used as the expense date when none is given
        """
        new_expense = Expense(
            name=data.name,
            price=data.price,
            category=data.category.value,
            date=data.date or now,
            user_id=user_id,
        )
        new_expense = await self._save(new_expense)
        logger.info(f"User {user_id} added expense {new_expense.id} ({new_expense.category})")
        return new_expense

    async def replace(self, expense_id: int, data: ExpenseReplace, user_id: int) -> Expense:
        """
        Replace every editable field of an expense.

        Ownership never changes: user_id is not part of the payload.

        Raises:
            ResourceNotFoundError: If expense doesn't exist
            ExpenseAccessDeniedError: If expense doesn't belong to user_id
        """
        expense = await self.get_owned(expense_id, user_id)

        expense.name = data.name
        expense.price = data.price
        expense.category = data.category.value
        expense.date = data.date

        return await self._save(expense)

    async def delete(self, expense_id: int, user_id: int) -> None:
        """
        Delete an expense owned by the user.

        Raises:
            ResourceNotFoundError: If expense doesn't exist
            ExpenseAccessDeniedError: If expense doesn't belong to user_id
        """
        expense = await self.get_owned(expense_id, user_id)
        await self._remove(expense)
        logger.info(f"User {user_id} deleted expense {expense_id}")

    async def list_for_owner(self, user_id: int) -> Sequence[Expense]:
        """All expenses of the user, newest first (undated last)."""
        stmt = (
            select(Expense)
            .where(Expense.user_id == user_id)
            .order_by(Expense.date.desc().nulls_last(), Expense.id.desc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def list_in_period(
        self, user_id: int, selector: PeriodSelector, now: datetime
    ) -> Tuple[ResolvedPeriod, List[Expense]]:
        """
        Expenses of the user dated inside the selected period, newest first.

        Raises:
            InvalidRangeError: If the selector is an invalid custom range
        """
        period = resolve_period(selector, now)
        expenses = await self.list_for_owner(user_id)
        by_id = {expense.id: expense for expense in expenses}
        records = filter_by_period([to_record(expense) for expense in expenses], period)
        return period, [by_id[record.id] for record in records]
