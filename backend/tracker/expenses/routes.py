from decimal import Decimal
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from tracker.categories.models import ExpenseCategory
from tracker.db.main import get_session
from tracker.deps import CurrentUser
from tracker.expenses.schemas import (
    ExpenseCreate,
    ExpenseReplace,
    ExpenseResponse,
    ExpenseListResponse,
)
from tracker.expenses.services import ExpenseService
from tracker.reports.dependencies import NowDependency, PeriodDependency

router = APIRouter()

async def get_expense_service(session: Annotated[AsyncSession, Depends(get_session)]) -> ExpenseService:
    return ExpenseService(session)

ServiceDependency = Annotated[ExpenseService, Depends(get_expense_service)]

@router.get("/", response_model=ExpenseListResponse, status_code=status.HTTP_200_OK, summary="List expenses of a period")
async def get_expenses(
    user: CurrentUser,
    service: ServiceDependency,
    selector: PeriodDependency,
    now: NowDependency,
    category: Optional[ExpenseCategory] = Query(None, description="Only expenses of this category"),
) -> ExpenseListResponse:
    """
    List the current user's expenses dated inside the selected period, newest first.
    Requires authentication.
    """
    period, expenses = await service.list_in_period(user.id, selector, now)
    if category is not None:
        expenses = [e for e in expenses if ExpenseCategory.coerce(e.category) == category]

    items = [ExpenseResponse.model_validate(expense) for expense in expenses]
    return ExpenseListResponse(
        items=items,
        total=len(items),
        period_label=period.label,
        total_amount=sum((item.price for item in items), Decimal("0.00")),
    )

@router.get("/{expense_id}", response_model=ExpenseResponse, status_code=status.HTTP_200_OK, summary="Get expense by ID")
async def get_expense(expense_id: int, user: CurrentUser, service: ServiceDependency):
    """
    Get one of the current user's expenses.
    Requires authentication.
    """
    return await service.get_owned(expense_id, user.id)

@router.post("/", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED, summary="Add an expense")
async def create_expense(data: ExpenseCreate, user: CurrentUser, service: ServiceDependency, now: NowDependency):
    """
    Add an expense for the current user. The date defaults to now.
    Requires authentication.
    """
    return await service.create(data, user.id, now)

@router.put("/{expense_id}", response_model=ExpenseResponse, status_code=status.HTTP_200_OK, summary="Replace an expense")
async def replace_expense(expense_id: int, data: ExpenseReplace, user: CurrentUser, service: ServiceDependency):
    """
    Replace all fields of an expense.
    Requires authentication.
    """
    return await service.replace(expense_id, data, user.id)

@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an expense")
async def delete_expense(expense_id: int, user: CurrentUser, service: ServiceDependency):
    """
    Delete an expense.
    Requires authentication.
    """
    await service.delete(expense_id, user.id)
    return None
