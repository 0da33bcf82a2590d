from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from tracker.db.main import get_session
from tracker.deps import CurrentUser
from tracker.users.schemas import BudgetSettingsUpdate, BudgetSettingsResponse
from tracker.users.services import UserService

router = APIRouter()

async def get_user_service(session: Annotated[AsyncSession, Depends(get_session)]) -> UserService:
    return UserService(session)

ServiceDependency = Annotated[UserService, Depends(get_user_service)]

@router.get("/me/budget", response_model=BudgetSettingsResponse, status_code=status.HTTP_200_OK, summary="Get budget settings of the current user")
async def get_budget_settings(current_user: CurrentUser, service: ServiceDependency) -> BudgetSettingsResponse:
    """
    Get configured and effective budgets of the current user.
    Requires authentication.
    """
    return service.to_budget_response(current_user)

@router.patch("/me/budget", response_model=BudgetSettingsResponse, status_code=status.HTTP_200_OK, summary="Update budget settings of the current user")
async def update_budget_settings(data: BudgetSettingsUpdate, current_user: CurrentUser, service: ServiceDependency) -> BudgetSettingsResponse:
    """
    Update monthly and/or weekly budget of the current user.
    Requires authentication.
    """
    return await service.update_budget(current_user.id, data)
