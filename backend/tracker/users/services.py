from sqlalchemy.ext.asyncio import AsyncSession

from tracker.common.services import AppService
from tracker.config import settings
from tracker.reports.budget import resolve_budgets
from tracker.reports.schemas import BudgetSettings
from tracker.users.models import User
from tracker.users.schemas import BudgetSettingsUpdate, BudgetSettingsResponse


class UserService(AppService[User]):
    def __init__(self, session: AsyncSession):
        super().__init__(model=User, session=session)

    @staticmethod
    def effective_budgets(user: User) -> BudgetSettings:
        """Budget settings with configured defaults filled in."""
        return resolve_budgets(
            user.monthly_budget,
            user.weekly_budget,
            default_monthly=settings.DEFAULT_MONTHLY_BUDGET,
            weeks_per_month=settings.WEEKS_PER_MONTH,
        )

    def to_budget_response(self, user: User) -> BudgetSettingsResponse:
        effective = self.effective_budgets(user)
        return BudgetSettingsResponse(
            monthly_budget=user.monthly_budget,
            weekly_budget=user.weekly_budget,
            effective_monthly_budget=effective.monthly_budget,
            effective_weekly_budget=effective.weekly_budget,
        )

    async def update_budget(self, user_id: int, data: BudgetSettingsUpdate) -> BudgetSettingsResponse:
        """
        Update the user's budget settings.

        Only fields present in the request are changed.

        Raises:
            ResourceNotFoundError: If the user doesn't exist
        """
        user = await self.get_by_id(user_id)

        update_data = data.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(user, key, value)

        if update_data:
            user = await self._save(user)

        return self.to_budget_response(user)
