from decimal import Decimal
from typing import Optional
from pydantic import Field, field_validator
from tracker.common.schemas import AppBaseModel

class BudgetValidationMixin:

    @field_validator('monthly_budget', 'weekly_budget', check_fields=False)
    @classmethod
    def validate_budget_precision(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None:
            if not v.is_finite():
                raise ValueError("Budget must be a finite number")
            if v.as_tuple().exponent < -2:
                raise ValueError("Budget cannot have more than 2 decimal places")
        return v

# --- REQUESTS ---
class BudgetSettingsUpdate(AppBaseModel, BudgetValidationMixin):
    """Partial update; an explicit null clears the value so the default applies again."""

    monthly_budget: Optional[Decimal] = Field(
        None,
        ge=0,
        strict=False,
        description="Monthly spending ceiling (null = default)"
    )

    weekly_budget: Optional[Decimal] = Field(
        None,
        ge=0,
        strict=False,
        description="Weekly spending ceiling (null = monthly budget / weeks per month)"
    )

# --- RESPONSES ---
class BudgetSettingsResponse(AppBaseModel):
    monthly_budget: Optional[Decimal] = Field(None, description="Configured monthly budget")
    weekly_budget: Optional[Decimal] = Field(None, description="Configured weekly budget")
    effective_monthly_budget: Decimal = Field(..., ge=0, description="Monthly budget used by reports")
    effective_weekly_budget: Decimal = Field(..., ge=0, description="Weekly budget used by reports")
