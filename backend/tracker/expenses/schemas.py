from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import Field, field_validator
from tracker.categories.models import ExpenseCategory
from tracker.common.schemas import AppBaseModel, ItemsResponse

class ExpenseValidationMixin:

    @field_validator('name', check_fields=False)
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            if not v:
                raise ValueError("Expense name cannot be empty")
        return v

    @field_validator('price', check_fields=False)
    @classmethod
    def validate_price(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None:
            if not v.is_finite():
                raise ValueError("Price must be a finite number")
            if v.as_tuple().exponent < -2:
                raise ValueError("Price cannot have more than 2 decimal places")
        return v

# --- BASE MODEL ---
class ExpenseBase(AppBaseModel, ExpenseValidationMixin):

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Expense name (required, 1-255 characters)"
    )

    price: Decimal = Field(
        ...,
        ge=0,
        strict=False,
        description="Amount spent (required, non-negative, max 2 decimal places)"
    )

    category: ExpenseCategory = Field(
        ExpenseCategory.FOOD,
        strict=False,
        description="Expense category (default: Food)"
    )

# --- REQUESTS ---
class ExpenseCreate(ExpenseBase):

    date: Optional[datetime] = Field(
        None,
        strict=False,
        description="When the expense happened (default: now)"
    )

class ExpenseReplace(ExpenseBase):
    """Full replacement of an expense; omitted date clears it."""

    date: Optional[datetime] = Field(
        None,
        strict=False,
        description="When the expense happened"
    )

# --- RESPONSES ---
class ExpenseResponse(AppBaseModel):
    id: int = Field(..., gt=0)
    name: str
    price: Decimal
    category: str = Field(..., description="Category name as stored; reports count names outside the category set as Other")
    date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

class ExpenseListResponse(ItemsResponse[ExpenseResponse]):
    period_label: str = Field(..., description="Label of the period the list was filtered by")
    total_amount: Decimal = Field(..., ge=0, description="Sum of listed prices")
