from typing import Generic, TypeVar
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

class AppBaseModel(BaseModel):
    """
    Global base model for the application.
    Centralizes Pydantic configuration (strict mode, stripping, etc.).
    """
    model_config = ConfigDict(
        strict=True,                # No implicit type coercion (ex: "1" != 1)
        str_strip_whitespace=True,  # Auto-strip whitespace from strings
        validate_assignment=True,   # Validate values even when setting attributes after creation
        from_attributes=True,       # Enable ORM mode (SQLAlchemy -> Pydantic)
        frozen=False                # Allow mutation (default)
    )

class ValueModel(BaseModel):
    """
    Base model for derived report values.

    Values are immutable and compare equal by content: two reports built
    from the same snapshot and the same `now` are equal. Models holding
    lists are not hashable.
    """
    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
    )

class ItemsResponse(AppBaseModel, Generic[T]):
    """
    Generic wrapper for list responses.

    Usage:
        class ExpenseListResponse(ItemsResponse[ExpenseResponse]): pass
    """
    items: list[T] = Field(
        ...,
        description="List of items"
    )

    total: int = Field(
        ...,
        ge=0,
        description="Number of items in the list"
    )
