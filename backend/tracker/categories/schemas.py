from pydantic import Field

from tracker.categories.models import ExpenseCategory
from tracker.common.schemas import AppBaseModel, ItemsResponse


# --- RESPONSES ---
class CategoryResponse(AppBaseModel):
    name: ExpenseCategory = Field(..., description="Category name")
    icon: str = Field(..., min_length=1, description="Emoji icon shown next to the category")
    color: str = Field(..., min_length=1, description="Palette colour token")

class CategoryListResponse(ItemsResponse[CategoryResponse]):
    pass
