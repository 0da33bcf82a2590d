from fastapi import APIRouter, status
from tracker.deps import CurrentUser
from tracker.categories.models import CATEGORY_STYLES
from tracker.categories.schemas import CategoryResponse, CategoryListResponse

router = APIRouter()

@router.get("/", response_model=CategoryListResponse, status_code=status.HTTP_200_OK, summary="List expense categories")
async def get_categories(user: CurrentUser):
    """
    List the fixed category set with its icon and colour.
    Requires authentication.
    """
    items = [
        CategoryResponse(name=category, icon=style.icon, color=style.color)
        for category, style in CATEGORY_STYLES.items()
    ]
    return CategoryListResponse(items=items, total=len(items))
