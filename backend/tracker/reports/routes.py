"""
HTTP routes for expense reports endpoints.
"""

import csv
import io
from typing import Annotated, Literal, Union

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.categories.models import ExpenseCategory
from tracker.db.main import get_session
from tracker.deps import CurrentUser
from tracker.reports.builder import ALL_CATEGORIES
from tracker.reports.dependencies import NowDependency, PeriodDependency
from tracker.reports.schemas import DashboardReport, ExpenseTable
from tracker.reports.services import ReportService

router = APIRouter()


async def get_report_service(session: Annotated[AsyncSession, Depends(get_session)]) -> ReportService:
    """
    Dependency to get ReportService instance.

    Args:
        session: Database session

    Returns:
        ReportService instance
    """
    return ReportService(session)


ServiceDependency = Annotated[ReportService, Depends(get_report_service)]


def _table_to_csv(table: ExpenseTable) -> str:
    csv_buffer = io.StringIO(newline="")
    writer = csv.writer(csv_buffer)
    writer.writerow(table.HEADER)
    writer.writerows(table.as_rows())
    return csv_buffer.getvalue()


@router.get(
    "/dashboard",
    response_model=DashboardReport,
    status_code=status.HTTP_200_OK,
    summary="Get dashboard report",
    description="Returns totals, category breakdown, top category and recent expenses for the selected period, plus monthly and weekly budget status for the current month and week."
)
async def get_dashboard(
    user: CurrentUser,
    service: ServiceDependency,
    selector: PeriodDependency,
    now: NowDependency,
) -> DashboardReport:
    """
    Get dashboard report.

    Args:
        user: Current authenticated user (from JWT token)
        service: ReportService instance
        selector: Selected period (default: current month)
        now: Current time in the reporting timezone

    Returns:
        DashboardReport for the selected period

    Raises:
        HTTPException 400: If a custom range is incomplete or inverted
        HTTPException 401: If user is not authenticated
    """
    return await service.get_dashboard(user.id, selector, now)


@router.get(
    "/export",
    status_code=status.HTTP_200_OK,
    summary="Export expenses as CSV",
    description="Returns the selected period's expenses, optionally limited to one category, as a CSV table with a trailing total row."
)
async def export_expenses(
    user: CurrentUser,
    service: ServiceDependency,
    selector: PeriodDependency,
    now: NowDependency,
    category: Union[ExpenseCategory, Literal["All"]] = Query(
        ALL_CATEGORIES,
        description="Category name, or 'All' for every category"
    ),
) -> Response:
    """
    Export expenses of the selected period.

    Args:
        user: Current authenticated user (from JWT token)
        service: ReportService instance
        selector: Selected period (default: current month)
        now: Current time in the reporting timezone
        category: Category filter (default: All)

    Returns:
        CSV attachment named after the period label

    Raises:
        HTTPException 400: If a custom range is incomplete or inverted
        HTTPException 401: If user is not authenticated
        HTTPException 422: If the category is neither a known category nor 'All'
    """
    category_name = category.value if isinstance(category, ExpenseCategory) else category
    table, filename = await service.get_export(user.id, selector, now, category=category_name, extension="csv")
    return Response(
        content=_table_to_csv(table),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
