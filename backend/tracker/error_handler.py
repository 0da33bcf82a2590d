import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from tracker.common.exceptions import (
    ResourceNotFoundError,
    ExpenseAccessDeniedError,
    AppError
)
from tracker.reports.exceptions import InvalidRangeError

logger = logging.getLogger(__name__)

def exception_handler(app: FastAPI) -> None:
    """
    Registers global exception handlers for the FastAPI application.
    Translates domain exceptions into HTTP responses.
    """

    @app.exception_handler(ResourceNotFoundError)
    async def resource_not_found_handler(request: Request, exc: ResourceNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": exc.message},
        )

    @app.exception_handler(ExpenseAccessDeniedError)
    async def expense_access_denied_handler(request: Request, exc: ExpenseAccessDeniedError):
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": exc.message},
        )

    @app.exception_handler(InvalidRangeError)
    async def invalid_range_handler(request: Request, exc: InvalidRangeError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.error(f"Unhandled application error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )
