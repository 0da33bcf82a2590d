import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.auth.jwt import get_user_id_from_token
from tracker.auth.exceptions import InvalidTokenError
from tracker.db.main import get_session
from tracker.users.models import User

# Logger for this module
logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer()

async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_session)]
) -> User:
    """
    Dependency to get the current authenticated user from JWT access token.

    This dependency:
    - Validates JWT access token (not refresh token)
    - Checks if user exists in database
    - Verifies user account is active

    Args:
        credentials: HTTP Bearer credentials containing JWT access token
        db: Database session

    Returns:
        Authenticated and active User model

    Raises:
        HTTPException 401: If token is invalid, expired, user not found, or account inactive

    Usage:
        @router.get("/budget")
        async def get_budget(user: CurrentUser):
            return {"user_id": user.id}
    """
    try:
        user_id = get_user_id_from_token(credentials.credentials, token_type="access")

        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()

        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not found",
                headers={"WWW-Authenticate": "Bearer"},
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User account is inactive",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return user

    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except HTTPException:
        # Re-raise HTTP exceptions (from user checks above)
        raise
    except Exception as e:
        # Log unexpected errors for debugging
        logger.error(f"Unexpected error in get_current_user: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization error",
            headers={"WWW-Authenticate": "Bearer"},
        )

# Type alias for easier use in route handlers
CurrentUser = Annotated[User, Depends(get_current_user)]
