"""
Pytest configuration and shared fixtures for backend tests.
"""
import os

# Settings are read at import time, so the test environment must be in place first
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("TIMEZONE", "UTC")

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from tracker.config import Settings, settings
from tracker.db.main import get_session, Base
from tracker.reports.dependencies import current_time
from main import app

# Import all models to ensure they are registered with Base
from tracker.users.models import User  # noqa: F401
from tracker.expenses.models import Expense  # noqa: F401

# Monday 19 October 2026, 15:05 UTC. Current week: Sun 18 - Sat 24 October.
FIXED_NOW = datetime(2026, 10, 19, 15, 5, tzinfo=timezone.utc)


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with overridden values."""
    return Settings(
        ENV="test",
        PORT=8000,
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        JWT_SECRET_KEY="test-secret-key-for-testing-only",
        JWT_ALGORITHM="HS256",
        TIMEZONE="UTC",
    )


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
async def test_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a test database session with in-memory SQLite database.
    Uses StaticPool for synchronous access in async context.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def client(test_db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client for FastAPI application.
    Overrides database dependency with test session and pins the clock.
    """
    async def override_get_session():
        yield test_db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[current_time] = lambda: FIXED_NOW

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def make_access_token(user_id: int, token_type: str = "access", expires_in: timedelta = timedelta(minutes=15)) -> str:
    """Mint a token the way the auth service does."""
    return jwt.encode(
        {"sub": str(user_id), "type": token_type, "exp": datetime.now(timezone.utc) + expires_in},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )


@pytest.fixture
def token_for() -> Callable[..., str]:
    return make_access_token


@pytest.fixture
async def user(test_db_session: AsyncSession) -> User:
    """Active user without budget settings."""
    new_user = User(email="anna@example.com", first_name="Anna")
    test_db_session.add(new_user)
    await test_db_session.commit()
    await test_db_session.refresh(new_user)
    return new_user


@pytest.fixture
async def other_user(test_db_session: AsyncSession) -> User:
    new_user = User(email="marek@example.com", first_name="Marek")
    test_db_session.add(new_user)
    await test_db_session.commit()
    await test_db_session.refresh(new_user)
    return new_user


@pytest.fixture
def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {make_access_token(user.id)}"}


@pytest.fixture
def add_expense(test_db_session: AsyncSession) -> Callable:
    """Factory inserting an expense row directly."""
    async def _add(owner: User, name: str, price: str, category: str, date=None) -> Expense:
        expense = Expense(
            name=name,
            price=Decimal(price),
            category=category,
            date=date,
            user_id=owner.id,
        )
        test_db_session.add(expense)
        await test_db_session.commit()
        await test_db_session.refresh(expense)
        return expense
    return _add
