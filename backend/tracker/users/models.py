from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Integer, String, DateTime, Boolean, Numeric, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func, expression

from tracker.db.main import Base

if TYPE_CHECKING:
    from tracker.expenses.models import Expense

class User(Base):
    """
    User model holding the profile fields the tracker needs.

    Attributes:
        id: Primary key (auto-incremented)
        email: Login e-mail (not nullable, unique)
        first_name: Display name (nullable)
        monthly_budget: Monthly spending ceiling (nullable, default applied by reports)
        weekly_budget: Weekly spending ceiling (nullable, derived from monthly_budget when unset)
        is_active: User activity status (not nullable, default true)
        created_at: Timestamp of creation (not nullable, server default now())
        updated_at: Timestamp of last update (not nullable, server default now(), onupdate=now())
        expenses: List of expenses (back-populates 'user')
    """
    __tablename__ = 'users'
    
    __table_args__ = (
        CheckConstraint('monthly_budget IS NULL OR monthly_budget >= 0', name='check_monthly_budget_non_negative'),
        CheckConstraint('weekly_budget IS NULL OR weekly_budget >= 0', name='check_weekly_budget_non_negative'),
        {'comment': 'User accounts; credentials are managed by the auth service'}
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(100))
    monthly_budget: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    weekly_budget: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=expression.true())
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
    expenses: Mapped[List['Expense']] = relationship('Expense', back_populates='user', cascade='all, delete-orphan')
