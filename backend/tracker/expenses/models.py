from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Integer, String, DateTime, ForeignKey, Index, CheckConstraint, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from tracker.categories.models import ExpenseCategory
from tracker.db.main import Base

if TYPE_CHECKING:
    from tracker.users.models import User


class Expense(Base):
    """
    Expense model representing a single logged purchase.

    The category is stored as plain text so that values outside the current
    category set survive; reports read unknown values as "Other".
    """
    __tablename__ = 'expenses'

    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_non_negative'),
        Index('idx_expenses_user_id_date', 'user_id', 'date'),
        {'comment': 'Expenses logged by users'}
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default=ExpenseCategory.OTHER.value, server_default=ExpenseCategory.OTHER.value)
    date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
    user: Mapped['User'] = relationship('User', back_populates='expenses')
