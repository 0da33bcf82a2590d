from __future__ import annotations

import enum
from typing import Any, NamedTuple


class ExpenseCategory(str, enum.Enum):
    """
    Fixed set of expense categories.

    Declaration order is the order categories are presented in.
    """
    FOOD = "Food"
    GROCERIES = "Groceries"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    BILLS = "Bills"
    EDUCATION = "Education"
    TRAVEL = "Travel"
    UTILITIES = "Utilities"
    RENT = "Rent"
    INSURANCE = "Insurance"
    FITNESS = "Fitness"
    GIFTS = "Gifts"
    PERSONAL_CARE = "Personal Care"
    PET_CARE = "Pet Care"
    HOME_MAINTENANCE = "Home Maintenance"
    SUBSCRIPTIONS = "Subscriptions"
    DINING_OUT = "Dining Out"
    INVESTMENT = "Investment"
    SAVINGS = "Savings"
    CHARITY = "Charity"
    OTHER = "Other"

    @classmethod
    def coerce(cls, value: Any) -> ExpenseCategory:
        """
        Map a raw stored value onto the category set.

        Unknown, empty and non-string values fall back to OTHER.

        Examples:
            >>> ExpenseCategory.coerce("Food")
            <ExpenseCategory.FOOD: 'Food'>
            >>> ExpenseCategory.coerce("Crypto")
            <ExpenseCategory.OTHER: 'Other'>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip())
            except ValueError:
                return cls.OTHER
        return cls.OTHER


class CategoryStyle(NamedTuple):
    icon: str
    color: str


CATEGORY_STYLES: dict[ExpenseCategory, CategoryStyle] = {
    ExpenseCategory.FOOD: CategoryStyle("🍔", "orange-500"),
    ExpenseCategory.GROCERIES: CategoryStyle("🛒", "yellow-500"),
    ExpenseCategory.TRANSPORT: CategoryStyle("🚗", "blue-500"),
    ExpenseCategory.ENTERTAINMENT: CategoryStyle("🎬", "purple-500"),
    ExpenseCategory.SHOPPING: CategoryStyle("🛍️", "pink-500"),
    ExpenseCategory.HEALTH: CategoryStyle("🏥", "green-500"),
    ExpenseCategory.BILLS: CategoryStyle("📄", "red-500"),
    ExpenseCategory.EDUCATION: CategoryStyle("📚", "indigo-500"),
    ExpenseCategory.TRAVEL: CategoryStyle("✈️", "cyan-500"),
    ExpenseCategory.UTILITIES: CategoryStyle("💡", "amber-500"),
    ExpenseCategory.RENT: CategoryStyle("🏠", "rose-500"),
    ExpenseCategory.INSURANCE: CategoryStyle("🛡️", "teal-500"),
    ExpenseCategory.FITNESS: CategoryStyle("💪", "lime-500"),
    ExpenseCategory.GIFTS: CategoryStyle("🎁", "fuchsia-500"),
    ExpenseCategory.PERSONAL_CARE: CategoryStyle("💅", "violet-500"),
    ExpenseCategory.PET_CARE: CategoryStyle("🐾", "emerald-500"),
    ExpenseCategory.HOME_MAINTENANCE: CategoryStyle("🔧", "stone-500"),
    ExpenseCategory.SUBSCRIPTIONS: CategoryStyle("📱", "sky-500"),
    ExpenseCategory.DINING_OUT: CategoryStyle("🍽️", "orange-600"),
    ExpenseCategory.INVESTMENT: CategoryStyle("📈", "green-600"),
    ExpenseCategory.SAVINGS: CategoryStyle("💰", "emerald-600"),
    ExpenseCategory.CHARITY: CategoryStyle("❤️", "red-400"),
    ExpenseCategory.OTHER: CategoryStyle("📦", "gray-500"),
}


def style_for(category: Any) -> CategoryStyle:
    """Presentation lookup for any raw category value."""
    return CATEGORY_STYLES[ExpenseCategory.coerce(category)]
