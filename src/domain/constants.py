"""Domain constants for balance and settlement computations."""

from decimal import Decimal

# Amounts closer than this are considered equal (one cent).
MONEY_TOLERANCE = Decimal("0.01")

DEFAULT_EXPENSE_CATEGORIES = (
    "Food & Drink",
    "Transport",
    "Entertainment",
    "Utilities",
    "Shopping",
    "Groceries",
    "Health",
    "Travel",
    "Education",
    "Home",
    "Other",
)

FALLBACK_CATEGORY = "Other"


__all__ = [
    "MONEY_TOLERANCE",
    "DEFAULT_EXPENSE_CATEGORIES",
    "FALLBACK_CATEGORY",
]
