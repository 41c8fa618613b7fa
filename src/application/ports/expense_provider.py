"""Port for reading shared expenses."""

from typing import Protocol

from src.domain.models import Expense


class ExpenseProviderPort(Protocol):
    """Port exposing read access to expenses."""

    def fetch_group_expenses(self, group_id: str) -> list[Expense]:
        """Return every expense recorded for the group."""


__all__ = ["ExpenseProviderPort"]
