"""Domain models for shared expenses."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class SplitType(str, Enum):
    """Policy used to divide an expense between members."""

    EQUAL = "equal"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Expense:
    """Shared cost paid by one member.

    Attributes:
        id: Expense identifier.
        amount: Total amount paid.
        paid_by: Member who paid.
        split_type: Split policy.
        splits: Member shares for custom splits, None otherwise.
        group_id: Owning group, None for personal expenses.
        is_personal: True when the expense is not shared.
        title: Short description.
        category: Category name.
        date: Date the expense occurred.
        notes: Free-form notes.
    """

    id: str
    amount: Decimal
    paid_by: str
    split_type: SplitType = SplitType.EQUAL
    splits: Mapping[str, Decimal] | None = None
    group_id: str | None = None
    is_personal: bool = False
    title: str | None = None
    category: str | None = None
    date: datetime | None = None
    notes: str | None = None

    def belongs_to(self, group_id: str) -> bool:
        """Return True when the expense is a shared expense of the group."""
        return not self.is_personal and self.group_id == group_id


__all__ = ["SplitType", "Expense"]
