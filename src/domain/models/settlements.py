"""Domain models for settlements between group members."""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum

from src.domain.errors import ValidationError


class SettlementStatus(str, Enum):
    """Lifecycle state of a settlement."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# completed and cancelled are terminal.
ALLOWED_TRANSITIONS: dict[SettlementStatus, frozenset[SettlementStatus]] = {
    SettlementStatus.PENDING: frozenset(
        {SettlementStatus.COMPLETED, SettlementStatus.CANCELLED}
    ),
    SettlementStatus.COMPLETED: frozenset(),
    SettlementStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class Settlement:
    """Recorded payment from a debtor to a creditor.

    Attributes:
        id: Settlement identifier.
        from_user: Member paying down a debt.
        to_user: Member receiving the payment.
        amount: Amount transferred.
        group_id: Group the settlement applies to.
        status: Lifecycle state; only completed settlements move balances.
        created_by: Member who recorded the settlement.
        notes: Free-form notes.
        created_at: Creation timestamp.
        updated_at: Last status change timestamp.
    """

    id: str
    from_user: str
    to_user: str
    amount: Decimal
    group_id: str
    status: SettlementStatus = SettlementStatus.PENDING
    created_by: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status is SettlementStatus.COMPLETED

    def can_transition_to(self, status: SettlementStatus) -> bool:
        """Return True when the status change is allowed."""
        return status in ALLOWED_TRANSITIONS[self.status]

    def transition_to(
        self,
        status: SettlementStatus,
        at: datetime | None = None,
    ) -> "Settlement":
        """Return a copy of the settlement in the new status.

        Args:
            status: Target status.
            at: Timestamp stored as updated_at.

        Returns:
            Settlement: New settlement record.

        Raises:
            ValidationError: If the transition is not allowed.
        """
        if not self.can_transition_to(status):
            raise ValidationError(
                f"Settlement {self.id} cannot move from "
                f"{self.status.value} to {status.value}"
            )
        return replace(self, status=status, updated_at=at or self.updated_at)


@dataclass(frozen=True)
class SettlementDraft:
    """Settlement waiting for an identifier from the settlement sink."""

    from_user: str
    to_user: str
    amount: Decimal
    group_id: str
    status: SettlementStatus
    created_by: str
    created_at: datetime
    updated_at: datetime
    notes: str | None = None

    def with_id(self, settlement_id: str) -> Settlement:
        """Return the persisted settlement for the assigned identifier."""
        return Settlement(
            id=settlement_id,
            from_user=self.from_user,
            to_user=self.to_user,
            amount=self.amount,
            group_id=self.group_id,
            status=self.status,
            created_by=self.created_by,
            notes=self.notes,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


__all__ = [
    "ALLOWED_TRANSITIONS",
    "SettlementStatus",
    "Settlement",
    "SettlementDraft",
]
