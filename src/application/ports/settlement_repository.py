"""Ports for reading and writing settlements."""

from datetime import datetime
from typing import Protocol

from src.domain.models import Settlement, SettlementDraft, SettlementStatus


class SettlementProviderPort(Protocol):
    """Port exposing read access to settlements."""

    def fetch_group_settlements(self, group_id: str) -> list[Settlement]:
        """Return every settlement recorded for the group."""

    def fetch_user_settlements(self, user_id: str) -> list[Settlement]:
        """Return settlements where the user pays or receives."""


class SettlementSinkPort(Protocol):
    """Port accepting new settlement records."""

    def add_settlement(self, draft: SettlementDraft) -> str:
        """Persist the draft and return the assigned identifier.

        Raises:
            PersistenceError: If the record cannot be written.
        """


class SettlementStorePort(Protocol):
    """Port for reading and updating a single settlement."""

    def fetch_settlement(self, settlement_id: str) -> Settlement | None:
        """Return the settlement, or None when it does not exist."""

    def update_settlement_status(
        self,
        settlement_id: str,
        status: SettlementStatus,
        updated_at: datetime,
    ) -> None:
        """Persist a new status for the settlement.

        Raises:
            PersistenceError: If the record cannot be written.
        """


__all__ = [
    "SettlementProviderPort",
    "SettlementSinkPort",
    "SettlementStorePort",
]
