"""Use case to list the settlements a user paid or received."""

from dataclasses import dataclass
from datetime import datetime, timezone

from src.application.ports.settlement_repository import SettlementProviderPort
from src.domain.errors import DependencyError, LedgerError
from src.domain.models import Settlement


PAID = "paid"
RECEIVED = "received"


@dataclass(frozen=True)
class UserSettlement:
    """Settlement seen from one user's side.

    Attributes:
        settlement: Underlying settlement record.
        direction: ``paid`` when the user is the payer, else ``received``.
    """

    settlement: Settlement
    direction: str


class GetUserSettlementsUseCase:
    """Fetch a user's settlement history, newest first."""

    def __init__(self, settlement_provider: SettlementProviderPort) -> None:
        """Initialize the use case with its required dependencies."""
        self._settlement_provider = settlement_provider

    def execute(self, user_id: str) -> list[UserSettlement]:
        """Return every settlement involving the user."""
        try:
            settlements = self._settlement_provider.fetch_user_settlements(
                user_id
            )
        except LedgerError:
            raise
        except Exception as exc:
            raise DependencyError(
                f"Unable to load settlements of user {user_id}: {exc}"
            ) from exc

        involved = [
            settlement
            for settlement in settlements
            if user_id in (settlement.from_user, settlement.to_user)
        ]
        involved.sort(key=_created_at, reverse=True)
        return [
            UserSettlement(
                settlement=settlement,
                direction=PAID if settlement.from_user == user_id else RECEIVED,
            )
            for settlement in involved
        ]


def _created_at(settlement: Settlement) -> datetime:
    created_at = settlement.created_at
    if created_at is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if created_at.tzinfo is None:
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


__all__ = [
    "PAID",
    "RECEIVED",
    "UserSettlement",
    "GetUserSettlementsUseCase",
]
