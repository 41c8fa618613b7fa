"""Use case to complete or cancel a pending settlement."""

from collections.abc import Callable
from datetime import datetime, timezone

from src.application.ports.balance_cache import BalanceCachePort
from src.application.ports.settlement_repository import SettlementStorePort
from src.domain.errors import ValidationError
from src.domain.models import Settlement, SettlementStatus
from src.infrastructure.logging.logger import get_app_logger


class UpdateSettlementStatusUseCase:
    """Move a settlement through its status lifecycle.

    Only pending settlements can change status; completed and cancelled
    settlements are final.
    """

    def __init__(
        self,
        settlement_store: SettlementStorePort,
        cache: BalanceCachePort | None = None,
        logger=None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = settlement_store
        self._cache = cache
        self._logger = logger or get_app_logger()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(
        self,
        settlement_id: str,
        status: SettlementStatus | str,
    ) -> Settlement:
        """Apply the status change and return the updated settlement.

        Args:
            settlement_id: Identifier of the settlement.
            status: Target status.

        Returns:
            Settlement: Settlement in its new status.

        Raises:
            ValidationError: If the settlement does not exist, the status is
                unknown, or the transition is not allowed.
            PersistenceError: If the new status cannot be stored.
        """
        target = self._resolve_status(status)
        settlement = self._store.fetch_settlement(settlement_id)
        if settlement is None:
            raise ValidationError(f"Settlement {settlement_id} not found")

        updated = settlement.transition_to(target, at=self._clock())
        self._store.update_settlement_status(
            settlement_id,
            updated.status,
            updated.updated_at,
        )
        if self._cache is not None:
            self._cache.invalidate(updated.group_id)

        self._logger.info(
            f"Settlement {settlement_id} moved from {settlement.status.value} "
            f"to {updated.status.value}"
        )
        return updated

    @staticmethod
    def _resolve_status(status: SettlementStatus | str) -> SettlementStatus:
        if isinstance(status, SettlementStatus):
            return status
        try:
            return SettlementStatus(str(status).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown settlement status: {status!r}") from exc


__all__ = ["UpdateSettlementStatusUseCase"]
