"""Use case to record selected plan entries as completed settlements.

Each entry is written independently: a failed write is reported for that
entry only and never rolls back or skips its siblings.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from src.application.ports.balance_cache import BalanceCachePort
from src.application.ports.settlement_repository import SettlementSinkPort
from src.domain.errors import LedgerError, PersistenceError, ValidationError
from src.domain.models import (
    PlannedTransaction,
    Settlement,
    SettlementDraft,
    SettlementStatus,
)
from src.domain.services.validation import resolve_amount
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import quantize_money


DEFAULT_SETTLEMENT_NOTE = "Settled from the group settlement plan"


@dataclass(frozen=True)
class SettlementRequest:
    """Plan entry selected by a user for recording."""

    payer_id: str
    payee_id: str
    amount: Decimal
    group_id: str
    notes: str | None = None

    @classmethod
    def from_transaction(
        cls,
        transaction: PlannedTransaction,
        group_id: str,
        notes: str | None = None,
    ) -> "SettlementRequest":
        """Build a request from a settlement plan transaction."""
        return cls(
            payer_id=transaction.payer_id,
            payee_id=transaction.payee_id,
            amount=transaction.amount,
            group_id=group_id,
            notes=notes,
        )


@dataclass(frozen=True)
class SettlementOutcome:
    """Result of recording a single entry."""

    request: SettlementRequest
    settlement: Settlement | None = None
    error: PersistenceError | None = None

    @property
    def succeeded(self) -> bool:
        return self.settlement is not None


@dataclass(frozen=True)
class RecordSettlementsResult:
    """Per-entry outcomes of a recording batch.

    Attributes:
        outcomes: One outcome per request, in request order.
    """

    outcomes: list[SettlementOutcome] = field(default_factory=list)

    @property
    def recorded(self) -> list[Settlement]:
        return [o.settlement for o in self.outcomes if o.settlement is not None]

    @property
    def failed(self) -> list[SettlementOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed


class RecordSettlementsUseCase:
    """Persist selected plan entries as completed settlements."""

    def __init__(
        self,
        settlement_sink: SettlementSinkPort,
        cache: BalanceCachePort | None = None,
        logger=None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            settlement_sink: Port persisting new settlements.
            cache: Optional balance cache invalidated after writes.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Optional callable returning the current time.
        """
        self._sink = settlement_sink
        self._cache = cache
        self._logger = logger or get_app_logger()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(
        self,
        requests: Sequence[SettlementRequest],
        acting_user: str,
    ) -> RecordSettlementsResult:
        """Record every request as a completed settlement.

        Args:
            requests: Plan entries selected by the user.
            acting_user: Identifier of the user recording the settlements.

        Returns:
            RecordSettlementsResult: Outcome of each request.

        Raises:
            ValidationError: If the batch is empty or any entry is malformed.
                Nothing is written in that case.
        """
        drafts = self._build_drafts(requests, acting_user)

        outcomes = []
        touched_groups: list[str] = []
        for request, draft in zip(requests, drafts):
            outcome = self._record(request, draft)
            outcomes.append(outcome)
            if outcome.succeeded and draft.group_id not in touched_groups:
                touched_groups.append(draft.group_id)

        if self._cache is not None:
            for group_id in touched_groups:
                self._cache.invalidate(group_id)

        result = RecordSettlementsResult(outcomes=outcomes)
        self._logger.info(
            f"Recorded {len(result.recorded)} of {len(outcomes)} settlements "
            f"for user {acting_user}"
        )
        return result

    def _build_drafts(
        self,
        requests: Sequence[SettlementRequest],
        acting_user: str,
    ) -> list[SettlementDraft]:
        if not acting_user:
            raise ValidationError("An acting user is required")
        if not requests:
            raise ValidationError("No settlements selected")

        now = self._clock()
        drafts = []
        for index, request in enumerate(requests):
            if not request.payer_id or not request.payee_id:
                raise ValidationError(f"Entry {index} is missing a member")
            if request.payer_id == request.payee_id:
                raise ValidationError(
                    f"Entry {index} pays {request.payer_id} to themselves"
                )
            if not request.group_id:
                raise ValidationError(f"Entry {index} is missing a group")
            amount = quantize_money(resolve_amount(request.amount))
            if amount <= 0:
                raise ValidationError(
                    f"Entry {index} amount must be positive: {request.amount}"
                )
            drafts.append(
                SettlementDraft(
                    from_user=request.payer_id,
                    to_user=request.payee_id,
                    amount=amount,
                    group_id=request.group_id,
                    status=SettlementStatus.COMPLETED,
                    created_by=acting_user,
                    created_at=now,
                    updated_at=now,
                    notes=request.notes or DEFAULT_SETTLEMENT_NOTE,
                )
            )
        return drafts

    def _record(
        self,
        request: SettlementRequest,
        draft: SettlementDraft,
    ) -> SettlementOutcome:
        try:
            settlement_id = self._sink.add_settlement(draft)
        except PersistenceError as exc:
            error = exc
        except LedgerError:
            raise
        except Exception as exc:
            error = PersistenceError(f"Unable to store settlement: {exc}")
            error.__cause__ = exc
        else:
            return SettlementOutcome(
                request=request,
                settlement=draft.with_id(settlement_id),
            )

        self._logger.error(
            f"Failed to record settlement {draft.from_user} -> "
            f"{draft.to_user} ({draft.amount}) in group {draft.group_id}: "
            f"{error}"
        )
        return SettlementOutcome(request=request, error=error)


__all__ = [
    "DEFAULT_SETTLEMENT_NOTE",
    "SettlementRequest",
    "SettlementOutcome",
    "RecordSettlementsResult",
    "RecordSettlementsUseCase",
]
