"""In-memory ledger storage for local runs and tests."""

from dataclasses import replace
from datetime import datetime
import itertools

from src.application.ports.expense_provider import ExpenseProviderPort
from src.application.ports.group_provider import GroupProviderPort
from src.application.ports.settlement_repository import (
    SettlementProviderPort,
    SettlementSinkPort,
    SettlementStorePort,
)
from src.domain.errors import PersistenceError
from src.domain.models import (
    Expense,
    Group,
    Settlement,
    SettlementDraft,
    SettlementStatus,
)


class InMemoryLedgerRepository(
    GroupProviderPort,
    ExpenseProviderPort,
    SettlementProviderPort,
    SettlementSinkPort,
    SettlementStorePort,
):
    """Ledger repository holding groups, expenses and settlements in dicts."""

    def __init__(
        self,
        groups: list[Group] | None = None,
        expenses: list[Expense] | None = None,
        settlements: list[Settlement] | None = None,
    ) -> None:
        self._groups = {group.id: group for group in groups or []}
        self._expenses = list(expenses or [])
        self._settlements = {s.id: s for s in settlements or []}
        self._ids = itertools.count(1)

    def add_group(self, group: Group) -> None:
        self._groups[group.id] = group

    def add_expense(self, expense: Expense) -> None:
        self._expenses.append(expense)

    def fetch_group(self, group_id: str) -> Group | None:
        return self._groups.get(group_id)

    def fetch_group_expenses(self, group_id: str) -> list[Expense]:
        return [e for e in self._expenses if e.group_id == group_id]

    def fetch_group_settlements(self, group_id: str) -> list[Settlement]:
        return [
            s for s in self._settlements.values() if s.group_id == group_id
        ]

    def fetch_user_settlements(self, user_id: str) -> list[Settlement]:
        return [
            s
            for s in self._settlements.values()
            if user_id in (s.from_user, s.to_user)
        ]

    def fetch_settlement(self, settlement_id: str) -> Settlement | None:
        return self._settlements.get(settlement_id)

    def add_settlement(self, draft: SettlementDraft) -> str:
        settlement_id = f"settlement-{next(self._ids)}"
        while settlement_id in self._settlements:
            settlement_id = f"settlement-{next(self._ids)}"
        self._settlements[settlement_id] = draft.with_id(settlement_id)
        return settlement_id

    def update_settlement_status(
        self,
        settlement_id: str,
        status: SettlementStatus,
        updated_at: datetime,
    ) -> None:
        settlement = self._settlements.get(settlement_id)
        if settlement is None:
            raise PersistenceError(f"Settlement {settlement_id} not found")
        self._settlements[settlement_id] = replace(
            settlement,
            status=status,
            updated_at=updated_at,
        )


__all__ = ["InMemoryLedgerRepository"]
