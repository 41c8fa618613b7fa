"""Tests for the GetSettlementPlanUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.get_group_balances import (
    GetGroupBalancesUseCase,
)
from src.application.use_cases.get_settlement_plan import (
    GetSettlementPlanUseCase,
)
from src.domain.errors import DependencyError
from src.domain.models import (
    Expense,
    Group,
    GroupBalances,
    PlannedTransaction,
    SplitType,
)
from src.infrastructure.memory_repository import InMemoryLedgerRepository


def _plan_use_case(repository) -> GetSettlementPlanUseCase:
    balances = GetGroupBalancesUseCase(
        group_provider=repository,
        expense_provider=repository,
        settlement_provider=repository,
        logger=MagicMock(),
    )
    return GetSettlementPlanUseCase(balances, logger=MagicMock())


def test_execute_plans_payments_for_group() -> None:
    repository = InMemoryLedgerRepository(
        groups=[Group(id="g1", members=("A", "B", "C"))],
        expenses=[
            Expense(
                id="e1",
                amount=Decimal("100"),
                paid_by="A",
                split_type=SplitType.CUSTOM,
                splits={"A": "50", "B": "30", "C": "20"},
                group_id="g1",
            )
        ],
    )

    plan = _plan_use_case(repository).execute("g1")

    assert plan.group_id == "g1"
    assert plan.balances == {
        "A": Decimal("50"),
        "B": Decimal("-30"),
        "C": Decimal("-20"),
    }
    assert plan.transactions == [
        PlannedTransaction("B", "A", Decimal("30.00")),
        PlannedTransaction("C", "A", Decimal("20.00")),
    ]


def test_execute_returns_empty_plan_for_settled_group() -> None:
    repository = InMemoryLedgerRepository(
        groups=[Group(id="g1", members=("A", "B"))]
    )

    plan = _plan_use_case(repository).execute("g1")

    assert plan.is_settled


def test_execute_propagates_dependency_errors() -> None:
    balances_use_case = MagicMock()
    balances_use_case.execute.side_effect = DependencyError("boom")
    use_case = GetSettlementPlanUseCase(balances_use_case, logger=MagicMock())

    with pytest.raises(DependencyError):
        use_case.execute("g1")


def test_execute_is_deterministic() -> None:
    balances_use_case = MagicMock()
    balances_use_case.execute.return_value = GroupBalances(
        group_id="g1",
        balances={"A": Decimal("20"), "B": Decimal("20"), "C": Decimal("-40")},
    )
    use_case = GetSettlementPlanUseCase(balances_use_case, logger=MagicMock())

    assert use_case.execute("g1") == use_case.execute("g1")
