"""Tests for the SQLAlchemy repositories against an in-memory database."""

from datetime import datetime, timezone
from decimal import Decimal
import json
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from src.application.use_cases.get_group_balances import (
    GetGroupBalancesUseCase,
)
from src.application.use_cases.get_settlement_plan import (
    GetSettlementPlanUseCase,
)
from src.application.use_cases.record_settlements import (
    RecordSettlementsUseCase,
    SettlementRequest,
)
from src.domain.errors import PersistenceError
from src.domain.models import SettlementDraft, SettlementStatus, SplitType
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.expense_repository import SqlAlchemyExpenseRepository
from src.infrastructure.group_repository import SqlAlchemyGroupRepository
from src.infrastructure.schema import ensure_schema
from src.infrastructure.settlement_repository import (
    SqlAlchemySettlementRepository,
)


NOW = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    ensure_schema(engine)
    with engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO groups (id, name, members) "
                "VALUES (:id, :name, :members)"
            ),
            {
                "id": "g1",
                "name": "Trip",
                "members": json.dumps(["A", "B", "C", "B"]),
            },
        )
        conn.execute(
            text(
                "INSERT INTO expenses (id, title, amount, paid_by, "
                "split_type, splits, group_id, is_personal, category, date) "
                "VALUES (:id, :title, :amount, :paid_by, :split_type, "
                ":splits, :group_id, :is_personal, :category, :date)"
            ),
            [
                {
                    "id": "e1",
                    "title": "Dinner",
                    "amount": "90",
                    "paid_by": "A",
                    "split_type": "equal",
                    "splits": None,
                    "group_id": "g1",
                    "is_personal": False,
                    "category": json.dumps({"name": "Food"}),
                    "date": "2024-05-01",
                },
                {
                    "id": "e2",
                    "title": "Taxi",
                    "amount": "20",
                    "paid_by": "B",
                    "split_type": "custom",
                    "splits": json.dumps({"B": 5, "C": 15}),
                    "group_id": "g1",
                    "is_personal": False,
                    "category": "Transport",
                    "date": "2024-05-02",
                },
            ],
        )
    yield engine
    engine.dispose()


@pytest.fixture
def db_port(engine):
    return SqlAlchemyDatabaseEngineAdapter(engine)


def _draft(**overrides) -> SettlementDraft:
    values = {
        "from_user": "B",
        "to_user": "A",
        "amount": Decimal("30.00"),
        "group_id": "g1",
        "status": SettlementStatus.COMPLETED,
        "created_by": "B",
        "created_at": NOW,
        "updated_at": NOW,
        "notes": "Settlement payment",
    }
    values.update(overrides)
    return SettlementDraft(**values)


def test_group_repository_decodes_members(db_port) -> None:
    logger = MagicMock()
    repository = SqlAlchemyGroupRepository(db_port, logger=logger)

    group = repository.fetch_group("g1")

    assert group.members == ("A", "B", "C")
    assert group.name == "Trip"
    assert repository.fetch_group("missing") is None
    logger.warning.assert_called_once()


def test_expense_repository_decodes_rows(db_port) -> None:
    repository = SqlAlchemyExpenseRepository(db_port, logger=MagicMock())

    expenses = {e.id: e for e in repository.fetch_group_expenses("g1")}

    assert expenses["e1"].split_type is SplitType.EQUAL
    assert expenses["e1"].amount == Decimal("90")
    assert expenses["e1"].category == "Food"
    assert expenses["e2"].split_type is SplitType.CUSTOM
    assert expenses["e2"].splits == {"B": 5, "C": 15}
    assert expenses["e2"].category == "Transport"
    assert expenses["e2"].date == datetime(2024, 5, 2)
    assert repository.fetch_group_expenses("other") == []


def test_settlement_repository_round_trip(db_port) -> None:
    repository = SqlAlchemySettlementRepository(
        db_port,
        logger=MagicMock(),
        id_factory=lambda: "s1",
    )

    settlement_id = repository.add_settlement(_draft())
    stored = repository.fetch_settlement(settlement_id)

    assert settlement_id == "s1"
    assert stored.from_user == "B"
    assert stored.to_user == "A"
    assert stored.amount == Decimal("30")
    assert stored.status is SettlementStatus.COMPLETED
    assert stored.created_at == NOW
    assert stored.notes == "Settlement payment"
    assert [s.id for s in repository.fetch_group_settlements("g1")] == ["s1"]
    assert [s.id for s in repository.fetch_user_settlements("A")] == ["s1"]
    assert repository.fetch_user_settlements("C") == []
    assert repository.fetch_settlement("missing") is None


def test_settlement_status_update(db_port) -> None:
    repository = SqlAlchemySettlementRepository(
        db_port,
        logger=MagicMock(),
        id_factory=lambda: "s1",
    )
    repository.add_settlement(_draft(status=SettlementStatus.PENDING))
    later = datetime(2024, 6, 2, tzinfo=timezone.utc)

    repository.update_settlement_status("s1", SettlementStatus.CANCELLED, later)

    stored = repository.fetch_settlement("s1")
    assert stored.status is SettlementStatus.CANCELLED
    assert stored.updated_at == later


def test_status_update_of_unknown_settlement_raises(db_port) -> None:
    repository = SqlAlchemySettlementRepository(db_port, logger=MagicMock())

    with pytest.raises(PersistenceError):
        repository.update_settlement_status(
            "missing",
            SettlementStatus.COMPLETED,
            NOW,
        )


def test_insert_failure_is_raised_as_persistence_error(engine) -> None:
    with engine.begin() as conn:
        conn.exec_driver_sql("DROP TABLE settlements")
    repository = SqlAlchemySettlementRepository(
        SqlAlchemyDatabaseEngineAdapter(engine),
        logger=MagicMock(),
    )

    with pytest.raises(PersistenceError) as excinfo:
        repository.add_settlement(_draft())

    assert isinstance(excinfo.value.__cause__, OperationalError)


def test_recorded_settlements_flow_into_the_plan(db_port) -> None:
    """Recording the planned payments leaves the group settled."""
    settlements = SqlAlchemySettlementRepository(db_port, logger=MagicMock())
    balances = GetGroupBalancesUseCase(
        group_provider=SqlAlchemyGroupRepository(db_port, logger=MagicMock()),
        expense_provider=SqlAlchemyExpenseRepository(
            db_port,
            logger=MagicMock(),
        ),
        settlement_provider=settlements,
        logger=MagicMock(),
    )
    planner = GetSettlementPlanUseCase(balances, logger=MagicMock())

    plan = planner.execute("g1")
    result = RecordSettlementsUseCase(
        settlements,
        logger=MagicMock(),
        clock=lambda: NOW,
    ).execute(
        [SettlementRequest.from_transaction(t, "g1") for t in plan.transactions],
        acting_user="A",
    )

    assert plan.balances == {
        "A": Decimal("60"),
        "B": Decimal("-15"),
        "C": Decimal("-45"),
    }
    assert result.all_succeeded
    assert planner.execute("g1").is_settled
