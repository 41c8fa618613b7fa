"""Factory helpers to select the ledger storage backend."""

from dataclasses import dataclass
import os

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.expense_provider import ExpenseProviderPort
from src.application.ports.group_provider import GroupProviderPort
from src.infrastructure.expense_repository import SqlAlchemyExpenseRepository
from src.infrastructure.group_repository import SqlAlchemyGroupRepository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.memory_repository import InMemoryLedgerRepository
from src.infrastructure.settlement_repository import (
    SqlAlchemySettlementRepository,
)


@dataclass(frozen=True)
class LedgerRepositories:
    """Repositories serving one storage backend.

    Attributes:
        groups: Group membership provider.
        expenses: Expense provider.
        settlements: Settlement provider, sink and store.
    """

    groups: GroupProviderPort
    expenses: ExpenseProviderPort
    settlements: SqlAlchemySettlementRepository | InMemoryLedgerRepository


def create_ledger_repositories(
    db_port: DatabaseEnginePort | None,
    logger=None,
    backend: str | None = None,
) -> LedgerRepositories:
    """Return ledger repositories based on configuration.

    Args:
        db_port: Port providing access to the ledger engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.
        backend: Optional backend override (sqlalchemy or memory).

    Returns:
        LedgerRepositories: Concrete repository implementations.
    """
    resolved_logger = logger or get_app_logger()
    selected_backend = (
        backend or os.getenv("LEDGER_BACKEND", "sqlalchemy")
    ).strip().lower()

    if selected_backend == "sqlalchemy":
        if db_port is None:
            raise RuntimeError("SQLAlchemy backend requires a database port.")
        return LedgerRepositories(
            groups=SqlAlchemyGroupRepository(db_port, logger=resolved_logger),
            expenses=SqlAlchemyExpenseRepository(
                db_port,
                logger=resolved_logger,
            ),
            settlements=SqlAlchemySettlementRepository(
                db_port,
                logger=resolved_logger,
            ),
        )

    if selected_backend == "memory":
        resolved_logger.warning(
            "Using the in-memory ledger backend; data is not persisted"
        )
        repository = InMemoryLedgerRepository()
        return LedgerRepositories(
            groups=repository,
            expenses=repository,
            settlements=repository,
        )

    raise ValueError(
        "Unsupported ledger backend: "
        f"{selected_backend}. Expected sqlalchemy or memory."
    )


__all__ = ["LedgerRepositories", "create_ledger_repositories"]
