"""SQLAlchemy-backed repository for expenses."""

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.expense_provider import ExpenseProviderPort
from src.domain.models import Expense
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.row_codecs import (
    decode_amount,
    decode_category,
    decode_split_type,
    decode_splits,
    decode_timestamp,
)


SELECT_GROUP_EXPENSES_SQL = text(
    """
    SELECT id, title, amount, paid_by, split_type, splits, group_id,
           is_personal, category, date, notes
    FROM expenses
    WHERE group_id = :group_id
    ORDER BY date DESC, id
    """
)


class SqlAlchemyExpenseRepository(ExpenseProviderPort):
    """Repository backed by SQLAlchemy for shared expenses."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def fetch_group_expenses(self, group_id: str) -> list[Expense]:
        """Return the group's expenses with decoded splits and categories."""
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_GROUP_EXPENSES_SQL,
                {"group_id": group_id},
            ).all()
        expenses = [self._to_expense(row) for row in rows]
        self._logger.debug(
            f"Fetched {len(expenses)} expenses for group {group_id}"
        )
        return expenses

    def _to_expense(self, row) -> Expense:
        return Expense(
            id=row.id,
            amount=decode_amount(row.amount, f"expense {row.id}"),
            paid_by=row.paid_by,
            split_type=decode_split_type(row.split_type, row.id),
            splits=decode_splits(row.splits, self._logger, row.id),
            group_id=row.group_id,
            is_personal=bool(row.is_personal),
            title=row.title,
            category=decode_category(row.category),
            date=decode_timestamp(row.date),
            notes=row.notes,
        )


__all__ = ["SqlAlchemyExpenseRepository", "SELECT_GROUP_EXPENSES_SQL"]
