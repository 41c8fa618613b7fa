"""SQLAlchemy-backed repository for settlements."""

from datetime import datetime
import uuid

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.settlement_repository import (
    SettlementProviderPort,
    SettlementSinkPort,
    SettlementStorePort,
)
from src.domain.errors import PersistenceError
from src.domain.models import Settlement, SettlementDraft, SettlementStatus
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.row_codecs import (
    decode_amount,
    decode_status,
    decode_timestamp,
    encode_timestamp,
)


_SETTLEMENT_COLUMNS = """
    id, from_user, to_user, amount, group_id, status,
    created_by, notes, created_at, updated_at
"""

SELECT_GROUP_SETTLEMENTS_SQL = text(
    f"""
    SELECT {_SETTLEMENT_COLUMNS}
    FROM settlements
    WHERE group_id = :group_id
    ORDER BY created_at DESC, id
    """
)

SELECT_USER_SETTLEMENTS_SQL = text(
    f"""
    SELECT {_SETTLEMENT_COLUMNS}
    FROM settlements
    WHERE from_user = :user_id OR to_user = :user_id
    ORDER BY created_at DESC, id
    """
)

SELECT_SETTLEMENT_SQL = text(
    f"""
    SELECT {_SETTLEMENT_COLUMNS}
    FROM settlements
    WHERE id = :settlement_id
    """
)

INSERT_SETTLEMENT_SQL = text(
    """
    INSERT INTO settlements (
        id,
        from_user,
        to_user,
        amount,
        group_id,
        status,
        created_by,
        notes,
        created_at,
        updated_at
    )
    VALUES (
        :id,
        :from_user,
        :to_user,
        :amount,
        :group_id,
        :status,
        :created_by,
        :notes,
        :created_at,
        :updated_at
    )
    """
)

UPDATE_SETTLEMENT_STATUS_SQL = text(
    """
    UPDATE settlements
    SET status = :status, updated_at = :updated_at
    WHERE id = :settlement_id
    """
)


class SqlAlchemySettlementRepository(
    SettlementProviderPort,
    SettlementSinkPort,
    SettlementStorePort,
):
    """Repository backed by SQLAlchemy for settlement records."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        logger=None,
        id_factory=None,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Optional callable returning new settlement ids.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))

    def fetch_group_settlements(self, group_id: str) -> list[Settlement]:
        settlements = self._fetch(
            SELECT_GROUP_SETTLEMENTS_SQL,
            {"group_id": group_id},
        )
        completed = sum(1 for s in settlements if s.is_completed)
        self._logger.debug(
            f"Fetched {len(settlements)} settlements for group {group_id} "
            f"({completed} completed)"
        )
        return settlements

    def fetch_user_settlements(self, user_id: str) -> list[Settlement]:
        return self._fetch(SELECT_USER_SETTLEMENTS_SQL, {"user_id": user_id})

    def fetch_settlement(self, settlement_id: str) -> Settlement | None:
        settlements = self._fetch(
            SELECT_SETTLEMENT_SQL,
            {"settlement_id": settlement_id},
        )
        return settlements[0] if settlements else None

    def add_settlement(self, draft: SettlementDraft) -> str:
        """Insert the settlement and return its new identifier.

        Raises:
            PersistenceError: If the insert fails.
        """
        settlement_id = self._id_factory()
        payload = {
            "id": settlement_id,
            "from_user": draft.from_user,
            "to_user": draft.to_user,
            "amount": str(draft.amount),
            "group_id": draft.group_id,
            "status": draft.status.value,
            "created_by": draft.created_by,
            "notes": draft.notes,
            "created_at": encode_timestamp(draft.created_at),
            "updated_at": encode_timestamp(draft.updated_at),
        }
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(INSERT_SETTLEMENT_SQL, payload)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Unable to insert settlement {draft.from_user} -> "
                f"{draft.to_user}: {exc}"
            ) from exc
        self._logger.info(
            f"Inserted settlement {settlement_id} into group {draft.group_id}"
        )
        return settlement_id

    def update_settlement_status(
        self,
        settlement_id: str,
        status: SettlementStatus,
        updated_at: datetime,
    ) -> None:
        """Store the new status of a settlement.

        Raises:
            PersistenceError: If the update fails or matches no row.
        """
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                result = conn.execute(
                    UPDATE_SETTLEMENT_STATUS_SQL,
                    {
                        "settlement_id": settlement_id,
                        "status": status.value,
                        "updated_at": encode_timestamp(updated_at),
                    },
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Unable to update settlement {settlement_id}: {exc}"
            ) from exc
        if result.rowcount == 0:
            raise PersistenceError(f"Settlement {settlement_id} not found")

    def _fetch(self, query, params: dict[str, str]) -> list[Settlement]:
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).all()
        return [self._to_settlement(row) for row in rows]

    @staticmethod
    def _to_settlement(row) -> Settlement:
        return Settlement(
            id=row.id,
            from_user=row.from_user,
            to_user=row.to_user,
            amount=decode_amount(row.amount, f"settlement {row.id}"),
            group_id=row.group_id,
            status=decode_status(row.status, row.id),
            created_by=row.created_by,
            notes=row.notes,
            created_at=decode_timestamp(row.created_at),
            updated_at=decode_timestamp(row.updated_at),
        )


__all__ = [
    "SqlAlchemySettlementRepository",
    "SELECT_GROUP_SETTLEMENTS_SQL",
    "SELECT_USER_SETTLEMENTS_SQL",
    "SELECT_SETTLEMENT_SQL",
    "INSERT_SETTLEMENT_SQL",
    "UPDATE_SETTLEMENT_STATUS_SQL",
]
