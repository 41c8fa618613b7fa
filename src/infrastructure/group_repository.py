"""SQLAlchemy-backed repository for groups."""

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.group_provider import GroupProviderPort
from src.domain.models import Group
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.row_codecs import decode_members


SELECT_GROUP_SQL = text(
    """
    SELECT id, name, members
    FROM groups
    WHERE id = :group_id
    """
)


class SqlAlchemyGroupRepository(GroupProviderPort):
    """Repository backed by SQLAlchemy for group membership."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def fetch_group(self, group_id: str) -> Group | None:
        """Return the group and its deduplicated members."""
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            row = conn.execute(SELECT_GROUP_SQL, {"group_id": group_id}).first()
        if row is None:
            return None
        return Group(
            id=row.id,
            name=row.name,
            members=decode_members(row.members, self._logger),
        )


__all__ = ["SqlAlchemyGroupRepository", "SELECT_GROUP_SQL"]
