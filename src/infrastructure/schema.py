"""Table definitions for the ledger database."""

from sqlalchemy.engine import Engine


CREATE_GROUPS_SQL = """
CREATE TABLE IF NOT EXISTS groups (
    id TEXT PRIMARY KEY,
    name TEXT,
    members TEXT NOT NULL
)
"""

CREATE_EXPENSES_SQL = """
CREATE TABLE IF NOT EXISTS expenses (
    id TEXT PRIMARY KEY,
    title TEXT,
    amount NUMERIC NOT NULL,
    paid_by TEXT NOT NULL,
    split_type TEXT NOT NULL DEFAULT 'equal',
    splits TEXT,
    group_id TEXT,
    is_personal BOOLEAN NOT NULL DEFAULT FALSE,
    category TEXT,
    date TEXT,
    notes TEXT
)
"""

CREATE_SETTLEMENTS_SQL = """
CREATE TABLE IF NOT EXISTS settlements (
    id TEXT PRIMARY KEY,
    from_user TEXT NOT NULL,
    to_user TEXT NOT NULL,
    amount NUMERIC NOT NULL,
    group_id TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'pending',
    created_by TEXT,
    notes TEXT,
    created_at TEXT,
    updated_at TEXT
)
"""

SCHEMA_STATEMENTS = (
    CREATE_GROUPS_SQL,
    CREATE_EXPENSES_SQL,
    CREATE_SETTLEMENTS_SQL,
)


def ensure_schema(engine: Engine) -> None:
    """Create the ledger tables if they do not exist.

    Args:
        engine: SQLAlchemy engine for the ledger database.
    """
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.exec_driver_sql(statement)


__all__ = [
    "CREATE_GROUPS_SQL",
    "CREATE_EXPENSES_SQL",
    "CREATE_SETTLEMENTS_SQL",
    "SCHEMA_STATEMENTS",
    "ensure_schema",
]
