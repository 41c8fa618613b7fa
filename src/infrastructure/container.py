"""Composition root for wiring infrastructure adapters."""

from functools import lru_cache

from src.application.ports.balance_cache import BalanceCachePort
from src.application.ports.database import DatabaseEnginePort
from src.application.use_cases.get_group_balances import (
    GetGroupBalancesUseCase,
)
from src.application.use_cases.get_settlement_plan import (
    GetSettlementPlanUseCase,
)
from src.application.use_cases.get_user_settlements import (
    GetUserSettlementsUseCase,
)
from src.application.use_cases.record_settlements import (
    RecordSettlementsUseCase,
)
from src.application.use_cases.update_settlement_status import (
    UpdateSettlementStatusUseCase,
)
from src.infrastructure.balance_cache import InMemoryBalanceCache
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.repository_factory import (
    LedgerRepositories,
    create_ledger_repositories,
)
from src.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


@lru_cache(maxsize=1)
def build_balance_cache() -> BalanceCachePort:
    """Return the process-wide balance cache."""
    return InMemoryBalanceCache()


@lru_cache(maxsize=1)
def build_memory_repositories() -> LedgerRepositories:
    """Return the process-wide in-memory repositories."""
    return create_ledger_repositories(
        None,
        logger=get_app_logger(),
        backend="memory",
    )


def build_repositories(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> LedgerRepositories:
    """Return the configured ledger repositories.

    The memory backend is shared by every caller so writes made through one
    use case are visible to the others.
    """
    resolved_settings = settings or LedgerSettings.from_env()
    if resolved_settings.backend == "memory":
        return build_memory_repositories()
    resolved_db = None
    if resolved_settings.backend == "sqlalchemy":
        resolved_db = db_port or build_database_adapter()
    return create_ledger_repositories(
        resolved_db,
        logger=get_app_logger(),
        backend=resolved_settings.backend,
    )


def _resolve_cache(settings: LedgerSettings) -> BalanceCachePort | None:
    return build_balance_cache() if settings.balance_cache else None


def build_get_group_balances_use_case(
    repositories: LedgerRepositories | None = None,
    settings: LedgerSettings | None = None,
) -> GetGroupBalancesUseCase:
    """Return the balance aggregation use case."""
    resolved_settings = settings or LedgerSettings.from_env()
    resolved_repos = repositories or build_repositories(
        settings=resolved_settings
    )
    return GetGroupBalancesUseCase(
        group_provider=resolved_repos.groups,
        expense_provider=resolved_repos.expenses,
        settlement_provider=resolved_repos.settlements,
        cache=_resolve_cache(resolved_settings),
        logger=get_app_logger(),
        strict_membership=resolved_settings.strict_membership,
    )


def build_get_settlement_plan_use_case(
    repositories: LedgerRepositories | None = None,
    settings: LedgerSettings | None = None,
) -> GetSettlementPlanUseCase:
    """Return the settlement planning use case."""
    return GetSettlementPlanUseCase(
        balances_use_case=build_get_group_balances_use_case(
            repositories,
            settings,
        ),
        logger=get_app_logger(),
    )


def build_record_settlements_use_case(
    repositories: LedgerRepositories | None = None,
    settings: LedgerSettings | None = None,
) -> RecordSettlementsUseCase:
    """Return the settlement recording use case."""
    resolved_settings = settings or LedgerSettings.from_env()
    resolved_repos = repositories or build_repositories(
        settings=resolved_settings
    )
    return RecordSettlementsUseCase(
        settlement_sink=resolved_repos.settlements,
        cache=_resolve_cache(resolved_settings),
        logger=get_app_logger(),
    )


def build_update_settlement_status_use_case(
    repositories: LedgerRepositories | None = None,
    settings: LedgerSettings | None = None,
) -> UpdateSettlementStatusUseCase:
    """Return the settlement status use case."""
    resolved_settings = settings or LedgerSettings.from_env()
    resolved_repos = repositories or build_repositories(
        settings=resolved_settings
    )
    return UpdateSettlementStatusUseCase(
        settlement_store=resolved_repos.settlements,
        cache=_resolve_cache(resolved_settings),
        logger=get_app_logger(),
    )


def build_get_user_settlements_use_case(
    repositories: LedgerRepositories | None = None,
) -> GetUserSettlementsUseCase:
    """Return the user settlement history use case."""
    resolved_repos = repositories or build_repositories()
    return GetUserSettlementsUseCase(resolved_repos.settlements)


__all__ = [
    "build_database_adapter",
    "build_balance_cache",
    "build_memory_repositories",
    "build_repositories",
    "build_get_group_balances_use_case",
    "build_get_settlement_plan_use_case",
    "build_record_settlements_use_case",
    "build_update_settlement_status_use_case",
    "build_get_user_settlements_use_case",
]
