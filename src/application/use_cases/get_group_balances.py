"""Use case to compute the balance map of a group."""

from src.application.ports.balance_cache import BalanceCachePort
from src.application.ports.expense_provider import ExpenseProviderPort
from src.application.ports.group_provider import GroupProviderPort
from src.application.ports.settlement_repository import SettlementProviderPort
from src.domain.errors import DependencyError, LedgerError
from src.domain.models import Expense, Group, GroupBalances, Settlement
from src.domain.services.balances import aggregate_balances
from src.infrastructure.logging.logger import get_app_logger


class GetGroupBalancesUseCase:
    """Compute net balances from a group's expenses and settlements.

    Providers are injected so the use case never reaches into a shared
    database client. A failing provider aborts the computation with a
    DependencyError; no partial or zeroed balances are returned.
    """

    def __init__(
        self,
        group_provider: GroupProviderPort,
        expense_provider: ExpenseProviderPort,
        settlement_provider: SettlementProviderPort,
        cache: BalanceCachePort | None = None,
        logger=None,
        strict_membership: bool = False,
    ) -> None:
        """Initialize the use case.

        Args:
            group_provider: Port returning group membership.
            expense_provider: Port returning the group's expenses.
            settlement_provider: Port returning the group's settlements.
            cache: Optional cache of previously computed balances.
            logger: Optional logger compatible with logging.Logger-like API.
            strict_membership: Fail on members outside the group instead of
                keeping their balance.
        """
        self._group_provider = group_provider
        self._expense_provider = expense_provider
        self._settlement_provider = settlement_provider
        self._cache = cache
        self._logger = logger or get_app_logger()
        self._strict_membership = strict_membership

    def execute(self, group_id: str) -> GroupBalances:
        """Return the balances of the group.

        Args:
            group_id: Identifier of the group.

        Returns:
            GroupBalances: Balance per member.

        Raises:
            DependencyError: If a provider fails or returns inconsistent data.
            ValidationError: If an expense cannot be split.
        """
        if self._cache is not None:
            cached = self._cache.get(group_id)
            if cached is not None:
                self._logger.debug(f"Using cached balances for group {group_id}")
                return cached

        group = self._load_group(group_id)
        expenses = self._load_expenses(group_id)
        settlements = self._load_settlements(group_id)

        balances = aggregate_balances(
            group,
            expenses,
            settlements,
            strict_membership=self._strict_membership,
            logger=self._logger,
        )
        result = GroupBalances(group_id=group_id, balances=balances)
        self._logger.info(
            f"Computed balances for group {group_id} from "
            f"{len(expenses)} expenses and {len(settlements)} settlements"
        )
        if self._cache is not None:
            self._cache.put(result)
        return result

    def _load_group(self, group_id: str) -> Group:
        try:
            group = self._group_provider.fetch_group(group_id)
        except LedgerError:
            raise
        except Exception as exc:
            raise DependencyError(
                f"Unable to load group {group_id}: {exc}"
            ) from exc
        if group is None:
            raise DependencyError(f"Group {group_id} not found")
        duplicates = group.duplicate_members()
        if duplicates:
            raise DependencyError(
                f"Group {group_id} lists members more than once: "
                f"{', '.join(duplicates)}"
            )
        return group

    def _load_expenses(self, group_id: str) -> list[Expense]:
        try:
            return list(self._expense_provider.fetch_group_expenses(group_id))
        except LedgerError:
            raise
        except Exception as exc:
            raise DependencyError(
                f"Unable to load expenses of group {group_id}: {exc}"
            ) from exc

    def _load_settlements(self, group_id: str) -> list[Settlement]:
        try:
            return list(
                self._settlement_provider.fetch_group_settlements(group_id)
            )
        except LedgerError:
            raise
        except Exception as exc:
            raise DependencyError(
                f"Unable to load settlements of group {group_id}: {exc}"
            ) from exc


__all__ = ["GetGroupBalancesUseCase"]
