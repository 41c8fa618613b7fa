"""Use case to propose the payments that settle a group."""

from src.application.use_cases.get_group_balances import (
    GetGroupBalancesUseCase,
)
from src.domain.models import SettlementPlan
from src.domain.services.settlement_planning import plan_settlements
from src.infrastructure.logging.logger import get_app_logger


class GetSettlementPlanUseCase:
    """Compute a settlement plan from a group's current balances."""

    def __init__(
        self,
        balances_use_case: GetGroupBalancesUseCase,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            balances_use_case: Use case producing the group's balances.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._balances_use_case = balances_use_case
        self._logger = logger or get_app_logger()

    def execute(self, group_id: str) -> SettlementPlan:
        """Return the settlement plan of the group.

        Args:
            group_id: Identifier of the group.

        Returns:
            SettlementPlan: Balances and the ordered payments settling them.
        """
        group_balances = self._balances_use_case.execute(group_id)
        transactions = plan_settlements(
            group_balances.balances,
            logger=self._logger,
        )
        self._logger.info(
            f"Settlement plan for group {group_id} has "
            f"{len(transactions)} transactions"
        )
        return SettlementPlan(
            group_id=group_id,
            balances=dict(group_balances.balances),
            transactions=transactions,
        )


__all__ = ["GetSettlementPlanUseCase"]
