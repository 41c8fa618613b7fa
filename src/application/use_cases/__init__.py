"""Application use cases package."""

from .get_group_balances import GetGroupBalancesUseCase
from .get_settlement_plan import GetSettlementPlanUseCase
from .get_user_settlements import GetUserSettlementsUseCase, UserSettlement
from .record_settlements import (
    RecordSettlementsResult,
    RecordSettlementsUseCase,
    SettlementOutcome,
    SettlementRequest,
)
from .update_settlement_status import UpdateSettlementStatusUseCase

__all__ = [
    "GetGroupBalancesUseCase",
    "GetSettlementPlanUseCase",
    "GetUserSettlementsUseCase",
    "UserSettlement",
    "RecordSettlementsResult",
    "RecordSettlementsUseCase",
    "SettlementOutcome",
    "SettlementRequest",
    "UpdateSettlementStatusUseCase",
]
