"""Application ports package."""

from .balance_cache import BalanceCachePort
from .database import DatabaseEnginePort
from .expense_provider import ExpenseProviderPort
from .group_provider import GroupProviderPort
from .settlement_repository import (
    SettlementProviderPort,
    SettlementSinkPort,
    SettlementStorePort,
)

__all__ = [
    "BalanceCachePort",
    "DatabaseEnginePort",
    "ExpenseProviderPort",
    "GroupProviderPort",
    "SettlementProviderPort",
    "SettlementSinkPort",
    "SettlementStorePort",
]
