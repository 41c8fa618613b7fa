"""Domain models package."""

from .balances import GroupBalances, PlannedTransaction, SettlementPlan
from .expenses import Expense, SplitType
from .groups import Group
from .settlements import (
    ALLOWED_TRANSITIONS,
    Settlement,
    SettlementDraft,
    SettlementStatus,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "Expense",
    "Group",
    "GroupBalances",
    "PlannedTransaction",
    "Settlement",
    "SettlementDraft",
    "SettlementPlan",
    "SettlementStatus",
    "SplitType",
]
