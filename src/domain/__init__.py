"""Domain package for balance rules and core models."""

from .constants import (
    DEFAULT_EXPENSE_CATEGORIES,
    FALLBACK_CATEGORY,
    MONEY_TOLERANCE,
)
from .errors import (
    DependencyError,
    LedgerError,
    PersistenceError,
    ValidationError,
)
from .models import (
    Expense,
    Group,
    GroupBalances,
    PlannedTransaction,
    Settlement,
    SettlementDraft,
    SettlementPlan,
    SettlementStatus,
    SplitType,
)
from .services import (
    aggregate_balances,
    apply_transactions,
    compute_expense_deltas,
    plan_settlements,
    validate_expense,
)

__all__ = [
    "DEFAULT_EXPENSE_CATEGORIES",
    "FALLBACK_CATEGORY",
    "MONEY_TOLERANCE",
    "DependencyError",
    "LedgerError",
    "PersistenceError",
    "ValidationError",
    "Expense",
    "Group",
    "GroupBalances",
    "PlannedTransaction",
    "Settlement",
    "SettlementDraft",
    "SettlementPlan",
    "SettlementStatus",
    "SplitType",
    "aggregate_balances",
    "apply_transactions",
    "compute_expense_deltas",
    "plan_settlements",
    "validate_expense",
]
