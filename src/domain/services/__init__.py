"""Domain services package."""

from .balances import aggregate_balances
from .normalization import normalize_member_id, normalize_splits
from .settlement_planning import apply_transactions, plan_settlements
from .splits import compute_expense_deltas
from .validation import (
    check_conservation,
    check_split_total,
    resolve_amount,
    resolve_split_type,
    validate_expense,
)

__all__ = [
    "aggregate_balances",
    "apply_transactions",
    "check_conservation",
    "check_split_total",
    "compute_expense_deltas",
    "normalize_member_id",
    "normalize_splits",
    "plan_settlements",
    "resolve_amount",
    "resolve_split_type",
    "validate_expense",
]
