"""Domain validation helpers."""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from logging import Logger

from src.domain.constants import MONEY_TOLERANCE
from src.domain.errors import ValidationError
from src.domain.models import Expense, SplitType
from src.domain.services.normalization import normalize_splits
from src.utils.decimal_utils import coerce_decimal


def resolve_split_type(value) -> SplitType:
    """Return the SplitType for a raw value.

    Raises:
        ValidationError: If the value names no known split type.
    """
    if isinstance(value, SplitType):
        return value
    try:
        return SplitType(str(value).strip().lower())
    except ValueError as exc:
        raise ValidationError(f"Unknown split type: {value!r}") from exc


def resolve_amount(value, label: str = "amount") -> Decimal:
    """Return a finite Decimal amount.

    Raises:
        ValidationError: If the value is not a finite number.
    """
    try:
        amount = coerce_decimal(value)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValidationError(f"Invalid {label}: {value!r}") from exc
    if not amount.is_finite():
        raise ValidationError(f"Invalid {label}: {value!r}")
    return amount


def validate_expense(expense: Expense) -> None:
    """Validate an expense before it is stored or aggregated.

    Args:
        expense: Expense to check.

    Raises:
        ValidationError: If the amount is not positive, the payer is missing,
            or a custom split is missing, malformed, or does not add up to
            the amount within one cent.
    """
    if not expense.id:
        raise ValidationError("Expense id is required")
    if not expense.paid_by:
        raise ValidationError(f"Expense {expense.id} has no payer")
    amount = resolve_amount(expense.amount)
    if amount <= 0:
        raise ValidationError(
            f"Expense {expense.id} amount must be positive: {amount}"
        )
    if resolve_split_type(expense.split_type) is SplitType.EQUAL:
        return
    if expense.splits is None:
        raise ValidationError(f"Custom expense {expense.id} has no splits")
    shares = normalize_splits(expense.splits)
    if not shares:
        raise ValidationError(
            f"Custom expense {expense.id} has malformed splits"
        )
    total = sum(shares.values(), Decimal("0"))
    if abs(total - amount) > MONEY_TOLERANCE:
        raise ValidationError(
            f"Custom splits of expense {expense.id} sum to {total}, "
            f"expected {amount}"
        )


def check_split_total(expense: Expense, logger: Logger) -> bool:
    """Warn when a custom split does not add up to the expense amount.

    Args:
        expense: Expense to inspect.
        logger: Logger used for warnings.

    Returns:
        bool: True when the split is consistent or not custom.
    """
    if expense.split_type != SplitType.CUSTOM:
        return True
    shares = normalize_splits(expense.splits)
    if shares is None:
        return False
    total = sum(shares.values(), Decimal("0"))
    try:
        amount = coerce_decimal(expense.amount)
    except (InvalidOperation, ValueError, TypeError):
        return False
    if abs(total - amount) > MONEY_TOLERANCE:
        logger.warning(
            f"Custom splits of expense {expense.id} sum to {total}, "
            f"expected {amount}"
        )
        return False
    return True


def check_conservation(
    balances: Mapping[str, Decimal],
    logger: Logger,
    group_id: str | None = None,
) -> bool:
    """Warn when balances do not sum to zero.

    The allowed drift grows with the number of members, one cent each.

    Args:
        balances: Balance map to inspect.
        logger: Logger used for warnings.
        group_id: Group identifier used in the warning.

    Returns:
        bool: True when money is conserved within tolerance.
    """
    total = sum(balances.values(), Decimal("0"))
    allowed = MONEY_TOLERANCE * max(len(balances), 1)
    if abs(total) > allowed:
        logger.warning(
            f"Balances of group {group_id} sum to {total} instead of zero"
        )
        return False
    return True


__all__ = [
    "resolve_split_type",
    "resolve_amount",
    "validate_expense",
    "check_split_total",
    "check_conservation",
]
