"""Split calculator: per-member balance deltas for a single expense."""

from collections.abc import Sequence
from decimal import Decimal
import logging
from logging import Logger

from src.domain.errors import ValidationError
from src.domain.models import Expense, SplitType
from src.domain.services.normalization import normalize_splits
from src.domain.services.validation import resolve_amount, resolve_split_type


def compute_expense_deltas(
    expense: Expense,
    members: Sequence[str],
    logger: Logger | None = None,
) -> dict[str, Decimal]:
    """Return the signed balance change of each member for one expense.

    Every participant is charged their share and the payer is credited the
    full amount, so the payer of an equal split nets ``amount - share`` and
    the deltas always sum to zero. Members missing from a custom split do
    not take part in the expense.

    Args:
        expense: Expense to split.
        members: Member ids of the group owning the expense.
        logger: Logger used for warnings about malformed splits.

    Returns:
        dict[str, Decimal]: Delta per member. Positive means the member is
        owed money, negative means the member owes money.

    Raises:
        ValidationError: If the amount is negative or not a number, or a
            custom split has no splits at all.
    """
    log = logger or logging.getLogger(__name__)
    amount = resolve_amount(expense.amount)
    if amount < 0:
        raise ValidationError(
            f"Expense {expense.id} amount must not be negative: {amount}"
        )
    split_type = resolve_split_type(expense.split_type)
    if split_type is SplitType.CUSTOM and expense.splits is None:
        raise ValidationError(f"Custom expense {expense.id} has no splits")

    zeros = {member: Decimal("0") for member in members}
    if amount == 0:
        return zeros

    if split_type is SplitType.EQUAL:
        if not members:
            return zeros
        share = amount / len(members)
        deltas = {member: -share for member in members}
    else:
        shares = normalize_splits(expense.splits)
        if not shares:
            log.warning(
                f"Ignoring malformed custom splits of expense {expense.id}"
            )
            return zeros
        deltas = {member: -share for member, share in shares.items()}

    deltas[expense.paid_by] = (
        deltas.get(expense.paid_by, Decimal("0")) + amount
    )
    return deltas


__all__ = ["compute_expense_deltas"]
