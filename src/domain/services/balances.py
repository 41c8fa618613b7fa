"""Balance aggregator: fold expenses and settlements into a balance map."""

from collections.abc import Iterable
from decimal import Decimal
import logging
from logging import Logger

from src.domain.errors import DependencyError
from src.domain.models import Expense, Group, Settlement
from src.domain.services.splits import compute_expense_deltas
from src.domain.services.validation import (
    check_conservation,
    check_split_total,
    resolve_amount,
)


def aggregate_balances(
    group: Group,
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement],
    *,
    strict_membership: bool = False,
    logger: Logger | None = None,
) -> dict[str, Decimal]:
    """Compute the net balance of every member of a group.

    Args:
        group: Group whose members receive a balance entry.
        expenses: Expenses to fold in. Personal expenses and expenses of
            other groups are skipped.
        settlements: Settlements to fold in. Only completed settlements of
            this group move balances.
        strict_membership: Raise instead of tolerating members that are not
            part of the group.
        logger: Logger used for warnings.

    Returns:
        dict[str, Decimal]: Balance per member, every group member included.

    Raises:
        DependencyError: If ``strict_membership`` is set and an expense or
            settlement references a member outside the group.
        ValidationError: If an expense cannot be split.
    """
    log = logger or logging.getLogger(__name__)
    balances = {member: Decimal("0") for member in group.members}

    seen_expenses: set[str] = set()
    for expense in expenses:
        if not expense.belongs_to(group.id):
            log.debug(f"Skipping expense {expense.id} outside group {group.id}")
            continue
        if expense.id in seen_expenses:
            log.warning(f"Expense {expense.id} listed twice; applied once")
            continue
        seen_expenses.add(expense.id)
        check_split_total(expense, log)
        deltas = compute_expense_deltas(expense, group.members, log)
        for member, delta in deltas.items():
            _credit(balances, group, member, delta, strict_membership, log)

    seen_settlements: set[str] = set()
    for settlement in settlements:
        if settlement.group_id != group.id or not settlement.is_completed:
            continue
        if settlement.id in seen_settlements:
            log.warning(
                f"Settlement {settlement.id} listed twice; applied once"
            )
            continue
        seen_settlements.add(settlement.id)
        amount = resolve_amount(settlement.amount)
        _credit(
            balances, group, settlement.from_user, amount, strict_membership, log
        )
        _credit(
            balances, group, settlement.to_user, -amount, strict_membership, log
        )

    check_conservation(balances, log, group.id)
    return balances


def _credit(
    balances: dict[str, Decimal],
    group: Group,
    member: str,
    delta: Decimal,
    strict_membership: bool,
    logger: Logger,
) -> None:
    if member not in balances:
        if strict_membership:
            raise DependencyError(
                f"Member {member} is not part of group {group.id}"
            )
        logger.warning(
            f"Member {member} is not part of group {group.id}; "
            "keeping their balance"
        )
        balances[member] = Decimal("0")
    balances[member] += delta


__all__ = ["aggregate_balances"]
