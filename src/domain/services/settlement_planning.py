"""Settlement planner: greedy debt netting over a balance map."""

from collections.abc import Iterable, Mapping
from decimal import Decimal
import logging
from logging import Logger

from src.domain.constants import MONEY_TOLERANCE
from src.domain.models import PlannedTransaction
from src.domain.services.validation import resolve_amount
from src.utils.decimal_utils import quantize_money


def plan_settlements(
    balances: Mapping[str, Decimal],
    logger: Logger | None = None,
) -> list[PlannedTransaction]:
    """Turn a balance map into an ordered list of payments.

    Creditors and debtors are sorted by amount (largest first, member id
    ascending on ties) and walked front to front: each step pays the smaller
    of the two remaining amounts, rounded to cents, and drops whichever side
    falls under one cent. The result has at most ``len(balances) - 1``
    transactions but is not guaranteed to be globally minimal.

    Args:
        balances: Net balance per member, positive when owed money.
        logger: Logger used for residual balance warnings.

    Returns:
        list[PlannedTransaction]: Payments in execution order.
    """
    log = logger or logging.getLogger(__name__)
    creditors: list[list] = []
    debtors: list[list] = []
    for member, raw_balance in balances.items():
        balance = resolve_amount(raw_balance, label=f"balance of {member}")
        if balance > 0:
            creditors.append([member, balance])
        elif balance < 0:
            debtors.append([member, -balance])

    creditors.sort(key=_ordering)
    debtors.sort(key=_ordering)

    transactions: list[PlannedTransaction] = []
    creditor_idx = 0
    debtor_idx = 0
    while creditor_idx < len(creditors) and debtor_idx < len(debtors):
        creditor = creditors[creditor_idx]
        debtor = debtors[debtor_idx]

        amount = quantize_money(min(creditor[1], debtor[1]))
        if amount > 0:
            transactions.append(
                PlannedTransaction(
                    payer_id=debtor[0],
                    payee_id=creditor[0],
                    amount=amount,
                )
            )

        creditor[1] -= amount
        debtor[1] -= amount

        if creditor[1] < MONEY_TOLERANCE:
            creditor_idx += 1
        if debtor[1] < MONEY_TOLERANCE:
            debtor_idx += 1

    residual = [
        member
        for member, remaining in creditors[creditor_idx:] + debtors[debtor_idx:]
        if remaining >= MONEY_TOLERANCE
    ]
    if residual:
        log.warning(
            "Balances do not net to zero; unsettled members: "
            f"{', '.join(sorted(residual))}"
        )
    return transactions


def apply_transactions(
    balances: Mapping[str, Decimal],
    transactions: Iterable[PlannedTransaction],
) -> dict[str, Decimal]:
    """Return the balances left after every transaction is paid.

    Args:
        balances: Balance map the transactions were planned from.
        transactions: Payments to apply.

    Returns:
        dict[str, Decimal]: Remaining balance per member.
    """
    remaining = {
        member: resolve_amount(amount) for member, amount in balances.items()
    }
    for transaction in transactions:
        remaining[transaction.payer_id] = (
            remaining.get(transaction.payer_id, Decimal("0"))
            + transaction.amount
        )
        remaining[transaction.payee_id] = (
            remaining.get(transaction.payee_id, Decimal("0"))
            - transaction.amount
        )
    return remaining


def _ordering(entry: list) -> tuple[Decimal, str]:
    member, amount = entry
    return (-amount, member)


__all__ = ["plan_settlements", "apply_transactions"]
