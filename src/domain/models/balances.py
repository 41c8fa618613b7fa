"""Domain models for derived balances and settlement plans."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.utils.decimal_utils import quantize_money


@dataclass(frozen=True)
class GroupBalances:
    """Net balance per member of a group.

    Positive balances are owed money by the group, negative balances owe
    money to the group.
    """

    group_id: str
    balances: dict[str, Decimal] = field(default_factory=dict)

    @property
    def total(self) -> Decimal:
        """Return the sum of every balance (zero when money is conserved)."""
        return sum(self.balances.values(), Decimal("0"))

    def rounded(self) -> dict[str, Decimal]:
        """Return balances rounded to cents for display or persistence."""
        return {
            member: quantize_money(amount)
            for member, amount in self.balances.items()
        }


@dataclass(frozen=True)
class PlannedTransaction:
    """Proposed payment from a debtor to a creditor."""

    payer_id: str
    payee_id: str
    amount: Decimal


@dataclass(frozen=True)
class SettlementPlan:
    """Ordered transactions that bring a group's balances to zero."""

    group_id: str
    balances: dict[str, Decimal]
    transactions: list[PlannedTransaction]

    @property
    def is_settled(self) -> bool:
        return not self.transactions


__all__ = ["GroupBalances", "PlannedTransaction", "SettlementPlan"]
