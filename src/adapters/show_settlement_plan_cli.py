"""CLI adapter printing the balances and settlement plan of a group.

The group is read from the ``LEDGER_GROUP_ID`` environment variable or the
first command-line argument.
"""

import os
import sys

from src.domain.errors import LedgerError
from src.infrastructure.container import build_get_settlement_plan_use_case
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.utils.decimal_utils import quantize_money


def _resolve_group_id(argv: list[str]) -> str | None:
    """Return the group id from arguments or environment."""
    if argv:
        return argv[0].strip() or None
    value = os.getenv("LEDGER_GROUP_ID", "").strip()
    return value or None


def main(argv: list[str] | None = None) -> int:
    """Print the group's balances and the payments that settle them."""
    logger = get_app_logger()
    group_id = _resolve_group_id(sys.argv[1:] if argv is None else argv)
    if group_id is None:
        logger.warning("LEDGER_GROUP_ID or a group id argument is required.")
        return 2

    get_usage_logger().info(f"show_settlement_plan group={group_id}")
    use_case = build_get_settlement_plan_use_case()
    try:
        plan = use_case.execute(group_id)
    except LedgerError as exc:
        logger.error(f"Unable to compute balances for group {group_id}: {exc}")
        print("Unable to compute balances, please retry.")
        return 1

    print(f"Balances for group {group_id}:")
    for member in sorted(plan.balances):
        print(f"  {member}: {quantize_money(plan.balances[member])}")
    if plan.is_settled:
        print("Everyone is settled up.")
        return 0
    print("Settlement plan:")
    for transaction in plan.transactions:
        print(
            f"  {transaction.payer_id} pays {transaction.payee_id} "
            f"{transaction.amount}"
        )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
