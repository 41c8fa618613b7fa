"""Tests for the settlement planner."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.models import PlannedTransaction
from src.domain.services.settlement_planning import (
    apply_transactions,
    plan_settlements,
)


def _d(value: str) -> Decimal:
    return Decimal(value)


def test_plan_for_single_creditor_uses_id_tie_break() -> None:
    """Equal debtors are paid in ascending id order."""
    plan = plan_settlements(
        {"A": _d("60"), "C": _d("-30"), "B": _d("-30")},
        logger=MagicMock(),
    )

    assert plan == [
        PlannedTransaction(payer_id="B", payee_id="A", amount=_d("30.00")),
        PlannedTransaction(payer_id="C", payee_id="A", amount=_d("30.00")),
    ]


def test_plan_after_partial_settlement_has_single_transaction() -> None:
    plan = plan_settlements(
        {"A": _d("30"), "B": _d("0"), "C": _d("-30")},
        logger=MagicMock(),
    )

    assert plan == [
        PlannedTransaction(payer_id="C", payee_id="A", amount=_d("30.00")),
    ]


def test_plan_is_empty_for_settled_group() -> None:
    assert plan_settlements({"A": _d("0"), "B": _d("0")}) == []


def test_creditor_tie_break_is_deterministic() -> None:
    """Two equal creditors are served in id order on every call."""
    balances = {"Y": _d("20"), "X": _d("20"), "D": _d("-40")}

    first = plan_settlements(balances, logger=MagicMock())
    second = plan_settlements(dict(reversed(list(balances.items()))))

    assert first == second
    assert [t.payee_id for t in first] == ["X", "Y"]


def test_largest_debtor_pays_largest_creditor_first() -> None:
    plan = plan_settlements(
        {
            "A": _d("50"),
            "B": _d("10"),
            "C": _d("-45"),
            "D": _d("-15"),
        },
        logger=MagicMock(),
    )

    assert plan[0] == PlannedTransaction("C", "A", _d("45.00"))
    assert len(plan) <= 3


def test_plan_zeroes_every_balance() -> None:
    balances = {
        "A": _d("66.666666666666666666666667"),
        "B": _d("-33.333333333333333333333333"),
        "C": _d("-33.333333333333333333333334"),
        "D": _d("12.5"),
        "E": _d("-12.5"),
    }

    plan = plan_settlements(balances, logger=MagicMock())
    remaining = apply_transactions(balances, plan)

    assert all(abs(value) < _d("0.01") for value in remaining.values())
    assert len(plan) <= len(balances) - 1
    assert all(t.amount == t.amount.quantize(_d("0.01")) for t in plan)


def test_plan_accepts_plain_numbers() -> None:
    plan = plan_settlements({"A": 10.5, "B": -10.5}, logger=MagicMock())

    assert plan == [PlannedTransaction("B", "A", _d("10.50"))]


def test_residual_imbalance_is_logged_not_raised() -> None:
    logger = MagicMock()

    plan = plan_settlements({"A": _d("50"), "B": _d("-20")}, logger=logger)

    assert plan == [PlannedTransaction("B", "A", _d("20.00"))]
    logger.warning.assert_called_once()
    assert "A" in logger.warning.call_args.args[0]


def test_apply_transactions_moves_payer_and_payee() -> None:
    remaining = apply_transactions(
        {"A": _d("30"), "B": _d("-30")},
        [PlannedTransaction("B", "A", _d("30"))],
    )

    assert remaining == {"A": _d("0"), "B": _d("0")}
