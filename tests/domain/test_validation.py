"""Tests for domain validation and normalization helpers."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.errors import ValidationError
from src.domain.models import Expense, SplitType
from src.domain.services.normalization import (
    normalize_member_id,
    normalize_splits,
)
from src.domain.services.validation import (
    check_conservation,
    validate_expense,
)


def _custom(splits, amount: str = "100") -> Expense:
    return Expense(
        id="e1",
        amount=Decimal(amount),
        paid_by="A",
        split_type=SplitType.CUSTOM,
        splits=splits,
        group_id="g1",
    )


def test_validate_expense_accepts_consistent_custom_split() -> None:
    validate_expense(_custom({"A": "50", "B": "30", "C": "20.005"}))


def test_validate_expense_accepts_equal_split() -> None:
    validate_expense(
        Expense(id="e1", amount=Decimal("12.30"), paid_by="A", group_id="g1")
    )


@pytest.mark.parametrize(
    "expense",
    [
        _custom({"A": "50", "B": "30"}),
        _custom(None),
        _custom({"A": "x"}),
        _custom({"A": "100"}, amount="0"),
        _custom({"A": "-100"}, amount="-100"),
        Expense(id="e1", amount=Decimal("10"), paid_by="", group_id="g1"),
    ],
)
def test_validate_expense_rejects_malformed_input(expense) -> None:
    with pytest.raises(ValidationError):
        validate_expense(expense)


def test_normalize_splits_merges_trimmed_member_ids() -> None:
    shares = normalize_splits({" A": "1.50", "A ": 2, "B": 0})

    assert shares == {"A": Decimal("3.50"), "B": Decimal("0")}


def test_normalize_splits_rejects_non_finite_values() -> None:
    assert normalize_splits({"A": "NaN"}) is None
    assert normalize_splits(["A", "B"]) is None


def test_normalize_member_id_handles_blank_values() -> None:
    assert normalize_member_id("  ") is None
    assert normalize_member_id(None) is None
    assert normalize_member_id(" u1 ") == "u1"


def test_check_conservation_warns_on_drift() -> None:
    logger = MagicMock()

    assert check_conservation({"A": Decimal("1"), "B": Decimal("0")}, logger, "g1") is False
    logger.warning.assert_called_once()


def test_check_conservation_allows_rounding_noise() -> None:
    logger = MagicMock()

    assert check_conservation(
        {"A": Decimal("0.005"), "B": Decimal("0")},
        logger,
    )
    logger.warning.assert_not_called()
