"""Tests for the settlement status state machine."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from src.domain.errors import ValidationError
from src.domain.models import (
    Group,
    GroupBalances,
    Settlement,
    SettlementDraft,
    SettlementStatus,
)


def _settlement(status: SettlementStatus) -> Settlement:
    return Settlement(
        id="s1",
        from_user="B",
        to_user="A",
        amount=Decimal("30"),
        group_id="g1",
        status=status,
    )


@pytest.mark.parametrize(
    "target",
    [SettlementStatus.COMPLETED, SettlementStatus.CANCELLED],
)
def test_pending_settlement_can_be_resolved(target) -> None:
    at = datetime(2024, 5, 1, tzinfo=timezone.utc)
    pending = _settlement(SettlementStatus.PENDING)

    updated = pending.transition_to(target, at=at)

    assert updated.status is target
    assert updated.updated_at == at
    assert pending.status is SettlementStatus.PENDING


@pytest.mark.parametrize(
    "source, target",
    [
        (SettlementStatus.COMPLETED, SettlementStatus.PENDING),
        (SettlementStatus.COMPLETED, SettlementStatus.CANCELLED),
        (SettlementStatus.CANCELLED, SettlementStatus.PENDING),
        (SettlementStatus.CANCELLED, SettlementStatus.COMPLETED),
        (SettlementStatus.PENDING, SettlementStatus.PENDING),
    ],
)
def test_terminal_and_reverse_transitions_are_rejected(source, target) -> None:
    with pytest.raises(ValidationError):
        _settlement(source).transition_to(target)


def test_draft_with_id_keeps_every_field() -> None:
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    draft = SettlementDraft(
        from_user="B",
        to_user="A",
        amount=Decimal("30.00"),
        group_id="g1",
        status=SettlementStatus.COMPLETED,
        created_by="B",
        created_at=now,
        updated_at=now,
        notes="cash",
    )

    settlement = draft.with_id("s9")

    assert settlement.id == "s9"
    assert settlement.is_completed
    assert settlement.created_by == "B"
    assert settlement.notes == "cash"


def test_group_reports_duplicate_members() -> None:
    group = Group(id="g1", members=("A", "B", "A", "B", "A"))

    assert group.duplicate_members() == ["A", "B"]
    assert group.has_member("B")


def test_group_balances_rounds_for_display() -> None:
    balances = GroupBalances(
        group_id="g1",
        balances={
            "A": Decimal("66.666666666666666666666667"),
            "B": Decimal("-33.333333333333333333333333"),
            "C": Decimal("-33.333333333333333333333334"),
        },
    )

    assert balances.rounded() == {
        "A": Decimal("66.67"),
        "B": Decimal("-33.33"),
        "C": Decimal("-33.33"),
    }
    assert balances.total == 0
