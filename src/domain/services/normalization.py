"""Domain normalization helpers."""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from src.utils.decimal_utils import coerce_decimal


def normalize_member_id(member_id) -> str | None:
    """Normalize a member identifier.

    Args:
        member_id: Raw identifier from a provider.

    Returns:
        str | None: Stripped identifier, or None when empty.
    """
    if member_id is None:
        return None
    cleaned = str(member_id).strip()
    return cleaned or None


def normalize_splits(raw_splits) -> dict[str, Decimal] | None:
    """Normalize a custom split mapping.

    Args:
        raw_splits: Mapping of member id to share amount.

    Returns:
        dict[str, Decimal] | None: Shares keyed by member, or None when the
        mapping is malformed (not a mapping, blank or non-string keys,
        non-numeric, non-finite or negative shares).
    """
    if not isinstance(raw_splits, Mapping):
        return None
    shares: dict[str, Decimal] = {}
    for raw_member, raw_share in raw_splits.items():
        if not isinstance(raw_member, str):
            return None
        member = normalize_member_id(raw_member)
        if member is None:
            return None
        try:
            share = coerce_decimal(raw_share)
        except (InvalidOperation, ValueError, TypeError):
            return None
        if not share.is_finite() or share < 0:
            return None
        shares[member] = shares.get(member, Decimal("0")) + share
    return shares


__all__ = ["normalize_member_id", "normalize_splits"]
