"""Decoding of stored ledger rows into domain values.

Nested structures (group members, custom splits, categories) may be stored
as encoded text. They are decoded here so the domain only ever sees native
mappings and sequences.
"""

from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
import json

from src.domain.constants import FALLBACK_CATEGORY
from src.domain.errors import DependencyError
from src.domain.models import SettlementStatus, SplitType
from src.domain.services.normalization import normalize_member_id
from src.utils.decimal_utils import coerce_decimal


def decode_members(raw_members, logger) -> tuple[str, ...]:
    """Decode a stored member list and drop duplicates.

    Args:
        raw_members: Array value or JSON text from the groups table.
        logger: Logger used for warnings.

    Returns:
        tuple[str, ...]: Unique member ids in stored order.

    Raises:
        DependencyError: If the value is not a list of members.
    """
    if raw_members is None:
        return ()
    value = raw_members
    if isinstance(value, str):
        try:
            value = json.loads(value) if value.strip() else []
        except json.JSONDecodeError as exc:
            raise DependencyError(f"Unreadable member list: {exc}") from exc
    if not isinstance(value, (list, tuple)):
        raise DependencyError(f"Member list has unexpected type: {type(value)}")

    members: list[str] = []
    for raw_member in value:
        member = normalize_member_id(raw_member)
        if member is None:
            continue
        if member in members:
            logger.warning(f"Dropping duplicate group member {member}")
            continue
        members.append(member)
    return tuple(members)


def decode_splits(raw_splits, logger, expense_id: str | None = None):
    """Decode stored custom splits.

    Args:
        raw_splits: Mapping or JSON text from the expenses table.
        logger: Logger used for warnings.
        expense_id: Expense identifier used in warnings.

    Returns:
        Mapping | None: Decoded mapping, an empty mapping when the stored
        text is unreadable, or None when nothing is stored.
    """
    if raw_splits is None:
        return None
    if isinstance(raw_splits, Mapping):
        return dict(raw_splits)
    if isinstance(raw_splits, str):
        if not raw_splits.strip():
            return None
        try:
            decoded = json.loads(raw_splits, parse_float=Decimal)
        except json.JSONDecodeError:
            logger.warning(f"Unreadable splits for expense {expense_id}")
            return {}
        if isinstance(decoded, Mapping):
            return dict(decoded)
    logger.warning(f"Unexpected splits value for expense {expense_id}")
    return {}


def decode_category(raw_category) -> str | None:
    """Decode a stored category into its display name.

    Args:
        raw_category: Plain name, JSON object with a ``name`` key, or None.

    Returns:
        str | None: Category name.
    """
    if raw_category is None:
        return None
    value = raw_category
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        if not stripped.startswith("{"):
            return stripped
        try:
            value = json.loads(stripped)
        except json.JSONDecodeError:
            return stripped
    if isinstance(value, Mapping):
        name = value.get("name")
        return str(name) if name else FALLBACK_CATEGORY
    return str(value)


def decode_amount(raw_amount, label: str) -> Decimal:
    """Decode a stored amount.

    Raises:
        DependencyError: If the stored value is not a number.
    """
    try:
        return coerce_decimal(raw_amount)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise DependencyError(f"Unreadable amount for {label}") from exc


def decode_split_type(raw_value, expense_id: str) -> SplitType:
    """Decode a stored split type.

    Raises:
        DependencyError: If the split type is unknown.
    """
    try:
        return SplitType(str(raw_value or SplitType.EQUAL.value).lower())
    except ValueError as exc:
        raise DependencyError(
            f"Unknown split type {raw_value!r} for expense {expense_id}"
        ) from exc


def decode_status(raw_value, settlement_id: str) -> SettlementStatus:
    """Decode a stored settlement status.

    Raises:
        DependencyError: If the status is unknown.
    """
    try:
        return SettlementStatus(str(raw_value).lower())
    except ValueError as exc:
        raise DependencyError(
            f"Unknown status {raw_value!r} for settlement {settlement_id}"
        ) from exc


def decode_timestamp(raw_value) -> datetime | None:
    """Decode a stored timestamp or date."""
    if raw_value is None or raw_value == "":
        return None
    if isinstance(raw_value, datetime):
        return raw_value
    if isinstance(raw_value, date):
        return datetime.combine(raw_value, time.min)
    return datetime.fromisoformat(str(raw_value))


def encode_timestamp(value: datetime | None) -> str | None:
    """Encode a timestamp for storage."""
    return value.isoformat() if value is not None else None


__all__ = [
    "decode_members",
    "decode_splits",
    "decode_category",
    "decode_amount",
    "decode_split_type",
    "decode_status",
    "decode_timestamp",
    "encode_timestamp",
]
