"""Port for caching derived group balances."""

from typing import Protocol

from src.domain.models import GroupBalances


class BalanceCachePort(Protocol):
    """Cache of balance maps keyed by group.

    Writers must call ``invalidate`` after any expense or settlement change
    so the next read recomputes from scratch. That includes expense writers
    and other processes outside this package; a cache is only safe to wire
    when every such writer invalidates it.
    """

    def get(self, group_id: str) -> GroupBalances | None:
        """Return cached balances, or None on a miss."""

    def put(self, balances: GroupBalances) -> None:
        """Store balances for their group."""

    def invalidate(self, group_id: str) -> None:
        """Drop cached balances for the group."""


__all__ = ["BalanceCachePort"]
