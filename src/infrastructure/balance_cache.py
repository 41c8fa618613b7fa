"""In-process cache of computed group balances."""

from dataclasses import replace
from threading import Lock

from src.application.ports.balance_cache import BalanceCachePort
from src.domain.models import GroupBalances


class InMemoryBalanceCache(BalanceCachePort):
    """Balance cache keyed by group id, safe to share between threads.

    Entries are copied on the way in and out, so callers mutating a returned
    balance map never alter what later reads see.
    """

    def __init__(self) -> None:
        self._entries: dict[str, GroupBalances] = {}
        self._lock = Lock()

    def get(self, group_id: str) -> GroupBalances | None:
        with self._lock:
            entry = self._entries.get(group_id)
        return _copy(entry) if entry is not None else None

    def put(self, balances: GroupBalances) -> None:
        with self._lock:
            self._entries[balances.group_id] = _copy(balances)

    def invalidate(self, group_id: str) -> None:
        with self._lock:
            self._entries.pop(group_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def _copy(balances: GroupBalances) -> GroupBalances:
    return replace(balances, balances=dict(balances.balances))


__all__ = ["InMemoryBalanceCache"]
