"""Port for reading group membership."""

from typing import Protocol

from src.domain.models import Group


class GroupProviderPort(Protocol):
    """Port exposing read access to groups."""

    def fetch_group(self, group_id: str) -> Group | None:
        """Return the group with a deduplicated member list, or None."""


__all__ = ["GroupProviderPort"]
