"""Domain models for expense-sharing groups."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Group:
    """Group of members sharing expenses.

    Attributes:
        id: Group identifier.
        members: Unique member identifiers, in provider order.
        name: Display name, not used by balance math.
    """

    id: str
    members: tuple[str, ...]
    name: str | None = None

    def has_member(self, member_id: str) -> bool:
        """Return True when the member belongs to the group."""
        return member_id in self.members

    def duplicate_members(self) -> list[str]:
        """Return member ids listed more than once, in first-seen order."""
        seen: set[str] = set()
        duplicates: list[str] = []
        for member in self.members:
            if member in seen and member not in duplicates:
                duplicates.append(member)
            seen.add(member)
        return duplicates


__all__ = ["Group"]
