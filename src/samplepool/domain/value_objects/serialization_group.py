"""Visibility groups for response fields."""

from enum import StrEnum


class SerializationGroup(StrEnum):
    """Caller tiers, ordered public < user < admin."""

    PUBLIC = "public"
    USER = "user"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {
    SerializationGroup.PUBLIC: 0,
    SerializationGroup.USER: 1,
    SerializationGroup.ADMIN: 2,
}
