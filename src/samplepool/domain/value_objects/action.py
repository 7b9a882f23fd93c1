"""Actions that can be granted on resources."""

from enum import StrEnum


class Action(StrEnum):
    """Permission actions. MANAGE stands for every action."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"
