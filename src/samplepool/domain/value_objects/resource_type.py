"""Resource types that permissions can target."""

from enum import StrEnum


class ResourceType(StrEnum):
    """Known permission subjects. ALL matches every resource."""

    USER = "user"
    ROLE = "role"
    PERMISSION = "permission"
    FILE = "file"
    ALL = "all"
