"""Permission entity - a (resource, action) grant that can be attached to roles."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Permission:
    """Permission - free-form resource and action, mapped to grants at evaluation time."""

    id: UUID
    name: str
    resource: str
    action: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    is_active: bool = True
    deleted_at: datetime | None = None
