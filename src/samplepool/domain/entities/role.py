"""Role entity for RBAC."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from samplepool.domain.entities.permission import Permission

SUPERADMIN_ROLE = "superadmin"


@dataclass
class Role:
    """Role - named set of permissions. The superadmin role bypasses permission checks."""

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    is_active: bool = True
    deleted_at: datetime | None = None
    permissions: list[Permission] = field(default_factory=list)

    @property
    def is_superadmin(self) -> bool:
        return self.name == SUPERADMIN_ROLE
