"""User entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from samplepool.domain.entities.role import Role


@dataclass
class User:
    """User account with its roles (and their permissions) loaded."""

    id: UUID
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    password_hash: str | None = None
    is_active: bool = True
    roles: list[Role] = field(default_factory=list)
