"""Sample product entity - category of a pool."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class SampleProduct:
    """Sample product category (e.g. protein supplements)."""

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime
    code: str | None = None
    description: str | None = None
    is_active: bool = True
    deleted_at: datetime | None = None
