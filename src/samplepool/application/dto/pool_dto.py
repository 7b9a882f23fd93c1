"""Pool DTOs."""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID


@dataclass
class PoolCreateInput:
    """Input for creating a pool."""

    name: str
    sample_source: str
    batch_number: str
    category_id: UUID
    description: str | None = None
    pool_price: Decimal | None = None


# Fields any pool owner may change.
OWNER_FIELDS = frozenset({"name", "sample_source", "batch_number", "description", "category_id"})
# Fields only a moderator (manage on all) may change.
PRIVILEGED_FIELDS = frozenset({"pool_price", "status", "is_active", "is_approved"})
