"""Pool entity - crowdfunding target for testing one sample batch."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from samplepool.domain.value_objects import PoolStatus


@dataclass
class Pool:
    """Pool - collects donations until amount_received reaches pool_price."""

    id: UUID
    name: str
    sample_source: str
    batch_number: str
    category_id: UUID
    user_id: UUID
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    pool_price: Decimal | None = None
    amount_received: Decimal = Decimal("0")
    total_contributors: int = 0
    status: PoolStatus = PoolStatus.CREATED
    is_active: bool = True
    is_approved: bool = False
    deleted_at: datetime | None = None

    @property
    def remaining_amount(self) -> Decimal:
        """Amount still needed to reach the target; zero when no price is set."""
        if self.pool_price is None:
            return Decimal("0")
        return self.pool_price - self.amount_received

    @property
    def accepts_donations(self) -> bool:
        return self.is_active and self.is_approved and self.deleted_at is None
