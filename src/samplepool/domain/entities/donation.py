"""Donation entity."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from samplepool.domain.value_objects import DonationStatus


@dataclass
class Donation:
    """Donation to a pool by a logged-in user or an anonymous donor."""

    id: UUID
    pool_id: UUID
    amount: Decimal
    created_at: datetime
    updated_at: datetime
    status: DonationStatus = DonationStatus.PENDING
    message: str | None = None
    user_id: UUID | None = None
    anonymous_donor_name: str | None = None
    anonymous_donor_email: str | None = None
    anonymous_donor_phone: str | None = None
    payment_order_id: str | None = None
    payment_id: str | None = None
    payment_signature: str | None = None
