"""Donation repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from samplepool.domain.entities import Donation
from samplepool.domain.value_objects import DonationStatus


class DonationRepository(Protocol):
    """Port for donation persistence."""

    async def get_by_id(self, donation_id: UUID) -> Donation | None: ...

    async def get_by_order_id(self, order_id: str) -> Donation | None: ...

    async def list(
        self,
        *,
        pool_id: UUID | None = None,
        user_id: UUID | None = None,
        status: DonationStatus | None = None,
    ) -> list[Donation]: ...

    async def create(self, donation: Donation) -> Donation: ...

    async def mark_succeeded(
        self, donation_id: UUID, payment_id: str, signature: str
    ) -> Donation | None:
        """Pending -> Success. Returns None when the donation is no longer Pending."""
        ...

    async def mark_failed(self, donation_id: UUID) -> Donation | None:
        """Pending -> Failed. Returns None when the donation is no longer Pending."""
        ...
