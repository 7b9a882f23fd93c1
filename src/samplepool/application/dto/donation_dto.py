"""Donation DTOs."""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from samplepool.domain.entities import Donation, Pool


@dataclass
class CreateDonationInput:
    """Input for creating a donation order."""

    pool_id: UUID
    amount: Decimal
    message: str | None = None
    anonymous_donor_name: str | None = None
    anonymous_donor_email: str | None = None
    anonymous_donor_phone: str | None = None


@dataclass
class DonationOrderOutput:
    """Order details the client needs to open the payment checkout."""

    donation_id: UUID
    order_id: str
    amount: int  # minor units
    currency: str
    key_id: str


@dataclass
class VerifyPaymentInput:
    """Payment callback fields returned by the checkout."""

    order_id: str
    payment_id: str
    signature: str


@dataclass
class VerificationResult:
    """Donation and pool after a successful verification."""

    donation: Donation
    pool: Pool
    target_reached: bool


@dataclass
class PoolDonationStats:
    """Funding progress of one pool."""

    pool_id: UUID
    pool_price: Decimal
    amount_received: Decimal
    remaining_amount: Decimal
    percentage_reached: float
    total_donations: int
    total_amount: Decimal
