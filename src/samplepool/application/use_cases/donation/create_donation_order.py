"""Create donation order use case."""

import logging
import time
from datetime import UTC, datetime
from uuid import uuid4

from samplepool.application.dto.donation_dto import CreateDonationInput, DonationOrderOutput
from samplepool.application.ports import PaymentGateway
from samplepool.domain.entities import Donation, Pool, User
from samplepool.domain.exceptions import NotFound, ValidationError
from samplepool.domain.value_objects import (
    DonationStatus,
    PoolStatus,
    normalize_email,
    quantize,
    to_minor_units,
)

logger = logging.getLogger(__name__)

MIN_DONATION_AMOUNT = quantize(1)


class CreateDonationOrderUseCase:
    """Validate a donation against its pool, open a gateway order, persist a Pending donation."""

    def __init__(
        self,
        unit_of_work_factory: type,
        payment_gateway: PaymentGateway,
        currency: str = "INR",
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._gateway = payment_gateway
        self._currency = currency

    async def execute(
        self, principal: User | None, input_data: CreateDonationInput
    ) -> DonationOrderOutput:
        """Create the order. principal is None for anonymous donors."""
        amount = quantize(input_data.amount)
        if amount < MIN_DONATION_AMOUNT:
            raise ValidationError(f"Donation amount must be at least {MIN_DONATION_AMOUNT}")

        async with self._uow_factory() as uow:
            pool = await uow.pools.get_by_id(input_data.pool_id)
            if pool is None:
                raise NotFound("Pool", str(input_data.pool_id))
        self._check_pool(pool, amount)

        if principal is None:
            donor_email = (input_data.anonymous_donor_email or "").strip()
            donor_name = (input_data.anonymous_donor_name or "").strip()
            if not donor_email:
                raise ValidationError("Email is required for anonymous donations")
            donor_email = normalize_email(donor_email)
            if not donor_name:
                raise ValidationError("Name is required for anonymous donations")
            donor_phone = (input_data.anonymous_donor_phone or "").strip() or None
        else:
            donor_email = donor_name = donor_phone = None

        order = await self._gateway.create_order(
            amount=to_minor_units(amount),
            currency=self._currency,
            receipt=f"donation_{int(time.time() * 1000)}",
            notes={
                "poolId": str(pool.id),
                "userId": str(principal.id) if principal else "anonymous",
                "message": input_data.message or "",
            },
        )

        now = datetime.now(UTC)
        donation = Donation(
            id=uuid4(),
            pool_id=pool.id,
            amount=amount,
            created_at=now,
            updated_at=now,
            status=DonationStatus.PENDING,
            message=input_data.message,
            user_id=principal.id if principal else None,
            anonymous_donor_name=donor_name,
            anonymous_donor_email=donor_email,
            anonymous_donor_phone=donor_phone,
            payment_order_id=order.id,
        )
        async with self._uow_factory() as uow:
            await uow.donations.create(donation)

        logger.info(
            "Donation order created: donation=%s pool=%s order=%s amount=%s",
            donation.id, pool.id, order.id, amount,
        )
        return DonationOrderOutput(
            donation_id=donation.id,
            order_id=order.id,
            amount=order.amount,
            currency=order.currency,
            key_id=self._gateway.key_id,
        )

    @staticmethod
    def _check_pool(pool: Pool, amount) -> None:
        if not pool.accepts_donations:
            raise ValidationError("Pool is not accepting donations")
        if pool.pool_price is None:
            raise ValidationError("Pool price is not set")
        remaining = pool.remaining_amount
        if pool.status is PoolStatus.TARGET_REACHED or remaining <= 0:
            raise ValidationError("Pool has already reached its target")
        if amount > remaining:
            raise ValidationError(
                "Donation amount exceeds remaining pool amount. "
                f"Maximum allowed: {quantize(remaining):.2f}"
            )
