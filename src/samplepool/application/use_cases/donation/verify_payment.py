"""Verify payment use case - reconciles a gateway callback with its donation."""

import logging

from samplepool.application.dto.donation_dto import VerificationResult, VerifyPaymentInput
from samplepool.application.ports import PaymentGateway
from samplepool.domain.exceptions import Conflict, InvalidSignature, NotFound
from samplepool.domain.value_objects import DonationStatus

logger = logging.getLogger(__name__)


class VerifyPaymentUseCase:
    """Check the callback signature and move the donation out of Pending exactly once.

    On success the donation becomes Success and its amount is credited to the
    pool in the same transaction. On a bad signature the donation becomes
    Failed, that change is committed and InvalidSignature is raised.
    """

    def __init__(self, unit_of_work_factory: type, payment_gateway: PaymentGateway) -> None:
        self._uow_factory = unit_of_work_factory
        self._gateway = payment_gateway

    async def execute(self, input_data: VerifyPaymentInput) -> VerificationResult:
        async with self._uow_factory() as uow:
            donation = await uow.donations.get_by_order_id(input_data.order_id)
            if donation is None:
                raise NotFound("Donation")
            if donation.status is not DonationStatus.PENDING:
                raise Conflict("Payment already verified")

            valid = self._gateway.verify_signature(
                input_data.order_id, input_data.payment_id, input_data.signature
            )
            if not valid:
                await uow.donations.mark_failed(donation.id)
                await uow.commit()
                logger.warning(
                    "Payment signature mismatch: donation=%s order=%s",
                    donation.id, input_data.order_id,
                )
                raise InvalidSignature("Invalid payment signature")

            updated = await uow.donations.mark_succeeded(
                donation.id, input_data.payment_id, input_data.signature
            )
            if updated is None:
                raise Conflict("Payment already verified")

            credited = await uow.pools.credit(updated.pool_id, updated.amount)
            if credited is None:
                raise NotFound("Pool", str(updated.pool_id))
            pool, target_reached = credited

        logger.info(
            "Payment verified: donation=%s pool=%s amount=%s",
            updated.id, pool.id, updated.amount,
        )
        if target_reached:
            logger.info("Pool %s reached its target of %s", pool.id, pool.pool_price)
        return VerificationResult(donation=updated, pool=pool, target_reached=target_reached)
