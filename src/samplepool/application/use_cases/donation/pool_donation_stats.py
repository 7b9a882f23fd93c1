"""Pool donation statistics use case."""

from decimal import Decimal
from uuid import UUID

from samplepool.application.dto.donation_dto import PoolDonationStats
from samplepool.domain.exceptions import NotFound
from samplepool.domain.value_objects import DonationStatus, quantize


class GetPoolDonationStatsUseCase:
    """Funding progress of a pool computed from its successful donations."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, pool_id: UUID) -> PoolDonationStats:
        async with self._uow_factory() as uow:
            pool = await uow.pools.get_by_id(pool_id)
            if pool is None:
                raise NotFound("Pool", str(pool_id))
            donations = await uow.donations.list(pool_id=pool_id, status=DonationStatus.SUCCESS)

        price = pool.pool_price or Decimal("0")
        received = pool.amount_received
        remaining = max(Decimal("0"), price - received)
        percentage = min(100.0, float(received / price * 100)) if price > 0 else 0.0
        return PoolDonationStats(
            pool_id=pool.id,
            pool_price=quantize(price),
            amount_received=quantize(received),
            remaining_amount=quantize(remaining),
            percentage_reached=round(percentage, 2),
            total_donations=len(donations),
            total_amount=quantize(sum((d.amount for d in donations), Decimal("0"))),
        )
