"""Create pool use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from samplepool.application.dto.pool_dto import PoolCreateInput
from samplepool.domain.entities import Pool, User
from samplepool.domain.exceptions import Conflict, NotFound, ValidationError
from samplepool.domain.value_objects import PoolStatus, quantize

logger = logging.getLogger(__name__)


class CreatePoolUseCase:
    """Create an unapproved pool owned by the acting user."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, principal: User, input_data: PoolCreateInput) -> Pool:
        price = quantize(input_data.pool_price) if input_data.pool_price is not None else None
        if price is not None and price <= 0:
            raise ValidationError("Pool price must be positive")

        async with self._uow_factory() as uow:
            category = await uow.sample_products.get_by_id(input_data.category_id)
            if category is None or not category.is_active:
                raise NotFound("Sample product", str(input_data.category_id))

            creator = await uow.users.get_by_id(principal.id)
            if creator is None or not creator.is_active:
                raise ValidationError("Creator account is inactive")

            existing = await uow.pools.get_by_batch(input_data.batch_number, input_data.category_id)
            if existing:
                raise Conflict(
                    f'Pool with batch number "{input_data.batch_number}" '
                    "already exists in this category"
                )

            now = datetime.now(UTC)
            pool = Pool(
                id=uuid4(),
                name=input_data.name,
                sample_source=input_data.sample_source,
                batch_number=input_data.batch_number,
                category_id=input_data.category_id,
                user_id=principal.id,
                created_at=now,
                updated_at=now,
                description=input_data.description,
                pool_price=price,
                status=PoolStatus.CREATED,
            )
            await uow.pools.create(pool)

        logger.info("Pool %s created by user %s", pool.id, principal.id)
        return pool
