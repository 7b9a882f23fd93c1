"""Update pool use case."""

from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from samplepool.application.authorization import Ability
from samplepool.application.dto.pool_dto import OWNER_FIELDS, PRIVILEGED_FIELDS
from samplepool.domain.entities import Pool, User
from samplepool.domain.exceptions import Conflict, NotFound, PermissionDenied, ValidationError
from samplepool.domain.value_objects import Action, PoolStatus, ResourceType, quantize


def is_moderator(ability: Ability) -> bool:
    return ability.can(Action.MANAGE, ResourceType.ALL)


class UpdatePoolUseCase:
    """Apply a partial update. Owners edit descriptive fields; moderators edit everything."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        principal: User,
        ability: Ability,
        pool_id: UUID,
        changes: dict[str, Any],
    ) -> Pool:
        unknown = set(changes) - OWNER_FIELDS - PRIVILEGED_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        moderator = is_moderator(ability)
        if not moderator and set(changes) & PRIVILEGED_FIELDS:
            raise PermissionDenied("Insufficient permissions")

        async with self._uow_factory() as uow:
            pool = await uow.pools.get_by_id(pool_id, for_update=True)
            if pool is None:
                raise NotFound("Pool", str(pool_id))
            if not moderator and pool.user_id != principal.id:
                raise PermissionDenied("Insufficient permissions")

            values = self._coerce(changes)
            batch = values.get("batch_number", pool.batch_number)
            category_id = values.get("category_id", pool.category_id)
            if (batch, category_id) != (pool.batch_number, pool.category_id):
                clash = await uow.pools.get_by_batch(batch, category_id)
                if clash and clash.id != pool.id:
                    raise Conflict(
                        f'Pool with batch number "{batch}" already exists in this category'
                    )
            if "category_id" in values:
                category = await uow.sample_products.get_by_id(category_id)
                if category is None or not category.is_active:
                    raise NotFound("Sample product", str(category_id))

            for name, value in values.items():
                setattr(pool, name, value)
            pool.updated_at = datetime.now(UTC)
            await uow.pools.update(pool)
        return pool

    @staticmethod
    def _coerce(changes: dict[str, Any]) -> dict[str, Any]:
        values = dict(changes)
        try:
            if "category_id" in values:
                values["category_id"] = UUID(str(values["category_id"]))
            if values.get("pool_price") is not None:
                price = quantize(Decimal(str(values["pool_price"])))
                if price <= 0:
                    raise ValidationError("Pool price must be positive")
                values["pool_price"] = price
            if "status" in values:
                values["status"] = PoolStatus(values["status"])
        except (ValueError, InvalidOperation) as e:
            raise ValidationError(str(e)) from e
        for flag in ("is_active", "is_approved"):
            if flag in values and not isinstance(values[flag], bool):
                raise ValidationError(f"{flag} must be a boolean")
        for text in ("name", "sample_source", "batch_number"):
            if text in values and not (isinstance(values[text], str) and values[text].strip()):
                raise ValidationError(f"{text} must be a non-empty string")
        return values
