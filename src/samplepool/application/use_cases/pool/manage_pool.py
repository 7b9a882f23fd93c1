"""Pool lifecycle use cases: delete, restore, approve, reject."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from samplepool.application.authorization import Ability
from samplepool.application.use_cases.pool.update_pool import is_moderator
from samplepool.domain.entities import Pool, User
from samplepool.domain.exceptions import NotFound, PermissionDenied

logger = logging.getLogger(__name__)


class DeletePoolUseCase:
    """Soft delete by the owner or a moderator; hard delete for moderators only."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, principal: User, ability: Ability, pool_id: UUID, hard: bool = False
    ) -> None:
        async with self._uow_factory() as uow:
            pool = await uow.pools.get_by_id(pool_id, include_deleted=hard, for_update=True)
            if pool is None:
                raise NotFound("Pool", str(pool_id))
            if hard:
                await uow.pools.hard_delete(pool_id)
            else:
                if pool.user_id != principal.id and not is_moderator(ability):
                    raise PermissionDenied("Insufficient permissions")
                await uow.pools.soft_delete(pool_id)
        logger.info("Pool %s %s deleted by user %s", pool_id, "hard" if hard else "soft", principal.id)


class RestorePoolUseCase:
    """Bring back a soft-deleted pool."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, pool_id: UUID) -> Pool:
        async with self._uow_factory() as uow:
            pool = await uow.pools.get_by_id(pool_id, include_deleted=True, for_update=True)
            if pool is None or pool.deleted_at is None:
                raise NotFound("Deleted pool", str(pool_id))
            await uow.pools.restore(pool_id)
            pool.deleted_at = None
        return pool


class ModeratePoolUseCase:
    """Approve or reject a pool. Rejected pools stop accepting donations."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, pool_id: UUID, approve: bool) -> Pool:
        async with self._uow_factory() as uow:
            pool = await uow.pools.get_by_id(pool_id, for_update=True)
            if pool is None:
                raise NotFound("Pool", str(pool_id))
            pool.is_approved = approve
            pool.updated_at = datetime.now(UTC)
            await uow.pools.update(pool)
        logger.info("Pool %s %s", pool_id, "approved" if approve else "rejected")
        return pool
