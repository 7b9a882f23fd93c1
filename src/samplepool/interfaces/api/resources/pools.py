"""Pool API resources."""

import falcon
import falcon.asgi

from samplepool.application.authorization import AccessGuard, ResponseShaper, build_ability
from samplepool.application.dto.pool_dto import PoolCreateInput
from samplepool.application.use_cases.pool.create_pool import CreatePoolUseCase
from samplepool.application.use_cases.pool.manage_pool import (
    DeletePoolUseCase,
    ModeratePoolUseCase,
    RestorePoolUseCase,
)
from samplepool.application.use_cases.pool.update_pool import UpdatePoolUseCase, is_moderator
from samplepool.domain.entities import Pool
from samplepool.domain.exceptions import NotFound
from samplepool.interfaces.api.params import (
    optional_str,
    parse_decimal,
    parse_uuid,
    read_body,
    require_str,
)


def _is_moderator(principal) -> bool:
    return principal is not None and is_moderator(build_ability(principal))


def _visible(pool: Pool, principal) -> bool:
    if pool.is_active and pool.is_approved:
        return True
    return principal is not None and (pool.user_id == principal.id or _is_moderator(principal))


class PoolsResource:
    """GET/POST /v1/pools.

    GET lists active, approved pools; moderators may pass include_inactive,
    include_deleted and include_unapproved.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        guard: AccessGuard,
        shaper: ResponseShaper,
        create_pool: CreatePoolUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper
        self._create = create_pool

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "pools.list")
        moderator = _is_moderator(principal)

        def flag(name: str) -> bool:
            return moderator and (req.get_param_as_bool(name) or False)

        async with self._uow_factory() as uow:
            pools = await uow.pools.list(
                include_inactive=flag("include_inactive"),
                include_deleted=flag("include_deleted"),
                include_unapproved=flag("include_unapproved"),
            )
        resp.media = self._shaper.shape(principal, {"items": pools}, "pools.list")

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "pools.create")
        body = await read_body(req)
        price = body.get("pool_price")
        pool = await self._create.execute(
            principal,
            PoolCreateInput(
                name=require_str(body, "name"),
                sample_source=require_str(body, "sample_source"),
                batch_number=require_str(body, "batch_number"),
                category_id=parse_uuid(require_str(body, "category_id"), "category_id"),
                description=optional_str(body, "description"),
                pool_price=parse_decimal(price, "pool_price") if price is not None else None,
            ),
        )
        resp.media = self._shaper.shape(principal, pool, "pools.create")
        resp.status = falcon.HTTP_201


class MyPoolsResource:
    """GET /v1/me/pools - pools created by the authenticated user."""

    def __init__(
        self, unit_of_work_factory: type, guard: AccessGuard, shaper: ResponseShaper
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "pools.mine")
        async with self._uow_factory() as uow:
            pools = await uow.pools.list(
                user_id=principal.id, include_inactive=True, include_unapproved=True
            )
        resp.media = self._shaper.shape(principal, {"items": pools}, "pools.mine")


class PoolResource:
    """GET/PATCH/DELETE /v1/pools/{pool_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        guard: AccessGuard,
        shaper: ResponseShaper,
        update_pool: UpdatePoolUseCase,
        delete_pool: DeletePoolUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper
        self._update = update_pool
        self._delete = delete_pool

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, pool_id: str
    ) -> None:
        """Unapproved or inactive pools are visible to their owner and moderators only."""
        principal = req.context.user
        self._guard.authorize(principal, "pools.get")
        async with self._uow_factory() as uow:
            pool = await uow.pools.get_by_id(parse_uuid(pool_id, "pool ID"))
        if pool is None or not _visible(pool, principal):
            raise NotFound("Pool", pool_id)
        resp.media = self._shaper.shape(principal, pool, "pools.get")

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, pool_id: str
    ) -> None:
        principal = req.context.user
        ability = self._guard.authorize(principal, "pools.update")
        body = await read_body(req)
        optional_str(body, "description")
        pool = await self._update.execute(
            principal, ability, parse_uuid(pool_id, "pool ID"), body
        )
        resp.media = self._shaper.shape(principal, pool, "pools.update")

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, pool_id: str
    ) -> None:
        principal = req.context.user
        ability = self._guard.authorize(principal, "pools.delete")
        await self._delete.execute(principal, ability, parse_uuid(pool_id, "pool ID"))
        resp.status = falcon.HTTP_204


class PoolHardDeleteResource:
    """DELETE /v1/pools/{pool_id}/hard - remove the row permanently."""

    def __init__(self, guard: AccessGuard, delete_pool: DeletePoolUseCase) -> None:
        self._guard = guard
        self._delete = delete_pool

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, pool_id: str
    ) -> None:
        principal = req.context.user
        ability = self._guard.authorize(principal, "pools.hard_delete")
        await self._delete.execute(principal, ability, parse_uuid(pool_id, "pool ID"), hard=True)
        resp.status = falcon.HTTP_204


class PoolRestoreResource:
    """POST /v1/pools/{pool_id}/restore."""

    def __init__(
        self, guard: AccessGuard, shaper: ResponseShaper, restore_pool: RestorePoolUseCase
    ) -> None:
        self._guard = guard
        self._shaper = shaper
        self._restore = restore_pool

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, pool_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "pools.restore")
        pool = await self._restore.execute(parse_uuid(pool_id, "pool ID"))
        resp.media = self._shaper.shape(principal, pool, "pools.restore")


class PoolModerationResource:
    """POST /v1/pools/{pool_id}/approve and /v1/pools/{pool_id}/reject."""

    def __init__(
        self, guard: AccessGuard, shaper: ResponseShaper, moderate_pool: ModeratePoolUseCase
    ) -> None:
        self._guard = guard
        self._shaper = shaper
        self._moderate = moderate_pool

    async def on_post_approve(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, pool_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "pools.approve")
        pool = await self._moderate.execute(parse_uuid(pool_id, "pool ID"), approve=True)
        resp.media = self._shaper.shape(principal, pool, "pools.approve")

    async def on_post_reject(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, pool_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "pools.reject")
        pool = await self._moderate.execute(parse_uuid(pool_id, "pool ID"), approve=False)
        resp.media = self._shaper.shape(principal, pool, "pools.reject")
