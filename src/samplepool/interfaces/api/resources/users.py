"""User API resources."""

import falcon
import falcon.asgi

from samplepool.application.authorization import AccessGuard, ResponseShaper
from samplepool.application.use_cases.user.manage_user import (
    CreateUserUseCase,
    DeleteUserUseCase,
    UpdateUserUseCase,
)
from samplepool.domain.exceptions import NotFound
from samplepool.interfaces.api.params import (
    optional_bool,
    optional_str,
    parse_uuid,
    parse_uuid_list,
    read_body,
    require_str,
)


class UsersResource:
    """GET/POST /v1/users - list and create users."""

    def __init__(
        self,
        unit_of_work_factory: type,
        guard: AccessGuard,
        shaper: ResponseShaper,
        create_user: CreateUserUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper
        self._create = create_user

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "users.list")
        async with self._uow_factory() as uow:
            users = await uow.users.list()
        resp.media = self._shaper.shape(principal, {"items": users}, "users.list")

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "users.create")
        body = await read_body(req)
        role_ids = body.get("role_ids")
        user = await self._create.execute(
            name=require_str(body, "name"),
            email=require_str(body, "email"),
            is_active=optional_bool(body, "is_active") is not False,
            role_ids=parse_uuid_list(role_ids, "role_ids") if role_ids is not None else None,
        )
        resp.media = self._shaper.shape(principal, user, "users.create")
        resp.status = falcon.HTTP_201


class UserResource:
    """GET/PATCH/DELETE /v1/users/{user_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        guard: AccessGuard,
        shaper: ResponseShaper,
        update_user: UpdateUserUseCase,
        delete_user: DeleteUserUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper
        self._update = update_user
        self._delete = delete_user

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Role-less users may read only their own record."""
        principal = req.context.user
        uid = parse_uuid(user_id, "user ID")
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(uid)
        self._guard.authorize(principal, "users.get", instance=user)
        if user is None:
            raise NotFound("User", user_id)
        resp.media = self._shaper.shape(principal, user, "users.get")

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "users.update")
        uid = parse_uuid(user_id, "user ID")
        body = await read_body(req)
        role_ids = body.get("role_ids")
        user = await self._update.execute(
            uid,
            name=optional_str(body, "name"),
            email=optional_str(body, "email"),
            is_active=optional_bool(body, "is_active"),
            role_ids=parse_uuid_list(role_ids, "role_ids") if role_ids is not None else None,
        )
        resp.media = self._shaper.shape(principal, user, "users.update")

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        self._guard.authorize(req.context.user, "users.delete")
        await self._delete.execute(parse_uuid(user_id, "user ID"))
        resp.status = falcon.HTTP_204


class MeResource:
    """GET /v1/me - the authenticated user."""

    def __init__(self, guard: AccessGuard, shaper: ResponseShaper) -> None:
        self._guard = guard
        self._shaper = shaper

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "users.me")
        resp.media = self._shaper.shape(principal, principal, "users.me")
