"""Role API resources."""

import falcon
import falcon.asgi

from samplepool.application.authorization import AccessGuard, ResponseShaper
from samplepool.application.use_cases.role.create_role import CreateRoleUseCase
from samplepool.application.use_cases.role.role_permissions import (
    AssignRolePermissionsUseCase,
    RemoveRolePermissionsUseCase,
)
from samplepool.application.use_cases.role.update_role import (
    DeleteRoleUseCase,
    RestoreRoleUseCase,
    UpdateRoleUseCase,
)
from samplepool.domain.exceptions import NotFound
from samplepool.interfaces.api.params import (
    optional_bool,
    optional_str,
    parse_uuid,
    parse_uuid_list,
    read_body,
    require,
    require_str,
)


class RolesResource:
    """GET/POST /v1/roles."""

    def __init__(
        self,
        unit_of_work_factory: type,
        guard: AccessGuard,
        shaper: ResponseShaper,
        create_role: CreateRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper
        self._create = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "roles.list")
        include_deleted = req.get_param_as_bool("include_deleted") or False
        async with self._uow_factory() as uow:
            roles = await uow.roles.list(include_deleted=include_deleted)
        resp.media = self._shaper.shape(principal, {"items": roles}, "roles.list")

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "roles.create")
        body = await read_body(req)
        permission_ids = body.get("permission_ids")
        role = await self._create.execute(
            name=require_str(body, "name"),
            description=optional_str(body, "description"),
            is_active=optional_bool(body, "is_active") is not False,
            permission_ids=(
                parse_uuid_list(permission_ids, "permission_ids")
                if permission_ids is not None
                else None
            ),
        )
        resp.media = self._shaper.shape(principal, role, "roles.create")
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/PATCH/DELETE /v1/roles/{role_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        guard: AccessGuard,
        shaper: ResponseShaper,
        update_role: UpdateRoleUseCase,
        delete_role: DeleteRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper
        self._update = update_role
        self._delete = delete_role

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "roles.get")
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(parse_uuid(role_id, "role ID"))
        if role is None:
            raise NotFound("Role", role_id)
        resp.media = self._shaper.shape(principal, role, "roles.get")

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "roles.update")
        body = await read_body(req)
        role = await self._update.execute(
            parse_uuid(role_id, "role ID"),
            name=optional_str(body, "name"),
            description=optional_str(body, "description"),
            is_active=optional_bool(body, "is_active"),
        )
        resp.media = self._shaper.shape(principal, role, "roles.update")

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        self._guard.authorize(req.context.user, "roles.delete")
        await self._delete.execute(parse_uuid(role_id, "role ID"))
        resp.status = falcon.HTTP_204


class RoleRestoreResource:
    """POST /v1/roles/{role_id}/restore."""

    def __init__(
        self, guard: AccessGuard, shaper: ResponseShaper, restore_role: RestoreRoleUseCase
    ) -> None:
        self._guard = guard
        self._shaper = shaper
        self._restore = restore_role

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "roles.restore")
        role = await self._restore.execute(parse_uuid(role_id, "role ID"))
        resp.media = self._shaper.shape(principal, role, "roles.restore")


class RolePermissionsResource:
    """POST/DELETE /v1/roles/{role_id}/permissions - replace or remove permission links."""

    def __init__(
        self,
        guard: AccessGuard,
        shaper: ResponseShaper,
        assign_permissions: AssignRolePermissionsUseCase,
        remove_permissions: RemoveRolePermissionsUseCase,
    ) -> None:
        self._guard = guard
        self._shaper = shaper
        self._assign = assign_permissions
        self._remove = remove_permissions

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "roles.assign_permissions")
        body = await read_body(req)
        role = await self._assign.execute(
            parse_uuid(role_id, "role ID"),
            parse_uuid_list(require(body, "permission_ids"), "permission_ids"),
        )
        resp.media = self._shaper.shape(principal, role, "roles.assign_permissions")

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "roles.remove_permissions")
        body = await read_body(req)
        role = await self._remove.execute(
            parse_uuid(role_id, "role ID"),
            parse_uuid_list(require(body, "permission_ids"), "permission_ids"),
        )
        resp.media = self._shaper.shape(principal, role, "roles.remove_permissions")
