"""Permission catalog API resources."""

import falcon
import falcon.asgi

from samplepool.application.authorization import AccessGuard, ResponseShaper
from samplepool.application.use_cases.permission.manage_permission import (
    CreatePermissionUseCase,
    DeletePermissionUseCase,
    RestorePermissionUseCase,
    UpdatePermissionUseCase,
)
from samplepool.domain.exceptions import NotFound
from samplepool.interfaces.api.params import (
    optional_bool,
    optional_str,
    parse_uuid,
    read_body,
    require_str,
)


class PermissionsResource:
    """GET/POST /v1/permissions. GET accepts ?resource= and ?include_deleted=."""

    def __init__(
        self,
        unit_of_work_factory: type,
        guard: AccessGuard,
        shaper: ResponseShaper,
        create_permission: CreatePermissionUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper
        self._create = create_permission

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "permissions.list")
        resource = req.get_param("resource")
        async with self._uow_factory() as uow:
            if resource:
                permissions = await uow.permissions.list_by_resource(resource)
            else:
                permissions = await uow.permissions.list(
                    include_deleted=req.get_param_as_bool("include_deleted") or False
                )
        resp.media = self._shaper.shape(principal, {"items": permissions}, "permissions.list")

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "permissions.create")
        body = await read_body(req)
        permission = await self._create.execute(
            name=require_str(body, "name"),
            resource=require_str(body, "resource"),
            action=require_str(body, "action"),
            description=optional_str(body, "description"),
            is_active=optional_bool(body, "is_active") is not False,
        )
        resp.media = self._shaper.shape(principal, permission, "permissions.create")
        resp.status = falcon.HTTP_201


class PermissionResource:
    """GET/PATCH/DELETE /v1/permissions/{permission_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        guard: AccessGuard,
        shaper: ResponseShaper,
        update_permission: UpdatePermissionUseCase,
        delete_permission: DeletePermissionUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper
        self._update = update_permission
        self._delete = delete_permission

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permission_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "permissions.get")
        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(parse_uuid(permission_id, "permission ID"))
        if permission is None:
            raise NotFound("Permission", permission_id)
        resp.media = self._shaper.shape(principal, permission, "permissions.get")

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permission_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "permissions.update")
        body = await read_body(req)
        permission = await self._update.execute(
            parse_uuid(permission_id, "permission ID"),
            name=optional_str(body, "name"),
            resource=optional_str(body, "resource"),
            action=optional_str(body, "action"),
            description=optional_str(body, "description"),
            is_active=optional_bool(body, "is_active"),
        )
        resp.media = self._shaper.shape(principal, permission, "permissions.update")

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permission_id: str
    ) -> None:
        self._guard.authorize(req.context.user, "permissions.delete")
        await self._delete.execute(parse_uuid(permission_id, "permission ID"))
        resp.status = falcon.HTTP_204


class PermissionRestoreResource:
    """POST /v1/permissions/{permission_id}/restore."""

    def __init__(
        self,
        guard: AccessGuard,
        shaper: ResponseShaper,
        restore_permission: RestorePermissionUseCase,
    ) -> None:
        self._guard = guard
        self._shaper = shaper
        self._restore = restore_permission

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permission_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "permissions.restore")
        permission = await self._restore.execute(parse_uuid(permission_id, "permission ID"))
        resp.media = self._shaper.shape(principal, permission, "permissions.restore")
