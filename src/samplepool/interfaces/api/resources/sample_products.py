"""Sample product API resources."""

import falcon
import falcon.asgi

from samplepool.application.authorization import AccessGuard, ResponseShaper, build_ability
from samplepool.application.use_cases.sample_product.manage_sample_product import (
    CreateSampleProductUseCase,
    DeleteSampleProductUseCase,
    RestoreSampleProductUseCase,
    UpdateSampleProductUseCase,
)
from samplepool.domain.exceptions import NotFound
from samplepool.domain.value_objects import Action, ResourceType
from samplepool.interfaces.api.params import (
    optional_bool,
    optional_str,
    parse_uuid,
    read_body,
    require_str,
)


def _can_see_hidden(principal) -> bool:
    return principal is not None and build_ability(principal).can(Action.MANAGE, ResourceType.ALL)


class SampleProductsResource:
    """GET/POST /v1/sample-products.

    include_inactive / include_deleted are honoured only for moderators.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        guard: AccessGuard,
        shaper: ResponseShaper,
        create_product: CreateSampleProductUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper
        self._create = create_product

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "sample_products.list")
        hidden = _can_see_hidden(principal)
        async with self._uow_factory() as uow:
            products = await uow.sample_products.list(
                include_inactive=hidden and (req.get_param_as_bool("include_inactive") or False),
                include_deleted=hidden and (req.get_param_as_bool("include_deleted") or False),
            )
        resp.media = self._shaper.shape(principal, {"items": products}, "sample_products.list")

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "sample_products.create")
        body = await read_body(req)
        product = await self._create.execute(
            name=require_str(body, "name"),
            code=optional_str(body, "code"),
            description=optional_str(body, "description"),
            is_active=optional_bool(body, "is_active") is not False,
        )
        resp.media = self._shaper.shape(principal, product, "sample_products.create")
        resp.status = falcon.HTTP_201


class SampleProductResource:
    """GET/PATCH/DELETE /v1/sample-products/{product_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        guard: AccessGuard,
        shaper: ResponseShaper,
        update_product: UpdateSampleProductUseCase,
        delete_product: DeleteSampleProductUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper
        self._update = update_product
        self._delete = delete_product

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, product_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "sample_products.get")
        async with self._uow_factory() as uow:
            product = await uow.sample_products.get_by_id(parse_uuid(product_id, "product ID"))
        if product is None or (not product.is_active and not _can_see_hidden(principal)):
            raise NotFound("Sample product", product_id)
        resp.media = self._shaper.shape(principal, product, "sample_products.get")

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, product_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "sample_products.update")
        body = await read_body(req)
        product = await self._update.execute(
            parse_uuid(product_id, "product ID"),
            name=optional_str(body, "name"),
            code=optional_str(body, "code"),
            description=optional_str(body, "description"),
            is_active=optional_bool(body, "is_active"),
        )
        resp.media = self._shaper.shape(principal, product, "sample_products.update")

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, product_id: str
    ) -> None:
        self._guard.authorize(req.context.user, "sample_products.delete")
        await self._delete.execute(parse_uuid(product_id, "product ID"))
        resp.status = falcon.HTTP_204


class SampleProductRestoreResource:
    """POST /v1/sample-products/{product_id}/restore."""

    def __init__(
        self,
        guard: AccessGuard,
        shaper: ResponseShaper,
        restore_product: RestoreSampleProductUseCase,
    ) -> None:
        self._guard = guard
        self._shaper = shaper
        self._restore = restore_product

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, product_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "sample_products.restore")
        product = await self._restore.execute(parse_uuid(product_id, "product ID"))
        resp.media = self._shaper.shape(principal, product, "sample_products.restore")
