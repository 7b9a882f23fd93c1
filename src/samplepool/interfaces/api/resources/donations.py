"""Donation API resources."""

import falcon
import falcon.asgi

from samplepool.application.authorization import AccessGuard, ResponseShaper
from samplepool.application.dto.donation_dto import CreateDonationInput, VerifyPaymentInput
from samplepool.application.use_cases.donation.create_donation_order import (
    CreateDonationOrderUseCase,
)
from samplepool.application.use_cases.donation.pool_donation_stats import (
    GetPoolDonationStatsUseCase,
)
from samplepool.application.use_cases.donation.verify_payment import VerifyPaymentUseCase
from samplepool.domain.exceptions import NotFound, ValidationError
from samplepool.domain.value_objects import DonationStatus
from samplepool.interfaces.api.params import (
    optional_str,
    parse_decimal,
    parse_uuid,
    read_body,
    require,
    require_str,
)


class DonationsResource:
    """GET /v1/donations (moderators, filterable) and POST /v1/donations (open an order)."""

    def __init__(
        self,
        unit_of_work_factory: type,
        guard: AccessGuard,
        shaper: ResponseShaper,
        create_order: CreateDonationOrderUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper
        self._create_order = create_order

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "donations.list")
        pool_id = req.get_param("pool_id")
        user_id = req.get_param("user_id")
        status = req.get_param("status")
        try:
            status_filter = DonationStatus(status) if status else None
        except ValueError as e:
            raise ValidationError(f"Invalid status: {status}") from e
        async with self._uow_factory() as uow:
            donations = await uow.donations.list(
                pool_id=parse_uuid(pool_id, "pool_id") if pool_id else None,
                user_id=parse_uuid(user_id, "user_id") if user_id else None,
                status=status_filter,
            )
        resp.media = self._shaper.shape(principal, {"items": donations}, "donations.list")

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Anonymous donors must send anonymous_donor_name and anonymous_donor_email."""
        principal = req.context.user
        self._guard.authorize(principal, "donations.create_order")
        body = await read_body(req)
        order = await self._create_order.execute(
            principal,
            CreateDonationInput(
                pool_id=parse_uuid(require(body, "pool_id"), "pool_id"),
                amount=parse_decimal(require(body, "amount"), "amount"),
                message=optional_str(body, "message"),
                anonymous_donor_name=optional_str(body, "anonymous_donor_name"),
                anonymous_donor_email=optional_str(body, "anonymous_donor_email"),
                anonymous_donor_phone=optional_str(body, "anonymous_donor_phone"),
            ),
        )
        resp.media = self._shaper.shape(principal, order, "donations.create_order")
        resp.status = falcon.HTTP_201


class DonationVerifyResource:
    """POST /v1/donations/verify - payment callback from the checkout."""

    def __init__(
        self, guard: AccessGuard, shaper: ResponseShaper, verify_payment: VerifyPaymentUseCase
    ) -> None:
        self._guard = guard
        self._shaper = shaper
        self._verify = verify_payment

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "donations.verify_payment")
        body = await read_body(req)
        result = await self._verify.execute(
            VerifyPaymentInput(
                order_id=require_str(body, "order_id"),
                payment_id=require_str(body, "payment_id"),
                signature=require_str(body, "signature"),
            )
        )
        resp.media = {
            "message": "Payment verified successfully",
            "donation": self._shaper.shape(principal, result.donation, "donations.verify_payment"),
            "pool": self._shaper.shape(principal, result.pool, "pools.get"),
            "target_reached": result.target_reached,
        }


class DonationResource:
    """GET /v1/donations/{donation_id}."""

    def __init__(
        self, unit_of_work_factory: type, guard: AccessGuard, shaper: ResponseShaper
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, donation_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "donations.get")
        async with self._uow_factory() as uow:
            donation = await uow.donations.get_by_id(parse_uuid(donation_id, "donation ID"))
        if donation is None:
            raise NotFound("Donation", donation_id)
        resp.media = self._shaper.shape(principal, donation, "donations.get")


class PoolDonationsResource:
    """GET /v1/pools/{pool_id}/donations - successful donations of a pool."""

    def __init__(
        self, unit_of_work_factory: type, guard: AccessGuard, shaper: ResponseShaper
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, pool_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "donations.by_pool")
        pid = parse_uuid(pool_id, "pool ID")
        async with self._uow_factory() as uow:
            if await uow.pools.get_by_id(pid) is None:
                raise NotFound("Pool", pool_id)
            donations = await uow.donations.list(pool_id=pid, status=DonationStatus.SUCCESS)
        resp.media = self._shaper.shape(principal, {"items": donations}, "donations.by_pool")


class PoolDonationStatsResource:
    """GET /v1/pools/{pool_id}/donations/stats."""

    def __init__(
        self,
        guard: AccessGuard,
        shaper: ResponseShaper,
        pool_stats: GetPoolDonationStatsUseCase,
    ) -> None:
        self._guard = guard
        self._shaper = shaper
        self._stats = pool_stats

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, pool_id: str
    ) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "donations.pool_stats")
        stats = await self._stats.execute(parse_uuid(pool_id, "pool ID"))
        resp.media = self._shaper.shape(principal, stats, "donations.pool_stats")


class MyDonationsResource:
    """GET /v1/me/donations - donations made by the authenticated user."""

    def __init__(
        self, unit_of_work_factory: type, guard: AccessGuard, shaper: ResponseShaper
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = guard
        self._shaper = shaper

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = req.context.user
        self._guard.authorize(principal, "donations.mine")
        async with self._uow_factory() as uow:
            donations = await uow.donations.list(user_id=principal.id)
        resp.media = self._shaper.shape(principal, {"items": donations}, "donations.mine")
