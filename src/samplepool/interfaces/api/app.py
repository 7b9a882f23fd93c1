"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from samplepool.application.authorization import AccessGuard, ResponseShaper
from samplepool.application.ports import PaymentGateway
from samplepool.application.use_cases.donation.create_donation_order import (
    CreateDonationOrderUseCase,
)
from samplepool.application.use_cases.donation.pool_donation_stats import (
    GetPoolDonationStatsUseCase,
)
from samplepool.application.use_cases.donation.verify_payment import VerifyPaymentUseCase
from samplepool.application.use_cases.permission.manage_permission import (
    CreatePermissionUseCase,
    DeletePermissionUseCase,
    RestorePermissionUseCase,
    UpdatePermissionUseCase,
)
from samplepool.application.use_cases.pool.create_pool import CreatePoolUseCase
from samplepool.application.use_cases.pool.manage_pool import (
    DeletePoolUseCase,
    ModeratePoolUseCase,
    RestorePoolUseCase,
)
from samplepool.application.use_cases.pool.update_pool import UpdatePoolUseCase
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
from samplepool.application.use_cases.sample_product.manage_sample_product import (
    CreateSampleProductUseCase,
    DeleteSampleProductUseCase,
    RestoreSampleProductUseCase,
    UpdateSampleProductUseCase,
)
from samplepool.application.use_cases.user.manage_user import (
    CreateUserUseCase,
    DeleteUserUseCase,
    UpdateUserUseCase,
)
from samplepool.interfaces.api.errors import register_error_handlers
from samplepool.interfaces.api.resources.donations import (
    DonationResource,
    DonationsResource,
    DonationVerifyResource,
    MyDonationsResource,
    PoolDonationsResource,
    PoolDonationStatsResource,
)
from samplepool.interfaces.api.resources.health import HealthResource
from samplepool.interfaces.api.resources.permissions import (
    PermissionResource,
    PermissionRestoreResource,
    PermissionsResource,
)
from samplepool.interfaces.api.resources.pools import (
    MyPoolsResource,
    PoolHardDeleteResource,
    PoolModerationResource,
    PoolResource,
    PoolRestoreResource,
    PoolsResource,
)
from samplepool.interfaces.api.resources.roles import (
    RolePermissionsResource,
    RoleResource,
    RoleRestoreResource,
    RolesResource,
)
from samplepool.interfaces.api.resources.sample_products import (
    SampleProductResource,
    SampleProductRestoreResource,
    SampleProductsResource,
)
from samplepool.interfaces.api.resources.users import MeResource, UserResource, UsersResource


def create_app(
    unit_of_work_factory: type,
    payment_gateway: PaymentGateway,
    middleware: list | None = None,
    currency: str = "INR",
) -> App:
    """Create Falcon ASGI app: use cases, resources, routes and error handlers."""
    uow = unit_of_work_factory
    guard = AccessGuard()
    shaper = ResponseShaper()

    delete_pool = DeletePoolUseCase(uow)
    moderation = PoolModerationResource(guard, shaper, ModeratePoolUseCase(uow))

    app = falcon.asgi.App(middleware=middleware or [])
    register_error_handlers(app)

    health = HealthResource(uow)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")

    app.add_route("/v1/me", MeResource(guard, shaper))
    app.add_route("/v1/me/pools", MyPoolsResource(uow, guard, shaper))
    app.add_route("/v1/me/donations", MyDonationsResource(uow, guard, shaper))

    app.add_route("/v1/users", UsersResource(uow, guard, shaper, CreateUserUseCase(uow)))
    app.add_route(
        "/v1/users/{user_id}",
        UserResource(uow, guard, shaper, UpdateUserUseCase(uow), DeleteUserUseCase(uow)),
    )

    app.add_route("/v1/roles", RolesResource(uow, guard, shaper, CreateRoleUseCase(uow)))
    app.add_route(
        "/v1/roles/{role_id}",
        RoleResource(uow, guard, shaper, UpdateRoleUseCase(uow), DeleteRoleUseCase(uow)),
    )
    app.add_route(
        "/v1/roles/{role_id}/restore",
        RoleRestoreResource(guard, shaper, RestoreRoleUseCase(uow)),
    )
    app.add_route(
        "/v1/roles/{role_id}/permissions",
        RolePermissionsResource(
            guard,
            shaper,
            AssignRolePermissionsUseCase(uow),
            RemoveRolePermissionsUseCase(uow),
        ),
    )

    app.add_route(
        "/v1/permissions",
        PermissionsResource(uow, guard, shaper, CreatePermissionUseCase(uow)),
    )
    app.add_route(
        "/v1/permissions/{permission_id}",
        PermissionResource(
            uow, guard, shaper, UpdatePermissionUseCase(uow), DeletePermissionUseCase(uow)
        ),
    )
    app.add_route(
        "/v1/permissions/{permission_id}/restore",
        PermissionRestoreResource(guard, shaper, RestorePermissionUseCase(uow)),
    )

    app.add_route(
        "/v1/sample-products",
        SampleProductsResource(uow, guard, shaper, CreateSampleProductUseCase(uow)),
    )
    app.add_route(
        "/v1/sample-products/{product_id}",
        SampleProductResource(
            uow, guard, shaper, UpdateSampleProductUseCase(uow), DeleteSampleProductUseCase(uow)
        ),
    )
    app.add_route(
        "/v1/sample-products/{product_id}/restore",
        SampleProductRestoreResource(guard, shaper, RestoreSampleProductUseCase(uow)),
    )

    app.add_route("/v1/pools", PoolsResource(uow, guard, shaper, CreatePoolUseCase(uow)))
    app.add_route(
        "/v1/pools/{pool_id}",
        PoolResource(uow, guard, shaper, UpdatePoolUseCase(uow), delete_pool),
    )
    app.add_route("/v1/pools/{pool_id}/hard", PoolHardDeleteResource(guard, delete_pool))
    app.add_route(
        "/v1/pools/{pool_id}/restore", PoolRestoreResource(guard, shaper, RestorePoolUseCase(uow))
    )
    app.add_route("/v1/pools/{pool_id}/approve", moderation, suffix="approve")
    app.add_route("/v1/pools/{pool_id}/reject", moderation, suffix="reject")
    app.add_route("/v1/pools/{pool_id}/donations", PoolDonationsResource(uow, guard, shaper))
    app.add_route(
        "/v1/pools/{pool_id}/donations/stats",
        PoolDonationStatsResource(guard, shaper, GetPoolDonationStatsUseCase(uow)),
    )

    app.add_route(
        "/v1/donations",
        DonationsResource(
            uow,
            guard,
            shaper,
            CreateDonationOrderUseCase(uow, payment_gateway, currency=currency),
        ),
    )
    app.add_route(
        "/v1/donations/verify",
        DonationVerifyResource(guard, shaper, VerifyPaymentUseCase(uow, payment_gateway)),
    )
    app.add_route("/v1/donations/{donation_id}", DonationResource(uow, guard, shaper))
    return app
