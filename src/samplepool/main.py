"""Application entry point and composition root."""

import logging

from samplepool import __version__
from samplepool.config import get_settings
from samplepool.infrastructure.auth.keycloak_provider import KeycloakProvider
from samplepool.infrastructure.payment.razorpay_gateway import RazorpayGateway
from samplepool.infrastructure.persistence.postgres.connection import create_pool
from samplepool.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from samplepool.interfaces.api.app import create_app
from samplepool.interfaces.api.middleware.auth import AuthMiddleware
from samplepool.interfaces.api.middleware.cors import CORSMiddleware
from samplepool.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from samplepool.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def create_samplepool_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    setup_logging("DEBUG" if settings.debug else settings.log_level)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        timeout=settings.db_pool_timeout_seconds,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set; all requests are anonymous")

    gateway = RazorpayGateway(
        key_id=settings.razorpay_key_id,
        key_secret=settings.razorpay_key_secret,
        api_url=settings.razorpay_api_url,
        timeout=settings.payment_timeout_seconds,
    )

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    app = create_app(
        uow_factory,
        gateway,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool, open_timeout=settings.db_pool_timeout_seconds),
            AuthMiddleware(keycloak, uow_factory),
        ],
        currency=settings.payment_currency,
    )
    logger.info("SamplePool v%s ready (%s)", __version__, settings.environment)
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    uvicorn.run(
        "samplepool.main:create_samplepool_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    run_server()
