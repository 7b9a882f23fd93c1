"""Error handlers - translate domain exceptions to HTTP responses."""

import logging

import falcon
import falcon.asgi

from samplepool.domain.exceptions import (
    AuthenticationRequired,
    Conflict,
    NotFound,
    PaymentGatewayError,
    PermissionDenied,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_EXCEPTION: list[tuple[type[Exception], str]] = [
    (AuthenticationRequired, falcon.HTTP_401),
    (PermissionDenied, falcon.HTTP_403),
    (NotFound, falcon.HTTP_404),
    (Conflict, falcon.HTTP_409),
    (ValidationError, falcon.HTTP_400),
    (PaymentGatewayError, falcon.HTTP_502),
]


def _domain_handler(status: str):
    async def handle(req, resp, ex, params) -> None:
        resp.status = status
        resp.media = {"error": str(ex)}

    return handle


async def handle_unexpected(req, resp, ex, params) -> None:
    """Log and answer 500 for anything not handled elsewhere."""
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal server error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Register handlers. Falcon picks the most specific handler per exception type."""
    app.add_error_handler(Exception, handle_unexpected)
    for exc_type, status in STATUS_BY_EXCEPTION:
        app.add_error_handler(exc_type, _domain_handler(status))
