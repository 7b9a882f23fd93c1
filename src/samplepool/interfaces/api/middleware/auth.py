"""Auth middleware - resolves the bearer token to a local user or leaves the request anonymous."""

import logging

import falcon.asgi

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """Sets req.context.user to the active local User behind the token, or None.

    The user is loaded with its roles and permissions so abilities are built
    from current data on every request.
    """

    def __init__(self, keycloak_provider, unit_of_work_factory: type) -> None:
        self._keycloak = keycloak_provider
        self._uow_factory = unit_of_work_factory

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return

        claims = self._keycloak.decode_token(auth[7:])
        if not claims or not claims.email:
            return

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(claims.email)
        if user is None or not user.is_active:
            logger.info("Token for %s has no active local user", claims.email)
            return
        req.context.user = user
