"""Request parsing helpers. Malformed input raises ValidationError (400)."""

from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

import falcon.asgi

from samplepool.domain.exceptions import ValidationError


def parse_uuid(value: Any, name: str = "id") -> UUID:
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {name}") from e


def parse_uuid_list(value: Any, name: str) -> list[UUID]:
    if not isinstance(value, list):
        raise ValidationError(f"{name} must be a list")
    return [parse_uuid(v, name) for v in value]


def parse_decimal(value: Any, name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(f"{name} must be a number") from e
    if not number.is_finite():
        raise ValidationError(f"{name} must be a finite number")
    return number


def optional_bool(body: dict, name: str) -> bool | None:
    value = body.get(name)
    if value is not None and not isinstance(value, bool):
        raise ValidationError(f"{name} must be a boolean")
    return value


async def read_body(req: falcon.asgi.Request) -> dict[str, Any]:
    """JSON object body of req."""
    try:
        body = await req.get_media()
    except falcon.MediaNotFoundError as e:
        raise ValidationError("Request body is required") from e
    except falcon.MediaMalformedError as e:
        raise ValidationError("Malformed JSON body") from e
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def require(body: dict[str, Any], name: str) -> Any:
    value = body.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Missing required field: {name}")
    return value


def require_str(body: dict[str, Any], name: str) -> str:
    value = require(body, name)
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value


def optional_str(body: dict[str, Any], name: str) -> str | None:
    value = body.get(name)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value
