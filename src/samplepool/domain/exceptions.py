"""Domain exceptions."""


class SamplePoolError(Exception):
    """Base exception for SamplePool."""

    pass


class AuthenticationRequired(SamplePoolError):
    """No valid credential was presented where one is required."""

    pass


class PermissionDenied(SamplePoolError):
    """User does not have permission for the requested action."""

    pass


class NotFound(SamplePoolError):
    """Requested resource was not found."""

    def __init__(self, entity: str, identifier: str | None = None) -> None:
        self.entity = entity
        self.identifier = identifier
        if identifier is None:
            super().__init__(f"{entity} not found")
        else:
            super().__init__(f'{entity} with ID "{identifier}" not found')


class Conflict(SamplePoolError):
    """Uniqueness violation or invalid state transition."""

    pass


class ValidationError(SamplePoolError):
    """Validation failed for input data."""

    pass


class InvalidSignature(ValidationError):
    """Payment callback signature does not match the expected one."""

    pass


class PaymentGatewayError(SamplePoolError):
    """Call to the payment provider failed."""

    pass
