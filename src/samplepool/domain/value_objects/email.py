"""Email address normalization."""

import re

from samplepool.domain.exceptions import ValidationError

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str | None) -> str:
    """Lowercased, stripped address. Raises ValidationError when malformed."""
    email = (value or "").strip().lower()
    if not _EMAIL.match(email):
        raise ValidationError("A valid email is required")
    return email
