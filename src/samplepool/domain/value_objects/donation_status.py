"""Donation payment status."""

from enum import StrEnum


class DonationStatus(StrEnum):
    """States a donation moves through during payment."""

    PENDING = "Pending"
    SUCCESS = "Success"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        return self is not DonationStatus.PENDING
