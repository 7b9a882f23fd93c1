"""Pool lifecycle status."""

from enum import StrEnum


class PoolStatus(StrEnum):
    """Lifecycle of a pool from creation to lab results."""

    CREATED = "Created"
    FUNDING = "Funding"
    TARGET_REACHED = "Target Reached"
    SENT_TO_LAB = "Sent to Lab"
    RESULTS_READY = "Results Ready"
