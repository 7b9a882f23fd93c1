"""Domain value objects."""

from samplepool.domain.value_objects.action import Action
from samplepool.domain.value_objects.donation_status import DonationStatus
from samplepool.domain.value_objects.email import normalize_email
from samplepool.domain.value_objects.money import quantize, to_minor_units
from samplepool.domain.value_objects.pool_status import PoolStatus
from samplepool.domain.value_objects.resource_type import ResourceType
from samplepool.domain.value_objects.serialization_group import SerializationGroup

__all__ = [
    "Action",
    "DonationStatus",
    "PoolStatus",
    "ResourceType",
    "SerializationGroup",
    "normalize_email",
    "quantize",
    "to_minor_units",
]
