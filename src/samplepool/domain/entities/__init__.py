"""Domain entities."""

from samplepool.domain.entities.donation import Donation
from samplepool.domain.entities.permission import Permission
from samplepool.domain.entities.pool import Pool
from samplepool.domain.entities.role import SUPERADMIN_ROLE, Role
from samplepool.domain.entities.sample_product import SampleProduct
from samplepool.domain.entities.user import User

__all__ = [
    "SUPERADMIN_ROLE",
    "Donation",
    "Permission",
    "Pool",
    "Role",
    "SampleProduct",
    "User",
]
