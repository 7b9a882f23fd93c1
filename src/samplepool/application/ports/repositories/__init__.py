"""Repository ports."""

from samplepool.application.ports.repositories.donation_repository import (
    DonationRepository,
)
from samplepool.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from samplepool.application.ports.repositories.pool_repository import PoolRepository
from samplepool.application.ports.repositories.role_repository import RoleRepository
from samplepool.application.ports.repositories.sample_product_repository import (
    SampleProductRepository,
)
from samplepool.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "DonationRepository",
    "PermissionRepository",
    "PoolRepository",
    "RoleRepository",
    "SampleProductRepository",
    "UserRepository",
]
