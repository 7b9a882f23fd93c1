"""Pytest fixtures for SamplePool tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from samplepool.application.ports import PaymentOrder
from samplepool.domain.entities import Donation, Permission, Pool, Role, SampleProduct, User
from samplepool.domain.exceptions import PaymentGatewayError
from samplepool.domain.value_objects import DonationStatus, PoolStatus
from samplepool.infrastructure.payment.razorpay_gateway import payment_signature

PAYMENT_SECRET = "test-secret"


# --- Entity builders ---


def make_permission(resource: str, action: str, **kwargs) -> Permission:
    now = datetime.now(UTC)
    defaults = dict(
        id=uuid4(),
        name=f"{resource}s.{action}",
        resource=resource,
        action=action,
        created_at=now,
        updated_at=now,
    )
    defaults.update(kwargs)
    return Permission(**defaults)


def make_role(name: str, permissions: list[Permission] | None = None, **kwargs) -> Role:
    now = datetime.now(UTC)
    return Role(
        id=kwargs.pop("id", uuid4()),
        name=name,
        created_at=now,
        updated_at=now,
        permissions=list(permissions or []),
        **kwargs,
    )


def make_user(roles: list[Role] | None = None, **kwargs) -> User:
    now = datetime.now(UTC)
    uid = kwargs.pop("id", uuid4())
    return User(
        id=uid,
        name=kwargs.pop("name", "Test User"),
        email=kwargs.pop("email", f"user-{uid.hex[:8]}@example.com"),
        created_at=now,
        updated_at=now,
        roles=list(roles or []),
        **kwargs,
    )


def make_superadmin(**kwargs) -> User:
    return make_user([make_role("superadmin")], **kwargs)


def make_product(name: str = "Whey Protein", **kwargs) -> SampleProduct:
    now = datetime.now(UTC)
    return SampleProduct(id=kwargs.pop("id", uuid4()), name=name, created_at=now, updated_at=now, **kwargs)


def make_pool(user_id: UUID, category_id: UUID, **kwargs) -> Pool:
    now = datetime.now(UTC)
    defaults = dict(
        id=uuid4(),
        name="Batch pool",
        sample_source="Online store",
        batch_number=f"B-{uuid4().hex[:6]}",
        category_id=category_id,
        user_id=user_id,
        created_at=now,
        updated_at=now,
        pool_price=Decimal("100.00"),
        is_approved=True,
    )
    defaults.update(kwargs)
    return Pool(**defaults)


# --- Fake repositories ---


class FakePermissionRepository:
    """In-memory permission repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Permission] = {}

    async def get_by_id(self, permission_id: UUID, include_deleted: bool = False) -> Permission | None:
        p = self._by_id.get(permission_id)
        if not p or (not include_deleted and p.deleted_at):
            return None
        return p

    async def get_by_name(self, name: str) -> Permission | None:
        for p in self._by_id.values():
            if p.name == name and p.deleted_at is None:
                return p
        return None

    async def get_many(self, permission_ids: list[UUID]) -> list[Permission]:
        return [p for pid in dict.fromkeys(permission_ids) if (p := await self.get_by_id(pid))]

    async def list(self, include_deleted: bool = False) -> list[Permission]:
        items = [p for p in self._by_id.values() if include_deleted or p.deleted_at is None]
        return sorted(items, key=lambda p: (p.resource, p.action))

    async def list_by_resource(self, resource: str) -> list[Permission]:
        return [p for p in await self.list() if p.resource == resource and p.is_active]

    async def create(self, permission: Permission) -> Permission:
        self._by_id[permission.id] = permission
        return permission

    async def update(self, permission: Permission) -> None:
        self._by_id[permission.id] = permission

    async def soft_delete(self, permission_id: UUID) -> None:
        p = self._by_id.get(permission_id)
        if p:
            self._by_id[permission_id] = replace(p, deleted_at=datetime.now(UTC))

    async def restore(self, permission_id: UUID) -> None:
        p = self._by_id.get(permission_id)
        if p:
            self._by_id[permission_id] = replace(p, deleted_at=None)

    def add(self, permission: Permission) -> None:
        """Helper to add permission for tests."""
        self._by_id[permission.id] = permission


class FakeRoleRepository:
    """In-memory role repository. Permission links resolve against the permission repository."""

    def __init__(self, permissions: FakePermissionRepository) -> None:
        self._permissions = permissions
        self._by_id: dict[UUID, Role] = {}
        self._links: dict[UUID, list[UUID]] = {}

    def _resolve(self, role: Role) -> Role:
        role.permissions = [
            p
            for pid in self._links.get(role.id, [])
            if (p := self._permissions._by_id.get(pid)) and p.deleted_at is None
        ]
        return role

    async def get_by_id(self, role_id: UUID, include_deleted: bool = False) -> Role | None:
        role = self._by_id.get(role_id)
        if not role or (not include_deleted and role.deleted_at):
            return None
        return self._resolve(role)

    async def get_by_name(self, name: str) -> Role | None:
        for role in self._by_id.values():
            if role.name == name and role.deleted_at is None:
                return self._resolve(role)
        return None

    async def get_many(self, role_ids: list[UUID]) -> list[Role]:
        return [r for rid in dict.fromkeys(role_ids) if (r := await self.get_by_id(rid))]

    async def list(self, include_deleted: bool = False) -> list[Role]:
        items = [r for r in self._by_id.values() if include_deleted or r.deleted_at is None]
        return [self._resolve(r) for r in sorted(items, key=lambda r: r.name)]

    async def create(self, role: Role) -> Role:
        self._by_id[role.id] = role
        self._links.setdefault(role.id, [])
        return role

    async def update(self, role: Role) -> None:
        self._by_id[role.id] = role

    async def set_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        self._links[role_id] = list(dict.fromkeys(permission_ids))

    async def soft_delete(self, role_id: UUID) -> None:
        role = self._by_id.get(role_id)
        if role:
            role.deleted_at = datetime.now(UTC)

    async def restore(self, role_id: UUID) -> None:
        role = self._by_id.get(role_id)
        if role:
            role.deleted_at = None

    def add(self, role: Role) -> None:
        """Helper to add role (and its permissions) for tests."""
        self._by_id[role.id] = role
        for p in role.permissions:
            self._permissions.add(p)
        self._links[role.id] = [p.id for p in role.permissions]


class FakeUserRepository:
    """In-memory user repository. Role links resolve against the role repository."""

    def __init__(self, roles: FakeRoleRepository) -> None:
        self._roles = roles
        self._by_id: dict[UUID, User] = {}
        self._links: dict[UUID, list[UUID]] = {}

    async def _resolve(self, user: User) -> User:
        user.roles = await self._roles.get_many(self._links.get(user.id, []))
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        user = self._by_id.get(user_id)
        return await self._resolve(user) if user else None

    async def get_by_email(self, email: str) -> User | None:
        for user in self._by_id.values():
            if user.email.lower() == email.lower():
                return await self._resolve(user)
        return None

    async def list(self) -> list[User]:
        return [await self._resolve(u) for u in self._by_id.values()]

    async def create(self, user: User) -> User:
        self._by_id[user.id] = user
        self._links.setdefault(user.id, [])
        return user

    async def update(self, user: User) -> None:
        self._by_id[user.id] = user

    async def set_roles(self, user_id: UUID, role_ids: list[UUID]) -> None:
        self._links[user_id] = list(dict.fromkeys(role_ids))

    async def delete(self, user_id: UUID) -> None:
        self._by_id.pop(user_id, None)
        self._links.pop(user_id, None)

    def add(self, user: User) -> None:
        """Helper to add user (and its roles) for tests."""
        self._by_id[user.id] = user
        for role in user.roles:
            self._roles.add(role)
        self._links[user.id] = [r.id for r in user.roles]


class FakeSampleProductRepository:
    """In-memory sample product repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, SampleProduct] = {}

    async def get_by_id(self, product_id: UUID, include_deleted: bool = False) -> SampleProduct | None:
        p = self._by_id.get(product_id)
        if not p or (not include_deleted and p.deleted_at):
            return None
        return p

    async def get_by_name(self, name: str) -> SampleProduct | None:
        return next((p for p in self._by_id.values() if p.name == name and not p.deleted_at), None)

    async def get_by_code(self, code: str) -> SampleProduct | None:
        return next((p for p in self._by_id.values() if p.code == code and not p.deleted_at), None)

    async def list(
        self, *, include_inactive: bool = False, include_deleted: bool = False
    ) -> list[SampleProduct]:
        return [
            p
            for p in self._by_id.values()
            if (include_deleted or p.deleted_at is None) and (include_inactive or p.is_active)
        ]

    async def create(self, product: SampleProduct) -> SampleProduct:
        self._by_id[product.id] = product
        return product

    async def update(self, product: SampleProduct) -> None:
        self._by_id[product.id] = product

    async def soft_delete(self, product_id: UUID) -> None:
        p = self._by_id.get(product_id)
        if p:
            p.deleted_at = datetime.now(UTC)

    async def restore(self, product_id: UUID) -> None:
        p = self._by_id.get(product_id)
        if p:
            p.deleted_at = None

    def add(self, product: SampleProduct) -> None:
        self._by_id[product.id] = product


class FakePoolRepository:
    """In-memory pool repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Pool] = {}
        self.credit_calls = 0
        self.locked_reads: list[UUID] = []

    async def get_by_id(
        self, pool_id: UUID, include_deleted: bool = False, for_update: bool = False
    ) -> Pool | None:
        if for_update:
            self.locked_reads.append(pool_id)
        pool = self._by_id.get(pool_id)
        if not pool or (not include_deleted and pool.deleted_at):
            return None
        return pool

    async def get_by_batch(self, batch_number: str, category_id: UUID) -> Pool | None:
        return next(
            (
                p
                for p in self._by_id.values()
                if p.batch_number == batch_number and p.category_id == category_id and not p.deleted_at
            ),
            None,
        )

    async def list(
        self,
        *,
        user_id: UUID | None = None,
        include_inactive: bool = False,
        include_deleted: bool = False,
        include_unapproved: bool = False,
    ) -> list[Pool]:
        return [
            p
            for p in self._by_id.values()
            if (user_id is None or p.user_id == user_id)
            and (include_deleted or p.deleted_at is None)
            and (include_inactive or p.is_active)
            and (include_unapproved or p.is_approved)
        ]

    async def create(self, pool: Pool) -> Pool:
        self._by_id[pool.id] = pool
        return pool

    async def update(self, pool: Pool) -> None:
        self._by_id[pool.id] = pool

    async def credit(self, pool_id: UUID, amount: Decimal) -> tuple[Pool, bool] | None:
        self.credit_calls += 1
        pool = self._by_id.get(pool_id)
        if pool is None:
            return None
        previous = pool.status
        pool.amount_received += amount
        pool.total_contributors += 1
        if (
            pool.pool_price is not None
            and pool.amount_received >= pool.pool_price
            and pool.status in (PoolStatus.CREATED, PoolStatus.FUNDING)
        ):
            pool.status = PoolStatus.TARGET_REACHED
        reached = previous is not PoolStatus.TARGET_REACHED and pool.status is PoolStatus.TARGET_REACHED
        return pool, reached

    async def soft_delete(self, pool_id: UUID) -> None:
        pool = self._by_id.get(pool_id)
        if pool:
            pool.deleted_at = datetime.now(UTC)

    async def hard_delete(self, pool_id: UUID) -> None:
        self._by_id.pop(pool_id, None)

    async def restore(self, pool_id: UUID) -> None:
        pool = self._by_id.get(pool_id)
        if pool:
            pool.deleted_at = None

    def add(self, pool: Pool) -> None:
        self._by_id[pool.id] = pool


class FakeDonationRepository:
    """In-memory donation repository with conditional status updates."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Donation] = {}

    async def get_by_id(self, donation_id: UUID) -> Donation | None:
        return self._by_id.get(donation_id)

    async def get_by_order_id(self, order_id: str) -> Donation | None:
        return next((d for d in self._by_id.values() if d.payment_order_id == order_id), None)

    async def list(
        self,
        *,
        pool_id: UUID | None = None,
        user_id: UUID | None = None,
        status: DonationStatus | None = None,
    ) -> list[Donation]:
        return [
            d
            for d in self._by_id.values()
            if (pool_id is None or d.pool_id == pool_id)
            and (user_id is None or d.user_id == user_id)
            and (status is None or d.status is status)
        ]

    async def create(self, donation: Donation) -> Donation:
        self._by_id[donation.id] = donation
        return donation

    async def mark_succeeded(self, donation_id: UUID, payment_id: str, signature: str) -> Donation | None:
        d = self._by_id.get(donation_id)
        if d is None or d.status is not DonationStatus.PENDING:
            return None
        d.status = DonationStatus.SUCCESS
        d.payment_id = payment_id
        d.payment_signature = signature
        return d

    async def mark_failed(self, donation_id: UUID) -> Donation | None:
        d = self._by_id.get(donation_id)
        if d is None or d.status is not DonationStatus.PENDING:
            return None
        d.status = DonationStatus.FAILED
        return d

    def add(self, donation: Donation) -> None:
        self._by_id[donation.id] = donation


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.permissions = FakePermissionRepository()
        self.roles = FakeRoleRepository(self.permissions)
        self.users = FakeUserRepository(self.roles)
        self.sample_products = FakeSampleProductRepository()
        self.pools = FakePoolRepository()
        self.donations = FakeDonationRepository()
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork on every call, committing like the real one."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return _factory


# --- Fake payment gateway ---


class FakePaymentGateway:
    """Payment gateway double. Signatures are real HMACs over PAYMENT_SECRET."""

    def __init__(self, secret: str = PAYMENT_SECRET, fail: bool = False) -> None:
        self._secret = secret
        self.fail = fail
        self.orders: list[dict] = []

    @property
    def key_id(self) -> str:
        return "rzp_test_key"

    async def create_order(self, amount: int, currency: str, receipt: str, notes: dict[str, str]) -> PaymentOrder:
        if self.fail:
            raise PaymentGatewayError("Failed to create payment order")
        order = PaymentOrder(id=f"order_{len(self.orders) + 1}", amount=amount, currency=currency)
        self.orders.append(
            {"id": order.id, "amount": amount, "currency": currency, "receipt": receipt, "notes": notes}
        )
        return order

    def sign(self, order_id: str, payment_id: str) -> str:
        return payment_signature(self._secret, order_id, payment_id)

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        return self.sign(order_id, payment_id) == signature


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def payment_gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def product(fake_uow: FakeUnitOfWork) -> SampleProduct:
    p = make_product()
    fake_uow.sample_products.add(p)
    return p


@pytest.fixture
def owner(fake_uow: FakeUnitOfWork) -> User:
    user = make_user([make_role("user", [make_permission("user", "read")])], name="Owner")
    fake_uow.users.add(user)
    return user


@pytest.fixture
def open_pool(fake_uow: FakeUnitOfWork, owner: User, product: SampleProduct) -> Pool:
    """Approved, active pool priced at 100.00 with nothing received."""
    pool = make_pool(owner.id, product.id)
    fake_uow.pools.add(pool)
    return pool
