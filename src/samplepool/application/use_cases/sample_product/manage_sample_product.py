"""Sample product use cases."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from samplepool.domain.entities import SampleProduct
from samplepool.domain.exceptions import Conflict, NotFound, ValidationError


class CreateSampleProductUseCase:
    """Create a pool category. Name and code are unique among live products."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        name: str,
        code: str | None = None,
        description: str | None = None,
        is_active: bool = True,
    ) -> SampleProduct:
        name = (name or "").strip()
        if not name:
            raise ValidationError("name is required")
        code = (code or "").strip() or None
        async with self._uow_factory() as uow:
            if await uow.sample_products.get_by_name(name):
                raise Conflict(f'Sample product with name "{name}" already exists')
            if code and await uow.sample_products.get_by_code(code):
                raise Conflict(f'Sample product with code "{code}" already exists')
            now = datetime.now(UTC)
            product = SampleProduct(
                id=uuid4(),
                name=name,
                created_at=now,
                updated_at=now,
                code=code,
                description=description,
                is_active=is_active,
            )
            await uow.sample_products.create(product)
        return product


class UpdateSampleProductUseCase:
    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        product_id: UUID,
        name: str | None = None,
        code: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> SampleProduct:
        async with self._uow_factory() as uow:
            product = await uow.sample_products.get_by_id(product_id)
            if product is None:
                raise NotFound("Sample product", str(product_id))
            if name is not None:
                name = name.strip()
                if not name:
                    raise ValidationError("name is required")
                if name != product.name and await uow.sample_products.get_by_name(name):
                    raise Conflict(f'Sample product with name "{name}" already exists')
                product.name = name
            if code is not None:
                code = code.strip() or None
                if code and code != product.code and await uow.sample_products.get_by_code(code):
                    raise Conflict(f'Sample product with code "{code}" already exists')
                product.code = code
            if description is not None:
                product.description = description
            if is_active is not None:
                product.is_active = is_active
            product.updated_at = datetime.now(UTC)
            await uow.sample_products.update(product)
        return product


class DeleteSampleProductUseCase:
    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, product_id: UUID) -> None:
        async with self._uow_factory() as uow:
            if await uow.sample_products.get_by_id(product_id) is None:
                raise NotFound("Sample product", str(product_id))
            await uow.sample_products.soft_delete(product_id)


class RestoreSampleProductUseCase:
    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, product_id: UUID) -> SampleProduct:
        async with self._uow_factory() as uow:
            product = await uow.sample_products.get_by_id(product_id, include_deleted=True)
            if product is None or product.deleted_at is None:
                raise NotFound("Deleted sample product", str(product_id))
            await uow.sample_products.restore(product_id)
            product.deleted_at = None
        return product
