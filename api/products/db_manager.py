# api/products/db_manager.py
"""
Manager product maintenance. Catalogue reads live outside this service.
"""
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from core.deps import Identity
from core.errors import InvalidInput, NotFound
from core.logging_config import get_logger
from db_models.product import Product
from . import queries

logger = get_logger("products")

# Fields a partial update may set to null
NULLABLE_FIELDS = {"description", "category"}


async def get_product_by_id(db: AsyncSession, product_id: int) -> Product:
    """Get a product by ID. Raises NotFound if missing."""
    result = await db.execute(queries.select_product_by_id(product_id))
    product = result.scalar_one_or_none()
    if product is None:
        raise NotFound("Product not found")
    return product


async def create_product(db: AsyncSession, manager: Identity, fields: dict[str, Any]) -> Product:
    product = Product(**fields, created_by_id=manager.id)
    db.add(product)
    await db.commit()
    await db.refresh(product)

    logger.info(f"Product {product.id} created by user {manager.id}")
    return product


async def update_product(db: AsyncSession, product_id: int, changes: dict[str, Any]) -> Product:
    """Apply a partial update; unset fields are left alone."""
    product = await get_product_by_id(db, product_id)

    for field, value in changes.items():
        if value is None and field not in NULLABLE_FIELDS:
            raise InvalidInput(f"{field} cannot be null")
        setattr(product, field, value)

    await db.commit()
    await db.refresh(product)
    return product


async def delete_product(db: AsyncSession, product_id: int) -> None:
    product = await get_product_by_id(db, product_id)
    await db.delete(product)
    await db.commit()

    logger.info(f"Product {product_id} deleted")
