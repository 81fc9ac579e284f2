# api/products/views.py
"""
Product maintenance endpoints (managers).
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import EntityId, Identity, authorize
from core.policy import Operation
from .models import DeleteResponse, ProductCreate, ProductRead, ProductUpdate
from . import db_manager

router = APIRouter(prefix="/products", tags=["products"])


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a product",
)
async def create_product_endpoint(
    payload: ProductCreate,
    manager: Identity = Depends(authorize(Operation.CREATE_PRODUCT)),
    db: AsyncSession = Depends(get_session),
) -> ProductRead:
    """
    Add a product. Manager only; suspended managers are refused.
    """
    product = await db_manager.create_product(db, manager, payload.model_dump())
    return ProductRead.model_validate(product)


@router.put("/{product_id}", response_model=ProductRead, summary="Update a product")
async def update_product_endpoint(
    product_id: EntityId,
    payload: ProductUpdate,
    manager: Identity = Depends(authorize(Operation.UPDATE_PRODUCT)),
    db: AsyncSession = Depends(get_session),
) -> ProductRead:
    product = await db_manager.update_product(db, product_id, payload.model_dump(exclude_unset=True))
    return ProductRead.model_validate(product)


@router.delete("/{product_id}", response_model=DeleteResponse, summary="Delete a product")
async def delete_product_endpoint(
    product_id: EntityId,
    manager: Identity = Depends(authorize(Operation.DELETE_PRODUCT)),
    db: AsyncSession = Depends(get_session),
) -> DeleteResponse:
    await db_manager.delete_product(db, product_id)
    return DeleteResponse()
