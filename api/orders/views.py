# api/orders/views.py
"""
Order placement, approval and production tracking endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import EntityId, Identity, authorize
from core.policy import Operation
from .models import OrderCreate, OrderCreated, OrderRead, TrackingCreate, TrackingRead
from . import db_manager

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post(
    "",
    response_model=OrderCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
)
async def place_order_endpoint(
    payload: OrderCreate,
    buyer: Identity = Depends(authorize(Operation.PLACE_ORDER)),
    db: AsyncSession = Depends(get_session),
) -> OrderCreated:
    """
    Place a new order as the current buyer. Suspended accounts are refused.
    """
    order = await db_manager.place_order(
        db,
        buyer,
        product_id=payload.product_id,
        quantity=payload.quantity,
        details=payload.details,
    )
    return OrderCreated.model_validate(order)


@router.get("", response_model=list[OrderRead], summary="List all orders (admin)")
async def list_all_orders_endpoint(
    admin: Identity = Depends(authorize(Operation.LIST_ALL_ORDERS)),
    db: AsyncSession = Depends(get_session),
) -> list[OrderRead]:
    orders = await db_manager.list_all(db)
    return [OrderRead.model_validate(o) for o in orders]


@router.get("/mine", response_model=list[OrderRead], summary="List my orders")
async def list_my_orders_endpoint(
    buyer: Identity = Depends(authorize(Operation.LIST_OWN_ORDERS)),
    db: AsyncSession = Depends(get_session),
) -> list[OrderRead]:
    """
    List the current buyer's orders, newest first.
    """
    orders = await db_manager.list_own_orders(db, buyer.id)
    return [OrderRead.model_validate(o) for o in orders]


@router.get("/pending", response_model=list[OrderRead], summary="List pending orders")
async def list_pending_orders_endpoint(
    manager: Identity = Depends(authorize(Operation.LIST_PENDING_ORDERS)),
    db: AsyncSession = Depends(get_session),
) -> list[OrderRead]:
    orders = await db_manager.list_pending(db)
    return [OrderRead.model_validate(o) for o in orders]


@router.post("/{order_id}/approve", response_model=OrderRead, summary="Approve a pending order")
async def approve_order_endpoint(
    order_id: EntityId,
    manager: Identity = Depends(authorize(Operation.APPROVE_ORDER)),
    db: AsyncSession = Depends(get_session),
) -> OrderRead:
    order = await db_manager.approve(db, order_id)
    return OrderRead.model_validate(order)


@router.post("/{order_id}/reject", response_model=OrderRead, summary="Reject a pending order")
async def reject_order_endpoint(
    order_id: EntityId,
    manager: Identity = Depends(authorize(Operation.REJECT_ORDER)),
    db: AsyncSession = Depends(get_session),
) -> OrderRead:
    order = await db_manager.reject(db, order_id)
    return OrderRead.model_validate(order)


@router.post(
    "/{order_id}/tracking",
    response_model=TrackingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Log a production stage",
)
async def append_tracking_endpoint(
    order_id: EntityId,
    payload: TrackingCreate,
    manager: Identity = Depends(authorize(Operation.APPEND_TRACKING)),
    db: AsyncSession = Depends(get_session),
) -> TrackingRead:
    """
    Append a tracking entry. Permitted whatever the approval outcome, since
    production can be logged around the decision.
    """
    entry = await db_manager.append_tracking(
        db,
        manager,
        order_id,
        stage=payload.status,
        location=payload.location,
        note=payload.note,
    )
    return TrackingRead.model_validate(entry)


@router.get("/{order_id}/tracking", response_model=list[TrackingRead], summary="Get tracking history")
async def get_tracking_endpoint(
    order_id: EntityId,
    identity: Identity = Depends(authorize(Operation.VIEW_TRACKING)),
    db: AsyncSession = Depends(get_session),
) -> list[TrackingRead]:
    entries = await db_manager.get_tracking(db, identity, order_id)
    return [TrackingRead.model_validate(e) for e in entries]
