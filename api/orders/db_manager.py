# api/orders/db_manager.py
"""
Order lifecycle: placement, approval/rejection and production tracking.

Coarse status follows ``ORDER_TRANSITIONS`` (Pending -> Approved | Rejected).
Transitions are applied with a conditional UPDATE so two managers deciding the
same order concurrently cannot both succeed. Tracking entries are appended
independently of the coarse status and are never modified.
"""
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from core.deps import Identity
from core.errors import Forbidden, InvalidInput, InvalidTransition, NotFound
from core.logging_config import get_logger
from db_models.order import ORDER_TRANSITIONS, Order, OrderStatus, TrackingEntry
from db_models.user import UserRole
from . import queries

logger = get_logger("orders")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _source_statuses(target: OrderStatus) -> list[str]:
    """States from which ``target`` may be reached."""
    return [s.value for s, targets in ORDER_TRANSITIONS.items() if target in targets]


async def get_order(db: AsyncSession, order_id: int) -> Order:
    """Get an order by ID. Raises NotFound if missing."""
    order = await db.get(Order, order_id, populate_existing=True)
    if order is None:
        raise NotFound("Order not found")
    return order


async def place_order(
    db: AsyncSession,
    identity: Identity,
    *,
    product_id: str,
    quantity: int,
    details: dict[str, Any] | None = None,
) -> Order:
    """Create a Pending order owned by the caller, with no tracking yet."""
    if quantity < 1:
        raise InvalidInput("Quantity must be at least 1")

    order = Order(
        owner_id=identity.id,
        owner_email=identity.email,
        product_id=product_id,
        quantity=quantity,
        details=details or {},
        status=OrderStatus.PENDING.value,
        tracking_count=0,
        created_at=_utcnow(),
    )
    db.add(order)
    await db.commit()
    await db.refresh(order)

    logger.info(f"Order {order.id} placed by user {identity.id}")
    return order


async def list_own_orders(db: AsyncSession, owner_id: int) -> list[Order]:
    """Return the buyer's orders, most recent first."""
    result = await db.execute(queries.select_orders_for_owner(owner_id))
    return list(result.scalars().all())


async def list_pending(db: AsyncSession) -> list[Order]:
    result = await db.execute(queries.select_pending_orders())
    return list(result.scalars().all())


async def list_all(db: AsyncSession) -> list[Order]:
    """Return every order, most recent first."""
    result = await db.execute(queries.select_all_orders())
    return list(result.scalars().all())


async def _transition(
    db: AsyncSession,
    order_id: int,
    target: OrderStatus,
    timestamp_column: str,
) -> Order:
    stmt = queries.transition_order(
        order_id,
        _source_statuses(target),
        target,
        timestamp_column,
        _utcnow(),
    )
    result = await db.execute(stmt)

    if result.rowcount == 0:
        await db.rollback()
        # Distinguish a missing order from one that already left Pending
        order = await get_order(db, order_id)
        logger.warning(
            f"Refused transition of order {order_id} to {target.value}: status is {order.status}"
        )
        raise InvalidTransition(
            f"Cannot move order to {target.value}: current status is {order.status}"
        )

    await db.commit()
    logger.info(f"Order {order_id} -> {target.value}")
    return await get_order(db, order_id)


async def approve(db: AsyncSession, order_id: int) -> Order:
    """
    Approve a Pending order and record approved_at.

    Raises:
        NotFound: order doesn't exist
        InvalidTransition: order is already Approved or Rejected
    """
    return await _transition(db, order_id, OrderStatus.APPROVED, "approved_at")


async def reject(db: AsyncSession, order_id: int) -> Order:
    """
    Reject a Pending order.

    Raises:
        NotFound: order doesn't exist
        InvalidTransition: order is already Approved or Rejected
    """
    return await _transition(db, order_id, OrderStatus.REJECTED, "rejected_at")


async def append_tracking(
    db: AsyncSession,
    identity: Identity,
    order_id: int,
    *,
    stage: str,
    location: str | None = None,
    note: str | None = None,
) -> TrackingEntry:
    """
    Append a production stage to the order's history and make it the
    order's current status. Allowed whatever the coarse status is.
    """
    stage = stage.strip()
    if not stage:
        raise InvalidInput("Stage is required")

    # The UPDATE locks the order row until commit, so concurrent appends get
    # distinct sequence numbers and current_status matches the last entry.
    result = await db.execute(queries.advance_tracking(order_id, stage))
    if result.rowcount == 0:
        await db.rollback()
        raise NotFound("Order not found")

    sequence = (await db.execute(queries.select_tracking_count(order_id))).scalar_one()

    entry = TrackingEntry(
        order_id=order_id,
        sequence=sequence,
        stage=stage,
        location=location,
        note=note,
        recorded_by_id=identity.id,
        created_at=_utcnow(),
    )
    db.add(entry)
    await db.commit()
    await db.refresh(entry)

    logger.info(f"Order {order_id} tracking #{sequence}: {stage}")
    return entry


async def get_tracking(db: AsyncSession, identity: Identity, order_id: int) -> list[TrackingEntry]:
    """
    Return the order's tracking history in the order it was logged.
    Buyers may only read their own orders. Empty when nothing was logged.
    """
    order = await get_order(db, order_id)

    if identity.role == UserRole.BUYER.value and order.owner_id != identity.id:
        raise Forbidden()

    result = await db.execute(queries.select_tracking_for_order(order_id))
    return list(result.scalars().all())
