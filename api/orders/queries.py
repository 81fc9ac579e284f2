# api/orders/queries.py
"""
SQLAlchemy query builders for order lifecycle operations.
"""
from datetime import datetime

from sqlalchemy import select, update

from db_models.order import Order, OrderStatus, TrackingEntry


def select_orders_for_owner(owner_id: int):
    """A buyer's orders, most recent first."""
    return (
        select(Order)
        .where(Order.owner_id == owner_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
    )


def select_pending_orders():
    """Orders awaiting a decision, oldest first."""
    return (
        select(Order)
        .where(Order.status == OrderStatus.PENDING.value)
        .order_by(Order.created_at.asc(), Order.id.asc())
    )


def select_all_orders():
    return select(Order).order_by(Order.created_at.desc(), Order.id.desc())


def transition_order(
    order_id: int,
    from_statuses: list[str],
    target: OrderStatus,
    timestamp_column: str,
    now: datetime,
):
    """
    Conditional status update: only matches while the order is still in one
    of ``from_statuses``. A zero rowcount means the transition was refused.
    """
    return (
        update(Order)
        .where(Order.id == order_id, Order.status.in_(from_statuses))
        .values({"status": target.value, timestamp_column: now})
        .execution_options(synchronize_session=False)
    )


def advance_tracking(order_id: int, stage: str):
    """Bump the tracking counter and set the displayed stage in one statement."""
    return (
        update(Order)
        .where(Order.id == order_id)
        .values(
            tracking_count=Order.tracking_count + 1,
            current_status=stage,
        )
        .execution_options(synchronize_session=False)
    )


def select_tracking_count(order_id: int):
    return select(Order.tracking_count).where(Order.id == order_id)


def select_tracking_for_order(order_id: int):
    return (
        select(TrackingEntry)
        .where(TrackingEntry.order_id == order_id)
        .order_by(TrackingEntry.sequence.asc())
    )
