# db_models/order.py
"""
Order and production tracking models.

An order has a coarse lifecycle status (Pending -> Approved | Rejected) and,
independently, a production-stage label (``current_status``) that mirrors the
newest entry of its append-only tracking history.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from sqlalchemy import (
    String,
    Text,
    Integer,
    DateTime,
    ForeignKey,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


# Allowed coarse transitions. Approved and Rejected are terminal.
ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.APPROVED, OrderStatus.REJECTED}),
    OrderStatus.APPROVED: frozenset(),
    OrderStatus.REJECTED: frozenset(),
}


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Back-reference to the buyer who placed it
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    owner_email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Product reference and order specification; opaque to the lifecycle
    product_id: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=OrderStatus.PENDING.value,
        index=True,
    )

    # Production stage of the newest tracking entry
    current_status: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tracking_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        index=True,
    )
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejected_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    tracking_history: Mapped[list["TrackingEntry"]] = relationship(
        "TrackingEntry",
        back_populates="order",
        order_by="TrackingEntry.sequence",
        lazy="raise",
    )


class TrackingEntry(Base):
    __tablename__ = "order_tracking"
    __table_args__ = (
        UniqueConstraint("order_id", "sequence", name="uq_order_tracking_sequence"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # 1-based position in the order's history
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)

    stage: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    recorded_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    order: Mapped[Order] = relationship("Order", back_populates="tracking_history")
