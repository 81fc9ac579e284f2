# db_models/user.py
"""
User model with role-based access control for the garments tracker.

Roles:
- BUYER: Places orders and follows their production tracking
- MANAGER: Manages products, approves/rejects orders, logs production stages
- ADMIN: Manages user accounts (roles, suspension) and sees every order
"""
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, Enum):
    """User roles for authorization."""
    BUYER = "buyer"
    MANAGER = "manager"
    ADMIN = "admin"


class UserStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Login credentials. Emails are stored stripped and lower-cased.
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Profile
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Role-based access control
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserRole.BUYER.value,
    )

    # Account status
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserStatus.ACTIVE.value,
    )
    suspend_reason: Mapped[str | None] = mapped_column(String(255), nullable=True)
    suspend_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=_utcnow,
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def is_suspended(self) -> bool:
        return self.status == UserStatus.SUSPENDED.value
