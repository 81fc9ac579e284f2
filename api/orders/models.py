# api/orders/models.py
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class OrderCreate(BaseModel):
    """Booking request. The owner comes from the session, never the body."""
    product_id: str = Field(..., min_length=1, max_length=100, alias="productId")
    quantity: int = Field(..., ge=1, alias="qty")
    details: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)


class OrderCreated(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    created_at: datetime


class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    owner_email: str
    product_id: str
    quantity: int
    details: dict[str, Any]
    status: str
    current_status: str | None = None
    created_at: datetime
    approved_at: datetime | None = None
    rejected_at: datetime | None = None


class TrackingCreate(BaseModel):
    status: str = Field(..., min_length=1, max_length=100, description="Production stage, e.g. 'Cutting Completed'")
    location: str | None = Field(None, max_length=255)
    note: str | None = Field(None, max_length=2000)


class TrackingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sequence: int
    status: str = Field(validation_alias=AliasChoices("stage", "status"))
    location: str | None = None
    note: str | None = None
    created_at: datetime
