# api/products/models.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    price: float = Field(..., ge=0)
    min_order_quantity: int = Field(1, ge=1)
    available_quantity: int = Field(0, ge=0)
    show_on_home: bool = False


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    price: float | None = Field(None, ge=0)
    min_order_quantity: int | None = Field(None, ge=1)
    available_quantity: int | None = Field(None, ge=0)
    show_on_home: bool | None = None


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    category: str | None = None
    price: float
    min_order_quantity: int
    available_quantity: int
    show_on_home: bool
    created_by_id: int | None = None
    created_at: datetime
    updated_at: datetime | None = None


class DeleteResponse(BaseModel):
    success: bool = True
