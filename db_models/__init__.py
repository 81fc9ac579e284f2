# Import every model so they register on Base.metadata
from db_models.user import User, UserRole, UserStatus
from db_models.product import Product
from db_models.order import Order, OrderStatus, TrackingEntry, ORDER_TRANSITIONS

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "Product",
    "Order",
    "OrderStatus",
    "TrackingEntry",
    "ORDER_TRANSITIONS",
]
