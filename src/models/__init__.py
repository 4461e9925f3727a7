"""Database model type definitions."""

from src.models.order import ORDER_STATUSES, DeliveryDetails, Order, OrderCartItem, OrderStatus
from src.models.restaurant import MenuItem, Restaurant

__all__ = [
    "ORDER_STATUSES",
    "DeliveryDetails",
    "MenuItem",
    "Order",
    "OrderCartItem",
    "OrderStatus",
    "Restaurant",
]
