"""Order model type definitions for database operations."""

from datetime import datetime
from typing import Literal, TypedDict
from uuid import UUID


# Order status values stored in the orders.status column
OrderStatus = Literal["pending", "confirmed", "preparing", "outfordelivery", "delivered", "cancelled"]

ORDER_STATUSES: tuple[str, ...] = (
    "pending",
    "confirmed",
    "preparing",
    "outfordelivery",
    "delivered",
    "cancelled",
)


class OrderCartItem(TypedDict):
    """Structure for a single cart line in an order.

    Stored as part of the cart_items JSONB array. The price is the menu
    price at checkout time, in major currency units.
    """

    menu_id: str
    name: str
    image: str
    price: float
    quantity: int


class DeliveryDetails(TypedDict, total=False):
    """Delivery address captured at checkout."""

    name: str
    email: str
    contact: str
    address: str
    city: str
    country: str


class Order(TypedDict):
    """Order table row representation.

    Maps directly to the database schema.
    """

    id: UUID
    user_id: UUID
    restaurant_id: UUID
    delivery_details: DeliveryDetails
    cart_items: list[OrderCartItem]
    total_amount: int
    status: OrderStatus
    stripe_checkout_session_id: str | None
    created_at: datetime
    updated_at: datetime


class OrderCreate(TypedDict, total=False):
    """Data required to create a new order during checkout."""

    id: str
    user_id: str
    restaurant_id: str
    delivery_details: DeliveryDetails
    cart_items: list[OrderCartItem]
    total_amount: int
    status: OrderStatus
    stripe_checkout_session_id: str


class OrderUpdate(TypedDict, total=False):
    """Data that can be updated on an order.

    Used by payment webhooks and the status update endpoint.
    """

    status: OrderStatus
    total_amount: int
    updated_at: str
