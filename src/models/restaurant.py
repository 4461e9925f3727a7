"""Restaurant and menu type definitions.

Restaurants and menus are managed elsewhere; this service only reads them.
"""

from datetime import datetime
from decimal import Decimal
from typing import TypedDict
from uuid import UUID


class MenuItem(TypedDict):
    """Menus table row representation."""

    id: UUID
    restaurant_id: UUID
    name: str
    description: str
    price: Decimal
    image: str
    created_at: datetime


class Restaurant(TypedDict):
    """Restaurants table row representation."""

    id: UUID
    user_id: UUID
    restaurant_name: str
    city: str
    country: str
    delivery_time: int
    cuisines: list[str]
    image_url: str
    created_at: datetime
