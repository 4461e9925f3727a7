"""Order query and status update business logic."""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from supabase import Client

from src.api.middleware.error_handler import AuthorizationError, NotFoundError, ValidationError
from src.models.order import ORDER_STATUSES, OrderCreate, OrderUpdate
from src.schemas.auth import Actor
from src.services.restaurant_service import RestaurantService

logger = logging.getLogger(__name__)


class OrderService:
    """Service for reading orders and advancing their status.

    Writes are plain last-write-wins updates; no version column or lock
    guards concurrent updates to the same order.
    """

    def __init__(self, client: Client, restaurant_service: RestaurantService) -> None:
        """Initialize order service.

        Args:
            client: Supabase client.
            restaurant_service: Used to resolve restaurant ownership.
        """
        self.client = client
        self.restaurant_service = restaurant_service

    async def create_order(self, data: OrderCreate) -> dict[str, Any]:
        """Insert a new order row.

        Args:
            data: Order columns, including a pre-generated id.

        Returns:
            dict: The inserted order.
        """
        response = self.client.table("orders").insert(dict(data)).execute()
        return response.data[0]

    async def get_order(self, order_id: UUID | str) -> dict[str, Any] | None:
        """Get an order by ID.

        Args:
            order_id: The order's UUID.

        Returns:
            dict | None: The order data or None if not found.
        """
        response = (
            self.client.table("orders")
            .select("*")
            .eq("id", str(order_id))
            .maybe_single()
            .execute()
        )

        return response.data if response and response.data else None

    async def update_order(
        self,
        order_id: UUID | str,
        data: OrderUpdate,
        only_if_status: list[str] | None = None,
    ) -> dict[str, Any] | None:
        """Update an order, optionally only while it is in given statuses.

        Args:
            order_id: The order's UUID.
            data: Columns to update. updated_at is filled in automatically.
            only_if_status: If set, the row is only updated when its current
                status is one of these values.

        Returns:
            dict | None: The updated order, or None if no row matched.
        """
        update_data = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}

        query = self.client.table("orders").update(update_data).eq("id", str(order_id))
        if only_if_status:
            query = query.in_("status", only_if_status)

        response = query.execute()
        return response.data[0] if response.data else None

    async def attach_restaurants(self, orders: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Attach a restaurant summary to each order under "restaurant".

        Orders whose restaurant no longer exists get None.
        """
        summaries = await self.restaurant_service.get_restaurant_summaries(
            [order["restaurant_id"] for order in orders]
        )
        return [
            {**order, "restaurant": summaries.get(str(order["restaurant_id"]))}
            for order in orders
        ]

    async def get_orders_for_user(self, user_id: UUID) -> list[dict[str, Any]]:
        """Get all orders placed by a user, newest first.

        Args:
            user_id: The user's UUID.

        Returns:
            list[dict]: List of order data.
        """
        response = (
            self.client.table("orders")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )

        orders = response.data or []
        logger.info("Found %d orders for user %s", len(orders), user_id)
        return await self.attach_restaurants(orders)

    async def get_all_orders(self, actor: Actor) -> list[dict[str, Any]]:
        """Get every order in the system, newest first. Admin only.

        Args:
            actor: The requesting actor.

        Returns:
            list[dict]: List of order data.

        Raises:
            AuthorizationError: If the actor is not an admin.
        """
        if not actor.is_admin:
            raise AuthorizationError("Not authorized to access all orders")

        response = (
            self.client.table("orders")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )

        orders = response.data or []
        logger.info("Found %d total orders in the system", len(orders))
        return await self.attach_restaurants(orders)

    async def get_orders_for_restaurant_owner(self, actor: Actor) -> list[dict[str, Any]]:
        """Get orders placed against restaurants the actor owns, newest first.

        Args:
            actor: The requesting actor.

        Returns:
            list[dict]: List of order data, empty if the actor owns nothing.
        """
        restaurant_ids = await self.restaurant_service.get_owned_restaurant_ids(actor.user_id)
        if not restaurant_ids:
            return []

        response = (
            self.client.table("orders")
            .select("*")
            .in_("restaurant_id", restaurant_ids)
            .order("created_at", desc=True)
            .execute()
        )

        return await self.attach_restaurants(response.data or [])

    async def get_order_for_actor(self, order_id: UUID, actor: Actor) -> dict[str, Any]:
        """Get a single order the actor is allowed to see.

        Args:
            order_id: The order's UUID.
            actor: The requesting actor.

        Returns:
            dict: The order data.

        Raises:
            NotFoundError: If the order does not exist.
            AuthorizationError: If the actor neither owns the order nor is an admin.
        """
        order = await self.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        if str(order.get("user_id")) != str(actor.user_id) and not actor.is_admin:
            raise AuthorizationError("Not authorized to view this order")

        return (await self.attach_restaurants([order]))[0]

    async def update_order_status(
        self,
        order_id: UUID,
        new_status: str | None,
        actor: Actor,
    ) -> dict[str, Any]:
        """Set an order's status on behalf of a restaurant owner or admin.

        Any of the known statuses may be set from any current status;
        transitions are not checked.

        Args:
            order_id: The order's UUID.
            new_status: Desired status.
            actor: The requesting actor.

        Returns:
            dict: The updated order.

        Raises:
            ValidationError: If the status is missing or unknown.
            NotFoundError: If the order or its restaurant does not exist.
            AuthorizationError: If a non-admin actor does not own the restaurant.
        """
        logger.info(
            "Updating order %s to status %s (actor=%s, admin=%s)",
            order_id,
            new_status,
            actor.user_id,
            actor.is_admin,
        )

        if not new_status:
            raise ValidationError("Status is required")

        if new_status not in ORDER_STATUSES:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}")

        order = await self.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        if not actor.is_admin:
            restaurant = await self.restaurant_service.get_restaurant(order["restaurant_id"])
            if not restaurant:
                raise NotFoundError("Restaurant not found")

            if str(restaurant.get("user_id")) != str(actor.user_id):
                raise AuthorizationError("Not authorized to update this order")

        updated = await self.update_order(order_id, {"status": new_status})
        if not updated:
            raise NotFoundError("Order not found")

        logger.info("Order %s status set to %s", order_id, new_status)
        return (await self.attach_restaurants([updated]))[0]
