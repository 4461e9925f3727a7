"""Read access to restaurants and their menus."""

from typing import Any
from uuid import UUID

from supabase import Client

# Restaurant fields shown alongside an order
RESTAURANT_SUMMARY_COLUMNS = ("id", "restaurant_name", "image_url", "city", "country")


class RestaurantService:
    """Service for looking up restaurants, menus and ownership.

    Restaurants are written by the restaurant management surface; this
    service only reads them to price carts and authorize order updates.
    """

    def __init__(self, client: Client) -> None:
        """Initialize restaurant service with a Supabase client."""
        self.client = client

    async def get_restaurant(self, restaurant_id: UUID | str) -> dict[str, Any] | None:
        """Get a restaurant by ID.

        Args:
            restaurant_id: The restaurant's UUID.

        Returns:
            dict | None: The restaurant data or None if not found.
        """
        response = (
            self.client.table("restaurants")
            .select("*")
            .eq("id", str(restaurant_id))
            .maybe_single()
            .execute()
        )

        return response.data if response and response.data else None

    async def get_menu_items(self, restaurant_id: UUID | str) -> list[dict[str, Any]]:
        """Get a restaurant's menu items in display order.

        Args:
            restaurant_id: The restaurant's UUID.

        Returns:
            list[dict]: Menu items, oldest first.
        """
        response = (
            self.client.table("menus")
            .select("*")
            .eq("restaurant_id", str(restaurant_id))
            .order("created_at")
            .execute()
        )

        return response.data or []

    async def get_restaurant_with_menu(self, restaurant_id: UUID | str) -> dict[str, Any] | None:
        """Get a restaurant with its menu items attached under "menus".

        Args:
            restaurant_id: The restaurant's UUID.

        Returns:
            dict | None: Restaurant data with a "menus" list, or None.
        """
        restaurant = await self.get_restaurant(restaurant_id)
        if not restaurant:
            return None

        return {**restaurant, "menus": await self.get_menu_items(restaurant_id)}

    async def get_restaurant_summaries(self, restaurant_ids: list[str]) -> dict[str, dict[str, Any]]:
        """Get display fields for several restaurants in one query.

        Args:
            restaurant_ids: Restaurant UUIDs; duplicates are fine.

        Returns:
            dict: Summary keyed by restaurant ID. Unknown IDs are absent.
        """
        unique_ids = sorted({str(restaurant_id) for restaurant_id in restaurant_ids})
        if not unique_ids:
            return {}

        response = (
            self.client.table("restaurants")
            .select(", ".join(RESTAURANT_SUMMARY_COLUMNS))
            .in_("id", unique_ids)
            .execute()
        )

        return {
            str(row["id"]): {column: row.get(column) for column in RESTAURANT_SUMMARY_COLUMNS}
            for row in response.data or []
        }

    async def get_owned_restaurant_ids(self, user_id: UUID) -> list[str]:
        """Get the IDs of all restaurants a user owns.

        Args:
            user_id: The user's UUID.

        Returns:
            list[str]: Restaurant IDs.
        """
        response = (
            self.client.table("restaurants")
            .select("id")
            .eq("user_id", str(user_id))
            .execute()
        )

        return [str(row["id"]) for row in response.data or []]
