#!/usr/bin/env python
"""Script to seed demo restaurants and menus for local development.

This script:
1. Inserts a handful of demo restaurants owned by the given user
2. Inserts each restaurant's menu items
3. Skips restaurants the owner already has (matched by name), so it can be re-run

Usage:
    python scripts/seed_restaurants.py <owner_user_id>

Requirements:
    - SUPABASE_URL and SUPABASE_SECRET_KEY environment variables must be set
    - restaurants and menus tables must exist
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any
from uuid import UUID

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.config import get_settings
from src.core.supabase import close_supabase_client, create_supabase_client

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


DEMO_RESTAURANTS: list[dict[str, Any]] = [
    {
        "restaurant_name": "Pizza Station",
        "city": "Anand",
        "country": "India",
        "delivery_time": 30,
        "cuisines": ["Italian", "Mexican", "Fast Food"],
        "image_url": "https://res.cloudinary.com/daqwrdndy/image/upload/v1741637916/wv04qtzo6exig1m1bhyl.png",
        "menus": [
            {
                "name": "Farm Villa Pizza",
                "description": "Capsicum, tomatoes, paneer and red paprika topped with cheese dip",
                "price": 200,
                "image": "https://res.cloudinary.com/daqwrdndy/image/upload/v1741665328/p3wexaklfzq0xhoc663z.png",
            },
            {
                "name": "Margherita Pizza",
                "description": "Classic cheese pizza with tomato sauce and fresh basil",
                "price": 299,
                "image": "https://res.cloudinary.com/daqwrdndy/image/upload/v1713329638/menu/margherita_pizza.jpg",
            },
            {
                "name": "Chocolate Brownie",
                "description": "A chocolate baked dessert bar",
                "price": 70,
                "image": "https://res.cloudinary.com/daqwrdndy/image/upload/v1741668606/w5wuymrn5pg4lw2pp1bw.jpg",
            },
        ],
    },
    {
        "restaurant_name": "Burger King",
        "city": "Mumbai",
        "country": "India",
        "delivery_time": 25,
        "cuisines": ["American", "Fast Food", "Burgers"],
        "image_url": "https://res.cloudinary.com/daqwrdndy/image/upload/v1742272932/h9adoyowpo9knou96u4y.png",
        "menus": [
            {
                "name": "Crispy Veg",
                "description": "Spiced vegetable patty with onions and tomato herby sauce on a bun",
                "price": 70,
                "image": "https://res.cloudinary.com/daqwrdndy/image/upload/v1742273183/ccaxdrx4chsswmvl3a3x.jpg",
            },
            {
                "name": "Whopper",
                "description": "Flame-grilled patty with lettuce, tomato, onion and pickles",
                "price": 189,
                "image": "",
            },
        ],
    },
    {
        "restaurant_name": "Biryani House",
        "city": "Hyderabad",
        "country": "India",
        "delivery_time": 40,
        "cuisines": ["Indian", "Mughlai", "Biryani"],
        "image_url": "https://res.cloudinary.com/daqwrdndy/image/upload/v1741637916/biryani_house_image.jpg",
        "menus": [
            {
                "name": "Chicken Biryani",
                "description": "Dum-cooked basmati rice with marinated chicken",
                "price": 249,
                "image": "",
            },
            {
                "name": "Butter Naan",
                "description": "Tandoor bread brushed with butter",
                "price": 49.5,
                "image": "",
            },
        ],
    },
]


def existing_restaurant_names(client: Any, owner_id: str) -> set[str]:
    """Get the names of restaurants the owner already has.

    Args:
        client: Supabase client.
        owner_id: Owning user's UUID.

    Returns:
        set[str]: Restaurant names.
    """
    response = (
        client.table("restaurants")
        .select("restaurant_name")
        .eq("user_id", owner_id)
        .execute()
    )
    return {row["restaurant_name"] for row in response.data or []}


def seed_restaurant(client: Any, owner_id: str, restaurant: dict[str, Any]) -> None:
    """Insert one restaurant and its menu items.

    Args:
        client: Supabase client.
        owner_id: Owning user's UUID.
        restaurant: Restaurant columns plus a "menus" list.
    """
    columns = {key: value for key, value in restaurant.items() if key != "menus"}
    response = client.table("restaurants").insert({**columns, "user_id": owner_id}).execute()
    restaurant_id = response.data[0]["id"]

    for item in restaurant["menus"]:
        client.table("menus").insert({**item, "restaurant_id": restaurant_id}).execute()

    logger.info(
        "Seeded %s (%s) with %d menu items",
        restaurant["restaurant_name"],
        restaurant_id,
        len(restaurant["menus"]),
    )


async def main(owner_id: str) -> None:
    """Seed demo data for the given owner."""
    logger.info("Seeding demo restaurants for owner %s...", owner_id)

    client = create_supabase_client(get_settings())
    try:
        existing = existing_restaurant_names(client, owner_id)

        seeded = 0
        for restaurant in DEMO_RESTAURANTS:
            if restaurant["restaurant_name"] in existing:
                logger.info("Skipping %s: already exists", restaurant["restaurant_name"])
                continue
            seed_restaurant(client, owner_id, restaurant)
            seeded += 1

        logger.info("Seeding complete: %d restaurants added", seeded)

    except Exception as e:
        logger.error("Seeding failed: %s", str(e))
        raise

    finally:
        close_supabase_client(client)


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/seed_restaurants.py <owner_user_id>")
        sys.exit(1)

    try:
        owner = str(UUID(sys.argv[1]))
    except ValueError:
        print(f"Not a valid user id: {sys.argv[1]}")
        sys.exit(1)

    asyncio.run(main(owner))
