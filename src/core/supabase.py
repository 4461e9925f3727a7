"""Supabase client construction and health checks."""

import logging
from typing import Any

from supabase import Client, create_client

from src.core.config import Settings

logger = logging.getLogger(__name__)


def create_supabase_client(settings: Settings) -> Client:
    """Create the Supabase client used for database operations.

    Uses the secret key for backend operations, which bypasses RLS
    at the PostgREST level. Every query issued through this client must
    already have been authorized against the current actor.

    Called once from the application lifespan; the client is stored on
    ``app.state`` and handed to services through dependencies.

    Args:
        settings: Application settings.

    Returns:
        Client: Supabase client instance.
    """
    return create_client(
        settings.supabase_url,
        settings.supabase_secret_key,
    )


def close_supabase_client(client: Client) -> None:
    """Sign out any auth session held by the client on shutdown.

    Args:
        client: Client created by create_supabase_client.
    """
    try:
        client.auth.sign_out()
    except Exception as e:
        logger.warning("Error closing Supabase client: %s", str(e))


async def check_database_connection(client: Client) -> dict[str, Any]:
    """Check if database connection is healthy.

    Performs a simple query to verify database connectivity.

    Args:
        client: Supabase client to probe.

    Returns:
        dict: Connection status with 'healthy' boolean and optional 'error' message.
    """
    try:
        client.table("orders").select("id").limit(1).execute()
        return {"healthy": True}
    except Exception as e:
        return {"healthy": False, "error": str(e)}
