"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-unit-tests")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_stripe_secret_key")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_webhook_secret")
os.environ.setdefault("FRONTEND_URL", "http://localhost:5173")

from tests.factories import RESTAURANT_ID, menu_rows, restaurant_row  # noqa: E402
from tests.fakes import FakeSupabaseClient  # noqa: E402


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from src.core.config import get_settings

    get_settings.cache_clear()

    settings = get_settings()
    yield settings

    get_settings.cache_clear()


@pytest.fixture
def fake_supabase() -> FakeSupabaseClient:
    """Provide an in-memory Supabase client seeded with one restaurant.

    The restaurant is owned by OWNER_ID and has two menu items.
    """
    client = FakeSupabaseClient()
    client.seed("restaurants", restaurant_row())
    client.seed("menus", *menu_rows(RESTAURANT_ID))
    return client


@pytest.fixture
def mock_gateway() -> MagicMock:
    """Provide a mocked payment gateway."""
    gateway = MagicMock()
    gateway.is_configured = True
    gateway.webhook_secret = "whsec_test_webhook_secret"

    stripe_session = MagicMock()
    stripe_session.id = "cs_test_123"
    stripe_session.url = "https://checkout.stripe.com/c/pay/cs_test_123"
    gateway.create_checkout_session.return_value = stripe_session
    return gateway


@pytest.fixture
def mock_email() -> MagicMock:
    """Provide a mocked email service."""
    email = MagicMock()
    email.send_order_confirmation_email = AsyncMock(return_value={"success": True, "email_id": "em_123"})
    return email


@pytest.fixture
def client(
    fake_supabase: FakeSupabaseClient,
    mock_gateway: MagicMock,
    mock_email: MagicMock,
) -> Generator[TestClient, None, None]:
    """Provide a test client whose lifespan wires in the fakes.

    Args:
        fake_supabase: In-memory database.
        mock_gateway: Mocked Stripe gateway.
        mock_email: Mocked email service.

    Yields:
        TestClient: FastAPI test client.
    """
    from src.main import app

    with patch("src.main.create_supabase_client", return_value=fake_supabase), \
         patch("src.main.create_payment_gateway", return_value=mock_gateway), \
         patch("src.main.EmailService", return_value=mock_email):
        with TestClient(app) as test_client:
            yield test_client
