"""Integration tests for order API endpoints."""

from fastapi.testclient import TestClient

from tests.factories import (
    ADMIN_ID,
    CUSTOMER_ID,
    OTHER_CUSTOMER_ID,
    OTHER_RESTAURANT_ID,
    OWNER_ID,
    RESTAURANT_ID,
    auth_headers,
    create_test_token,
    order_row,
)
from tests.fakes import FakeSupabaseClient


class TestListOrders:
    """Tests for GET /api/v1/orders endpoint."""

    def test_returns_own_orders(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        mine = order_row(user_id=CUSTOMER_ID)
        fake_supabase.seed("orders", mine, order_row(user_id=OTHER_CUSTOMER_ID))

        response = client.get("/api/v1/orders", headers=auth_headers(CUSTOMER_ID))

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert [o["id"] for o in data["orders"]] == [mine["id"]]

    def test_orders_include_restaurant_summary(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        known = order_row(user_id=CUSTOMER_ID)
        orphaned = order_row(user_id=CUSTOMER_ID, restaurant_id=OTHER_RESTAURANT_ID)
        fake_supabase.seed("orders", known, orphaned)

        response = client.get("/api/v1/orders", headers=auth_headers(CUSTOMER_ID))

        assert response.status_code == 200
        restaurants = {o["id"]: o["restaurant"] for o in response.json()["orders"]}
        assert restaurants[known["id"]]["restaurant_name"] == "Biryani House"
        assert restaurants[orphaned["id"]] is None

    def test_empty_list_for_new_user(self, client: TestClient) -> None:
        response = client.get("/api/v1/orders", headers=auth_headers(OTHER_CUSTOMER_ID))

        assert response.status_code == 200
        assert response.json()["orders"] == []

    def test_admin_all_flag(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        fake_supabase.seed("orders", order_row(user_id=CUSTOMER_ID), order_row(user_id=OTHER_CUSTOMER_ID))

        response = client.get("/api/v1/orders?all=true", headers=auth_headers(ADMIN_ID, admin=True))

        assert len(response.json()["orders"]) == 2

    def test_all_flag_ignored_for_non_admin(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        fake_supabase.seed("orders", order_row(user_id=CUSTOMER_ID), order_row(user_id=OTHER_CUSTOMER_ID))

        response = client.get("/api/v1/orders?all=true", headers=auth_headers(CUSTOMER_ID))

        assert len(response.json()["orders"]) == 1

    def test_requires_authentication(self, client: TestClient) -> None:
        response = client.get("/api/v1/orders")

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_expired_token(self, client: TestClient) -> None:
        token = create_test_token(exp_offset=-60)
        response = client.get("/api/v1/orders", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Session expired, please log in again"


class TestListAllOrders:
    """Tests for GET /api/v1/orders/all endpoint."""

    def test_admin_sees_everything(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        fake_supabase.seed("orders", order_row(user_id=CUSTOMER_ID), order_row(user_id=OTHER_CUSTOMER_ID))

        response = client.get("/api/v1/orders/all", headers=auth_headers(ADMIN_ID, admin=True))

        assert response.status_code == 200
        assert len(response.json()["orders"]) == 2

    def test_non_admin_forbidden(self, client: TestClient) -> None:
        response = client.get("/api/v1/orders/all", headers=auth_headers(CUSTOMER_ID))

        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to access all orders"


class TestListRestaurantOrders:
    """Tests for GET /api/v1/orders/restaurant endpoint."""

    def test_owner_sees_restaurant_orders(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        order = order_row(user_id=CUSTOMER_ID)
        fake_supabase.seed("orders", order)

        response = client.get("/api/v1/orders/restaurant", headers=auth_headers(OWNER_ID))

        assert response.status_code == 200
        assert [o["id"] for o in response.json()["orders"]] == [order["id"]]

    def test_customer_sees_none(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        fake_supabase.seed("orders", order_row(user_id=CUSTOMER_ID))

        response = client.get("/api/v1/orders/restaurant", headers=auth_headers(CUSTOMER_ID))

        assert response.json()["orders"] == []


class TestGetOrder:
    """Tests for GET /api/v1/orders/{order_id} endpoint."""

    def test_owner_can_view(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        order = order_row(user_id=CUSTOMER_ID)
        fake_supabase.seed("orders", order)

        response = client.get(f"/api/v1/orders/{order['id']}", headers=auth_headers(CUSTOMER_ID))

        assert response.status_code == 200
        data = response.json()["order"]
        assert data["id"] == order["id"]
        assert data["cart_items"][0]["quantity"] == 2

    def test_includes_restaurant_summary(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        """Test that the order carries the restaurant it was placed with."""
        order = order_row(user_id=CUSTOMER_ID)
        fake_supabase.seed("orders", order)

        response = client.get(f"/api/v1/orders/{order['id']}", headers=auth_headers(CUSTOMER_ID))

        assert response.status_code == 200
        restaurant = response.json()["order"]["restaurant"]
        assert restaurant["id"] == RESTAURANT_ID
        assert restaurant["restaurant_name"] == "Biryani House"
        assert restaurant["image_url"] == "https://img.example.com/biryani-house.png"

    def test_other_user_forbidden(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        order = order_row(user_id=CUSTOMER_ID)
        fake_supabase.seed("orders", order)

        response = client.get(f"/api/v1/orders/{order['id']}", headers=auth_headers(OTHER_CUSTOMER_ID))

        assert response.status_code == 403

    def test_unknown_order(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/orders/99999999-9999-4999-8999-999999999999",
            headers=auth_headers(CUSTOMER_ID),
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Order not found"

    def test_invalid_order_id(self, client: TestClient) -> None:
        response = client.get("/api/v1/orders/not-a-uuid", headers=auth_headers(CUSTOMER_ID))

        assert response.status_code == 400


class TestUpdateOrderStatus:
    """Tests for PUT /api/v1/orders/{order_id}/status endpoint."""

    def test_owner_updates_status(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        order = order_row(status="confirmed")
        fake_supabase.seed("orders", order)

        response = client.put(
            f"/api/v1/orders/{order['id']}/status",
            json={"status": "preparing"},
            headers=auth_headers(OWNER_ID),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Order status updated successfully"
        assert data["order"]["status"] == "preparing"
        assert fake_supabase.rows("orders")[0]["status"] == "preparing"

    def test_admin_updates_any_order(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        order = order_row(status="preparing")
        fake_supabase.seed("orders", order)

        response = client.put(
            f"/api/v1/orders/{order['id']}/status",
            json={"status": "outfordelivery"},
            headers=auth_headers(ADMIN_ID, admin=True),
        )

        assert response.status_code == 200
        assert response.json()["order"]["status"] == "outfordelivery"

    def test_customer_forbidden(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        order = order_row(status="confirmed")
        fake_supabase.seed("orders", order)

        response = client.put(
            f"/api/v1/orders/{order['id']}/status",
            json={"status": "delivered"},
            headers=auth_headers(CUSTOMER_ID),
        )

        assert response.status_code == 403
        assert fake_supabase.rows("orders")[0]["status"] == "confirmed"

    def test_invalid_status(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        order = order_row()
        fake_supabase.seed("orders", order)

        response = client.put(
            f"/api/v1/orders/{order['id']}/status",
            json={"status": "lost"},
            headers=auth_headers(OWNER_ID),
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid status.")

    def test_missing_status(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        order = order_row()
        fake_supabase.seed("orders", order)

        response = client.put(
            f"/api/v1/orders/{order['id']}/status",
            json={},
            headers=auth_headers(OWNER_ID),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Status is required"

    def test_unknown_order(self, client: TestClient) -> None:
        response = client.put(
            "/api/v1/orders/99999999-9999-4999-8999-999999999999/status",
            json={"status": "preparing"},
            headers=auth_headers(OWNER_ID),
        )

        assert response.status_code == 404
