"""Unit tests for EmailService."""

from unittest.mock import MagicMock, patch

import pytest

from src.services.email_service import EmailService
from tests.factories import order_row


def make_settings(api_key: str = "re_test_key") -> MagicMock:
    settings = MagicMock()
    settings.resend_api_key = api_key
    settings.email_from_address = "Foodista <orders@foodista.app>"
    settings.frontend_url = "http://localhost:5173"
    settings.currency = "inr"
    return settings


class TestSendOrderConfirmationEmail:
    """Tests for send_order_confirmation_email."""

    @pytest.mark.asyncio
    @patch("src.services.email_service.resend")
    async def test_sends_receipt(self, mock_resend: MagicMock) -> None:
        mock_resend.Emails.send.return_value = {"id": "em_123"}
        service = EmailService(make_settings())

        result = await service.send_order_confirmation_email(order_row(status="confirmed", total_amount=40000))

        assert result == {"success": True, "email_id": "em_123"}
        params = mock_resend.Emails.send.call_args.args[0]
        assert params["to"] == ["asha@example.com"]
        assert "INR 400.00" in params["text"]
        assert "Chicken Biryani" in params["html"]

    @pytest.mark.asyncio
    @patch("src.services.email_service.resend")
    async def test_skips_without_api_key(self, mock_resend: MagicMock) -> None:
        service = EmailService(make_settings(api_key=""))

        result = await service.send_order_confirmation_email(order_row())

        assert result["success"] is False
        assert service.is_configured is False
        mock_resend.Emails.send.assert_not_called()

    @pytest.mark.asyncio
    @patch("src.services.email_service.resend")
    async def test_skips_without_recipient(self, mock_resend: MagicMock) -> None:
        service = EmailService(make_settings())
        order = order_row()
        order["delivery_details"].pop("email")

        result = await service.send_order_confirmation_email(order)

        assert result == {"success": False, "error": "No recipient"}
        mock_resend.Emails.send.assert_not_called()

    @pytest.mark.asyncio
    @patch("src.services.email_service.resend")
    async def test_provider_failure_is_reported_not_raised(self, mock_resend: MagicMock) -> None:
        mock_resend.Emails.send.side_effect = Exception("resend down")
        service = EmailService(make_settings())

        result = await service.send_order_confirmation_email(order_row())

        assert result["success"] is False
        assert "resend down" in result["error"]

    @pytest.mark.asyncio
    @patch("src.services.email_service.resend")
    async def test_customer_values_are_escaped_in_html(self, mock_resend: MagicMock) -> None:
        mock_resend.Emails.send.return_value = {"id": "em_123"}
        service = EmailService(make_settings())
        order = order_row(status="confirmed", total_amount=40000)
        order["delivery_details"]["name"] = "<script>alert(1)</script>"
        order["delivery_details"]["city"] = "Mumbai & Thane"
        order["cart_items"][0]["name"] = '<img src=x onerror="steal()">'

        await service.send_order_confirmation_email(order)

        html = mock_resend.Emails.send.call_args.args[0]["html"]
        assert "<script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert "Mumbai &amp; Thane" in html
        assert "<img" not in html
        assert "&lt;img src=x onerror=&quot;steal()&quot;&gt;" in html
