"""Email service using Resend for transactional emails."""

import html
import logging
from decimal import Decimal
from typing import Any

import resend

from src.core.config import Settings

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending order emails via Resend."""

    def __init__(self, settings: Settings) -> None:
        """Initialize email service with Resend API key."""
        self.api_key = settings.resend_api_key
        self.from_email = settings.email_from_address
        self.frontend_url = settings.frontend_url
        self.currency = settings.currency.upper()
        if self.api_key:
            resend.api_key = self.api_key
        else:
            logger.warning("Resend API key not configured. Order emails will not be sent.")

    @property
    def is_configured(self) -> bool:
        """Check whether emails can be sent."""
        return bool(self.api_key)

    async def send_order_confirmation_email(self, order: dict[str, Any]) -> dict[str, Any]:
        """Send a receipt once an order's payment is confirmed.

        Failures are logged and reported in the return value; they never
        propagate, so a mail outage cannot fail a payment webhook.

        Args:
            order: The confirmed order row.

        Returns:
            dict: {"success": bool, ...} with the Resend email ID or error.
        """
        delivery = order.get("delivery_details") or {}
        to_email = delivery.get("email")

        if not to_email:
            logger.info("Order %s has no delivery email; skipping confirmation", order.get("id"))
            return {"success": False, "error": "No recipient"}

        if not self.is_configured:
            return {"success": False, "error": "Email not configured"}

        order_url = f"{self.frontend_url}/order/status"
        short_id = str(order.get("id", ""))[:8]
        total = Decimal(order.get("total_amount") or 0) / 100

        rows = "".join(
            f"<tr><td>{_escape(item.get('name'))}</td><td>{_escape(item.get('quantity'))}</td>"
            f"<td>{_escape(item.get('price'))}</td></tr>"
            for item in order.get("cart_items") or []
        )

        html_content = f"""
<!DOCTYPE html>
<html>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="font-size: 22px;">Your order is confirmed!</h1>
    <p>Hi {_escape(delivery.get('name', 'there'))}, we've received your payment for order #{_escape(short_id)}.</p>
    <table style="width: 100%; border-collapse: collapse;">
        <tr><th align="left">Item</th><th align="left">Qty</th><th align="left">Price</th></tr>
        {rows}
    </table>
    <p><strong>Total paid:</strong> {self.currency} {total:.2f}</p>
    <p>Delivering to {_escape(delivery.get('address', ''))}, {_escape(delivery.get('city', ''))}.</p>
    <p><a href="{order_url}">Track your order</a></p>
</body>
</html>
"""

        text_content = f"""
Your order #{short_id} is confirmed!

Total paid: {self.currency} {total:.2f}
Delivering to {delivery.get('address', '')}, {delivery.get('city', '')}.

Track your order: {order_url}
"""

        try:
            response = resend.Emails.send({
                "from": self.from_email,
                "to": [to_email],
                "subject": f"Order #{short_id} confirmed",
                "html": html_content,
                "text": text_content,
            })

            logger.info("Order confirmation sent to %s, id: %s", to_email, response.get("id"))
            return {"success": True, "email_id": response.get("id")}

        except Exception as e:
            logger.error("Failed to send order confirmation to %s: %s", to_email, str(e))
            return {"success": False, "error": str(e)}


def _escape(value: Any) -> str:
    """HTML-escape a customer-supplied value for the email body."""
    return html.escape("" if value is None else str(value))
