"""Checkout session creation and payment webhook reconciliation."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any
from uuid import UUID, uuid4

import stripe

from src.api.middleware.error_handler import (
    APIError,
    NotFoundError,
    PaymentProviderError,
    ValidationError,
    WebhookSignatureError,
)
from src.core.config import Settings
from src.core.stripe import PaymentGateway
from src.models.order import OrderCartItem
from src.schemas.auth import Actor
from src.schemas.order import CheckoutSessionCreate
from src.services.email_service import EmailService
from src.services.order_service import OrderService
from src.services.restaurant_service import RestaurantService

logger = logging.getLogger(__name__)

# Statuses a successful payment may confirm. Anything further along the
# fulfillment path is left alone so a replayed event never regresses it.
CONFIRMABLE_STATUSES = ["pending", "cancelled"]


def to_minor_units(price: Any) -> int:
    """Convert a menu price in major units to the smallest currency unit."""
    return int((Decimal(str(price)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def price_cart(
    data: CheckoutSessionCreate,
    menu_items: list[dict[str, Any]],
    currency: str,
) -> tuple[list[OrderCartItem], list[dict[str, Any]]]:
    """Price every cart line from the restaurant's live menu.

    The client's name, image and price fields are ignored.

    Args:
        data: Checkout request.
        menu_items: The restaurant's current menu.
        currency: ISO currency code for Stripe.

    Returns:
        tuple: (cart items to store on the order, Stripe line items).

    Raises:
        NotFoundError: If a cart line references an item not on the menu.
    """
    menu_by_id = {str(item["id"]): item for item in menu_items}

    cart_items: list[OrderCartItem] = []
    line_items: list[dict[str, Any]] = []

    for cart_item in data.cart_items:
        menu_item = menu_by_id.get(str(cart_item.menu_id))
        if not menu_item:
            logger.error(
                "Menu item %s not found; available: %s",
                cart_item.menu_id,
                ", ".join(menu_by_id),
            )
            raise NotFoundError(f"Menu item id {cart_item.menu_id} not found")

        image = menu_item.get("image") or ""
        cart_items.append(
            {
                "menu_id": str(menu_item["id"]),
                "name": menu_item["name"],
                "image": image,
                "price": menu_item["price"],
                "quantity": cart_item.quantity,
            }
        )

        product_data: dict[str, Any] = {"name": menu_item["name"]}
        if image:
            product_data["images"] = [image]

        line_items.append(
            {
                "price_data": {
                    "currency": currency,
                    "product_data": product_data,
                    "unit_amount": to_minor_units(menu_item["price"]),
                },
                "quantity": cart_item.quantity,
            }
        )

    return cart_items, line_items


class CheckoutService:
    """Service for Stripe checkout and payment webhook handling."""

    def __init__(
        self,
        order_service: OrderService,
        restaurant_service: RestaurantService,
        gateway: PaymentGateway,
        email_service: EmailService,
        settings: Settings,
    ) -> None:
        """Initialize checkout service with its collaborators."""
        self.order_service = order_service
        self.restaurant_service = restaurant_service
        self.gateway = gateway
        self.email_service = email_service
        self.settings = settings

    async def create_checkout_session(
        self,
        actor: Actor,
        data: CheckoutSessionCreate,
    ) -> dict[str, str]:
        """Create a Stripe Checkout Session and its pending order.

        The order is only written once Stripe has returned a session. If
        the write then fails, the session is expired so it cannot be paid
        against a missing order.

        Args:
            actor: The user checking out; becomes the order's owner.
            data: Restaurant, cart lines and delivery details.

        Returns:
            dict: Contains the Stripe session "id" and redirect "url".

        Raises:
            ValidationError: If the restaurant id is missing, the cart is
                empty, or the restaurant has no menu.
            NotFoundError: If the restaurant or a menu item does not exist.
            PaymentProviderError: If Stripe is unavailable or not configured.
        """
        if not data.restaurant_id:
            raise ValidationError("Missing restaurant ID in checkout request.")

        if not data.cart_items:
            raise ValidationError("No items in cart. Please add items before checkout.")

        restaurant = await self.restaurant_service.get_restaurant_with_menu(data.restaurant_id)
        if not restaurant:
            raise NotFoundError("Restaurant not found.")

        menu_items = restaurant.get("menus") or []
        if not menu_items:
            raise ValidationError("No menu items found for the restaurant")

        cart_items, line_items = price_cart(data, menu_items, self.settings.currency)

        if not self.gateway.is_configured:
            raise PaymentProviderError("Payment provider is not configured")

        order_id = str(uuid4())
        checkout_params: dict[str, Any] = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "shipping_address_collection": {
                "allowed_countries": self.settings.shipping_countries_list,
            },
            "line_items": line_items,
            "success_url": f"{self.settings.frontend_url}/order/status",
            "cancel_url": f"{self.settings.frontend_url}/cart",
            "client_reference_id": order_id,
            "customer_email": data.delivery_details.email,
            "metadata": {"order_id": order_id},
        }

        try:
            session = self.gateway.create_checkout_session(
                checkout_params,
                idempotency_key=f"checkout-{order_id}",
            )
        except stripe.StripeError as e:
            logger.error("Stripe error creating checkout session: %s", str(e))
            raise PaymentProviderError("Error while creating checkout session") from e

        if not getattr(session, "url", None):
            logger.error("Stripe returned checkout session %s without a URL", getattr(session, "id", None))
            raise PaymentProviderError("Error while creating checkout session")

        try:
            await self.order_service.create_order(
                {
                    "id": order_id,
                    "user_id": str(actor.user_id),
                    "restaurant_id": str(data.restaurant_id),
                    "delivery_details": data.delivery_details.model_dump(exclude_none=True),
                    "cart_items": cart_items,
                    "total_amount": 0,
                    "status": "pending",
                    "stripe_checkout_session_id": session.id,
                }
            )
        except Exception:
            logger.error("Failed to persist order %s; expiring checkout session %s", order_id, session.id)
            try:
                self.gateway.expire_checkout_session(session.id)
            except stripe.StripeError as expire_error:
                logger.error("Could not expire checkout session %s: %s", session.id, str(expire_error))
            raise

        logger.info("Created pending order %s with checkout session %s", order_id, session.id)
        return {"id": session.id, "url": session.url}

    def verify_webhook_signature(self, payload: bytes, sig_header: str) -> dict[str, Any]:
        """Verify Stripe webhook signature and return event.

        Args:
            payload: Raw webhook payload bytes.
            sig_header: Stripe-Signature header value.

        Returns:
            dict: Verified Stripe event.

        Raises:
            WebhookSignatureError: If the signature or payload is invalid.
            APIError: If the webhook secret is not configured.
        """
        if not self.gateway.webhook_secret:
            logger.error("Webhook error: STRIPE_WEBHOOK_SECRET is not configured")
            raise APIError(
                "Server configuration error: Missing webhook secret",
                error_type="configuration_error",
            )

        try:
            return self.gateway.construct_event(payload, sig_header)
        except stripe.SignatureVerificationError as e:
            logger.warning("Invalid webhook signature: %s", str(e))
            raise WebhookSignatureError("Invalid signature") from e
        except ValueError as e:
            logger.warning("Invalid webhook payload: %s", str(e))
            raise WebhookSignatureError("Invalid payload") from e

    async def handle_checkout_completed(self, event: dict[str, Any]) -> dict[str, Any]:
        """Process checkout.session.completed webhook event.

        Confirms the correlated order and records the captured amount.
        Replays of the same event leave the order as it is.

        Args:
            event: Stripe webhook event data.

        Returns:
            dict: The order after processing.

        Raises:
            NotFoundError: If the correlated order does not exist.
            WebhookSignatureError: If the event carries no checkout session.
        """
        session = _checkout_session(event)
        order_id = _correlated_order_id(session)

        if not order_id:
            logger.warning("Webhook missing order_id in metadata: %s", session.get("id"))
            raise NotFoundError("Order not found")

        order = await self.order_service.get_order(order_id)
        if not order:
            logger.error("Order not found for completed session: %s", order_id)
            raise NotFoundError("Order not found")

        if order["status"] not in CONFIRMABLE_STATUSES:
            logger.info(
                "Order %s already %s; ignoring checkout.session.completed",
                order_id,
                order["status"],
            )
            return order

        update_data: dict[str, Any] = {"status": "confirmed"}
        amount_total = session.get("amount_total")
        if amount_total is not None:
            update_data["total_amount"] = int(amount_total)

        updated = await self.order_service.update_order(
            order_id,
            update_data,
            only_if_status=CONFIRMABLE_STATUSES,
        )
        if not updated:
            # Another writer moved the order on between the read and the update
            logger.info("Order %s changed concurrently; completion not applied", order_id)
            return await self.order_service.get_order(order_id) or order

        logger.info("Order %s successfully updated to confirmed status", order_id)
        await self.email_service.send_order_confirmation_email(updated)
        return updated

    async def handle_checkout_expired(self, event: dict[str, Any]) -> dict[str, Any] | None:
        """Process checkout.session.expired webhook event.

        Cancels the correlated order only while it is still pending.

        Args:
            event: Stripe webhook event data.

        Returns:
            dict | None: The cancelled order, or None if nothing changed.

        Raises:
            WebhookSignatureError: If the event carries no checkout session.
        """
        session = _checkout_session(event)
        order_id = _correlated_order_id(session)

        if not order_id:
            logger.warning("Webhook missing order_id in metadata: %s", session.get("id"))
            return None

        updated = await self.order_service.update_order(
            order_id,
            {"status": "cancelled"},
            only_if_status=["pending"],
        )

        if updated:
            logger.info("Order %s marked as cancelled due to expired checkout", order_id)
        else:
            logger.info("No pending order %s to cancel for expired checkout", order_id)

        return updated


def _checkout_session(event: dict[str, Any]) -> dict[str, Any]:
    """Return the checkout session object carried by a webhook event."""
    data = event.get("data")
    session = data.get("object") if isinstance(data, dict) else None
    if not isinstance(session, dict):
        logger.warning("Webhook event %s carried no checkout session", event.get("id"))
        raise WebhookSignatureError("Invalid payload")
    return session


def _correlated_order_id(session: dict[str, Any]) -> str | None:
    """Extract a well-formed order id from checkout session metadata."""
    order_id = (session.get("metadata") or {}).get("order_id")
    if not order_id:
        return None

    try:
        return str(UUID(str(order_id)))
    except ValueError:
        logger.warning("Webhook carried malformed order_id: %s", order_id)
        return None
