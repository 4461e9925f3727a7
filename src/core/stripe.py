"""Stripe payment gateway bound to one API key and webhook secret."""

import json
import logging
from typing import Any

import stripe

from src.core.config import Settings

logger = logging.getLogger(__name__)

# Seconds a webhook timestamp may lag behind the server clock
WEBHOOK_TOLERANCE_SECONDS = 300


class PaymentGateway:
    """Explicitly constructed Stripe handle.

    Wraps a StripeClient with its own HTTP client so outbound calls carry a
    bounded timeout, and holds the webhook secret used to verify inbound
    events. Created once at application startup and closed on shutdown.
    """

    def __init__(
        self,
        client: stripe.StripeClient | None,
        webhook_secret: str,
        http_client: Any = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            client: Configured StripeClient, or None when no key is set.
            webhook_secret: Signing secret for inbound webhook events.
            http_client: HTTP client owned by the gateway, closed on shutdown.
        """
        self._client = client
        self._http_client = http_client
        self.webhook_secret = webhook_secret

    @property
    def is_configured(self) -> bool:
        """Check whether outbound Stripe calls are possible."""
        return self._client is not None

    def create_checkout_session(
        self,
        params: dict[str, Any],
        idempotency_key: str | None = None,
    ) -> Any:
        """Create a hosted Checkout Session.

        Args:
            params: Checkout Session creation parameters.
            idempotency_key: Optional key so retried requests do not open
                a second session.

        Returns:
            stripe.checkout.Session: The created session.

        Raises:
            stripe.StripeError: If the Stripe API call fails or times out.
            RuntimeError: If the gateway has no API key.
        """
        if self._client is None:
            raise RuntimeError("Stripe is not configured. Please set STRIPE_SECRET_KEY environment variable.")

        options: dict[str, Any] = {}
        if idempotency_key:
            options["idempotency_key"] = idempotency_key

        return self._client.checkout.sessions.create(params=params, options=options)

    def expire_checkout_session(self, session_id: str) -> Any:
        """Expire an open Checkout Session so it can no longer be paid.

        Args:
            session_id: Stripe Checkout Session ID.

        Returns:
            stripe.checkout.Session: The expired session.
        """
        if self._client is None:
            raise RuntimeError("Stripe is not configured. Please set STRIPE_SECRET_KEY environment variable.")

        return self._client.checkout.sessions.expire(session_id)

    def construct_event(self, payload: bytes, sig_header: str) -> dict[str, Any]:
        """Verify a webhook signature and decode the event.

        Args:
            payload: Raw request body exactly as received.
            sig_header: Stripe-Signature header value.

        Returns:
            dict: The decoded event.

        Raises:
            stripe.SignatureVerificationError: If the signature does not match.
            ValueError: If the payload is not valid UTF-8 JSON.
        """
        stripe.WebhookSignature.verify_header(
            payload.decode("utf-8"),
            sig_header,
            self.webhook_secret,
            WEBHOOK_TOLERANCE_SECONDS,
        )
        return json.loads(payload)

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        if self._http_client is not None:
            self._http_client.close()
            self._http_client = None


def create_payment_gateway(settings: Settings) -> PaymentGateway:
    """Build the payment gateway from settings.

    If Stripe keys are not configured, the gateway is still returned so
    webhook routes can answer, but checkout calls will fail with clear errors.

    Args:
        settings: Application settings.

    Returns:
        PaymentGateway: Gateway ready for use.
    """
    if not settings.stripe_secret_key:
        logger.warning("Stripe secret key not configured. Stripe features will not work.")
        return PaymentGateway(client=None, webhook_secret=settings.stripe_webhook_secret)

    http_client = stripe.RequestsClient(timeout=settings.stripe_timeout_seconds)
    client = stripe.StripeClient(
        settings.stripe_secret_key,
        http_client=http_client,
        max_network_retries=settings.stripe_max_network_retries,
    )
    return PaymentGateway(
        client=client,
        webhook_secret=settings.stripe_webhook_secret,
        http_client=http_client,
    )
