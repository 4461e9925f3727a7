"""Webhook API routes for payment provider callbacks."""

import logging

from fastapi import APIRouter, Request, Response, status

from src.api.deps import CheckoutServiceDep
from src.api.middleware.error_handler import WebhookSignatureError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhooks"])


@router.post(
    "/webhook",
    status_code=status.HTTP_200_OK,
    summary="Handle Stripe webhooks",
    description="Receives and processes Stripe webhook events. Requires valid signature.",
)
async def stripe_webhook(request: Request, service: CheckoutServiceDep) -> Response:
    """Handle Stripe webhook events.

    The Stripe signature is verified against the raw body before the
    event is trusted. Nothing is written if verification fails.

    Handles:
    - checkout.session.completed: confirms the order and records the paid amount
    - checkout.session.expired: cancels the order if it is still pending

    Other event types are acknowledged and ignored.

    Args:
        request: FastAPI request object for reading raw body and headers.
        service: Checkout service.

    Returns:
        Response: Empty 200 acknowledgment.

    Raises:
        WebhookSignatureError: 400 if the signature is missing or invalid, or if
            a checkout event carries no session object.
        NotFoundError: 404 if a completed session has no matching order.
    """
    payload = await request.body()

    sig_header = request.headers.get("stripe-signature")
    if not sig_header:
        logger.error("Missing Stripe-Signature header in webhook request")
        raise WebhookSignatureError("Missing Stripe-Signature header")

    logger.debug("Webhook payload size: %d bytes", len(payload))

    event = service.verify_webhook_signature(payload, sig_header)

    event_type = event.get("type", "")
    logger.info("Processing Stripe webhook event: %s (%s)", event_type, event.get("id"))

    if event_type == "checkout.session.completed":
        await service.handle_checkout_completed(event)

    elif event_type == "checkout.session.expired":
        await service.handle_checkout_expired(event)

    else:
        # Acknowledge so Stripe stops retrying
        logger.debug("Unhandled webhook event type: %s", event_type)

    return Response(status_code=status.HTTP_200_OK)
