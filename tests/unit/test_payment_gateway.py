"""Unit tests for the Stripe payment gateway."""

import hashlib
import hmac
import json
import time
from unittest.mock import MagicMock

import pytest
import stripe

from src.core.stripe import PaymentGateway, create_payment_gateway


WEBHOOK_SECRET = "whsec_test_webhook_secret"


def sign(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a Stripe-Signature header for a payload."""
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload.decode('utf-8')}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


class TestConstructEvent:
    """Tests for webhook signature verification."""

    def test_valid_signature_returns_event(self) -> None:
        gateway = PaymentGateway(client=None, webhook_secret=WEBHOOK_SECRET)
        payload = json.dumps({"id": "evt_1", "type": "checkout.session.completed"}).encode("utf-8")

        event = gateway.construct_event(payload, sign(payload))

        assert event["id"] == "evt_1"
        assert event["type"] == "checkout.session.completed"

    def test_wrong_secret_is_rejected(self) -> None:
        gateway = PaymentGateway(client=None, webhook_secret=WEBHOOK_SECRET)
        payload = b'{"id": "evt_1"}'

        with pytest.raises(stripe.SignatureVerificationError):
            gateway.construct_event(payload, sign(payload, secret="whsec_other"))

    def test_tampered_payload_is_rejected(self) -> None:
        gateway = PaymentGateway(client=None, webhook_secret=WEBHOOK_SECRET)
        header = sign(b'{"id": "evt_1"}')

        with pytest.raises(stripe.SignatureVerificationError):
            gateway.construct_event(b'{"id": "evt_2"}', header)

    def test_stale_timestamp_is_rejected(self) -> None:
        gateway = PaymentGateway(client=None, webhook_secret=WEBHOOK_SECRET)
        payload = b'{"id": "evt_1"}'

        with pytest.raises(stripe.SignatureVerificationError):
            gateway.construct_event(payload, sign(payload, timestamp=int(time.time()) - 3600))


class TestCheckoutCalls:
    """Tests for outbound checkout calls."""

    def test_create_passes_idempotency_key(self) -> None:
        client = MagicMock()
        gateway = PaymentGateway(client=client, webhook_secret=WEBHOOK_SECRET)

        gateway.create_checkout_session({"mode": "payment"}, idempotency_key="checkout-1")

        client.checkout.sessions.create.assert_called_once_with(
            params={"mode": "payment"},
            options={"idempotency_key": "checkout-1"},
        )

    def test_unconfigured_gateway_refuses_calls(self) -> None:
        gateway = PaymentGateway(client=None, webhook_secret="")

        assert gateway.is_configured is False
        with pytest.raises(RuntimeError):
            gateway.create_checkout_session({"mode": "payment"})
        with pytest.raises(RuntimeError):
            gateway.expire_checkout_session("cs_test_123")

    def test_close_releases_http_client_once(self) -> None:
        http_client = MagicMock()
        gateway = PaymentGateway(client=MagicMock(), webhook_secret="", http_client=http_client)

        gateway.close()
        gateway.close()

        http_client.close.assert_called_once()


class TestCreatePaymentGateway:
    """Tests for create_payment_gateway."""

    def test_without_key_returns_unconfigured_gateway(self) -> None:
        settings = MagicMock()
        settings.stripe_secret_key = ""
        settings.stripe_webhook_secret = WEBHOOK_SECRET

        gateway = create_payment_gateway(settings)

        assert gateway.is_configured is False
        assert gateway.webhook_secret == WEBHOOK_SECRET

    def test_with_key_returns_configured_gateway(self) -> None:
        settings = MagicMock()
        settings.stripe_secret_key = "sk_test_abc"
        settings.stripe_webhook_secret = WEBHOOK_SECRET
        settings.stripe_timeout_seconds = 5.0
        settings.stripe_max_network_retries = 1

        gateway = create_payment_gateway(settings)

        assert gateway.is_configured is True
        gateway.close()
