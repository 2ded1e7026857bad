"""Shared fixtures: app wired to a recording Stripe gateway, webhook signing."""

import hashlib
import hmac
import json
import time

import pytest
from fastapi.testclient import TestClient

from khidmaat.config import Settings
from khidmaat.gateway import StripeGateway
from khidmaat.main import create_app
from khidmaat.models import CreatedSession

WEBHOOK_SECRET = "whsec_test_secret"
CLIENT_URL = "https://khidmaat.example"


class RecordingGateway(StripeGateway):
    """Real webhook verification; session creation is recorded instead of sent."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []
        self.error = None

    def create_checkout_session(self, params):
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        n = len(self.calls)
        return CreatedSession(id=f"cs_test_{n}", url=f"https://checkout.stripe.com/c/pay/cs_test_{n}")


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        stripe_secret_key="sk_test_123",
        stripe_webhook_secret=WEBHOOK_SECRET,
        client_url=CLIENT_URL,
    )


@pytest.fixture
def gateway(settings):
    return RecordingGateway.from_settings(settings)


@pytest.fixture
def client(settings, gateway):
    return TestClient(create_app(settings, gateway))


def sign(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a `stripe-signature` header the way Stripe signs deliveries."""
    ts = int(time.time()) if timestamp is None else timestamp
    signed = f"{ts}.".encode() + payload
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"


def completed_event(metadata, session_id="cs_test_1", amount_total=1000, currency="aed") -> bytes:
    return json.dumps({
        "id": "evt_test_1",
        "object": "event",
        "type": "checkout.session.completed",
        "data": {
            "object": {
                "id": session_id,
                "object": "checkout.session",
                "amount_total": amount_total,
                "currency": currency,
                "customer_details": {"name": "Someone Else", "email": "other@example.com"},
                "metadata": metadata,
            }
        },
    }).encode()
