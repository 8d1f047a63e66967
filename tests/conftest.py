import json
import os
from typing import Generator, List

import pytest
from fastapi.testclient import TestClient

# Pas de Redis en tests: le lifespan désactive le rate limiting
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

from nailshop.app import create_app
from nailshop.config import Settings
from nailshop.errors import SignatureError, UpstreamError
from nailshop.notifications.mailer import OutgoingEmail
from nailshop.payments.stripe_client import CreatedSession

VALID_SIGNATURE = "t=1700000000,v1=valid"


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid or nodeid.startswith("tests/unit/"):
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid or nodeid.startswith("tests/integration/"):
            item.add_marker(pytest.mark.integration)


class FakeGateway:
    """Doublure de StripeGateway: mémorise les sessions demandées, signature valide = VALID_SIGNATURE."""

    def __init__(self):
        self.specs = []
        self.verified_payloads = []
        self.fail_with = None

    def create_checkout_session(self, spec):
        if self.fail_with:
            raise UpstreamError(self.fail_with)
        self.specs.append(spec)
        return CreatedSession(id="cs_test_123", url="https://checkout.stripe.test/cs_test_123")

    def construct_event(self, payload, sig_header):
        if sig_header != VALID_SIGNATURE:
            raise SignatureError("No signatures found matching the expected signature for payload")
        self.verified_payloads.append(payload)
        return json.loads(payload)


class FakeMailer:
    """Doublure du relais SMTP: garde les messages envoyés, peut échouer au N-ième envoi."""

    def __init__(self):
        self.sent: List[OutgoingEmail] = []
        self.fail_on_call = None
        self.calls = 0

    def send(self, email):
        self.calls += 1
        if self.fail_on_call is not None and self.calls == self.fail_on_call:
            raise OSError("SMTP relay unavailable")
        self.sent.append(email)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        stripe_secret_key="sk_test_123",
        stripe_webhook_secret="whsec_test_123",
        email_user="studio@example.com",
        email_pass="secret",
        frontend_url="https://shop.example.com",
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def app(settings, gateway, mailer):
    return create_app(settings=settings, gateway=gateway, mailer=mailer)


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


def make_completed_event(intent=None, event_id="evt_1", **session_fields):
    metadata = dict(session_fields.pop("metadata", {}) or {})
    if intent is not None:
        metadata["intent"] = intent
    session = {
        "id": "cs_test_abc",
        "customer_email": "buyer@example.com",
        "amount_total": 4500,
        "metadata": metadata,
    }
    session.update(session_fields)
    return {"id": event_id, "type": "checkout.session.completed", "data": {"object": session}}


@pytest.fixture
def completed_event():
    return make_completed_event


@pytest.fixture
def signed_headers():
    return {"stripe-signature": VALID_SIGNATURE, "content-type": "application/json"}
