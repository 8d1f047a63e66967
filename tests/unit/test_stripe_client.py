import hashlib
import hmac
import json
import time
from types import SimpleNamespace

import pytest
import stripe

from nailshop.errors import SignatureError, UpstreamError
from nailshop.payments import CheckoutSessionSpec, StripeGateway

SECRET = "whsec_unit_test"


def _sign(payload: bytes, secret: str = SECRET, timestamp: int = None) -> str:
    ts = int(time.time()) if timestamp is None else timestamp
    signed = f"{ts}.".encode("utf-8") + payload
    sig = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={sig}"


def _spec():
    return CheckoutSessionSpec(
        line_items=[{"price_data": {"currency": "usd", "unit_amount": 4500, "product_data": {"name": "Set"}}, "quantity": 1}],
        success_url="https://shop.example.com/ok",
        cancel_url="https://shop.example.com/cart",
        customer_email="buyer@example.com",
        metadata={"intent": "order", "optedIn": "false", "fulfillment": "in_person"},
    )


def test_construct_event_accepts_valid_signature():
    payload = json.dumps({"id": "evt_1", "type": "checkout.session.completed", "data": {"object": {}}}).encode()
    gateway = StripeGateway(api_key="sk_test", webhook_secret=SECRET)

    event = gateway.construct_event(payload, _sign(payload))

    assert event["id"] == "evt_1"
    assert event["type"] == "checkout.session.completed"
    assert isinstance(event, dict)


def test_construct_event_rejects_tampered_payload():
    payload = json.dumps({"id": "evt_1", "type": "checkout.session.completed"}).encode()
    header = _sign(payload)
    tampered = payload.replace(b"evt_1", b"evt_2")
    gateway = StripeGateway(api_key="sk_test", webhook_secret=SECRET)

    with pytest.raises(SignatureError):
        gateway.construct_event(tampered, header)


def test_construct_event_rejects_wrong_secret():
    payload = b'{"id": "evt_1"}'
    gateway = StripeGateway(api_key="sk_test", webhook_secret=SECRET)
    with pytest.raises(SignatureError):
        gateway.construct_event(payload, _sign(payload, secret="whsec_other"))


def test_construct_event_requires_secret_and_header():
    payload = b'{"id": "evt_1"}'
    with pytest.raises(SignatureError):
        StripeGateway(api_key="sk_test", webhook_secret="").construct_event(payload, _sign(payload))
    with pytest.raises(SignatureError):
        StripeGateway(api_key="sk_test", webhook_secret=SECRET).construct_event(payload, None)


def test_create_checkout_session_passes_params_and_key(monkeypatch):
    captured = {}

    def fake_create(**kwargs):
        captured.update(kwargs)
        return SimpleNamespace(id="cs_test_1", url="https://checkout.stripe.test/cs_test_1")

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)
    gateway = StripeGateway(api_key="sk_test_abc", webhook_secret=SECRET)

    session = gateway.create_checkout_session(_spec())

    assert session.id == "cs_test_1"
    assert session.url == "https://checkout.stripe.test/cs_test_1"
    assert captured["api_key"] == "sk_test_abc"
    assert captured["customer_email"] == "buyer@example.com"
    assert captured["mode"] == "payment"
    assert "shipping_options" not in captured


def test_create_checkout_session_wraps_stripe_errors(monkeypatch):
    def fake_create(**kwargs):
        raise RuntimeError("No such shipping rate: 'shr_missing'")

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)
    gateway = StripeGateway(api_key="sk_test_abc", webhook_secret=SECRET)

    with pytest.raises(UpstreamError) as exc:
        gateway.create_checkout_session(_spec())
    assert "shr_missing" in exc.value.message


def test_create_checkout_session_without_key():
    with pytest.raises(UpstreamError):
        StripeGateway(api_key="", webhook_secret=SECRET).create_checkout_session(_spec())
