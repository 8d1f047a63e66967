import json


def _post(client, event, headers, path="/webhook"):
    return client.post(path, content=json.dumps(event).encode(), headers=headers)


def test_invalid_signature_returns_400_and_sends_nothing(client, gateway, mailer, completed_event):
    res = _post(client, completed_event(), {"stripe-signature": "t=1,v1=forged"})
    assert res.status_code == 400
    assert res.text.startswith("Webhook Error: ")
    assert gateway.verified_payloads == []
    assert mailer.calls == 0


def test_missing_signature_returns_400(client, mailer, completed_event):
    res = client.post("/webhook", content=json.dumps(completed_event()).encode())
    assert res.status_code == 400
    assert res.text.startswith("Webhook Error: ")
    assert mailer.calls == 0


def test_order_completed_sends_order_confirmation(client, mailer, completed_event, signed_headers):
    res = _post(client, completed_event(intent="order"), signed_headers)
    assert res.status_code == 200
    assert res.text == "OK"

    # TestClient exécute les tâches de fond avant de rendre la main
    assert len(mailer.sent) == 1
    email = mailer.sent[0]
    assert email.to == "buyer@example.com"
    assert email.sender == "studio@example.com"
    assert "- Order ID: cs_test_abc" in email.body


def test_deposit_completed_sends_deposit_confirmation(client, mailer, completed_event, signed_headers):
    event = completed_event(
        intent="deposit",
        metadata={"guestCount": "4", "date": "2026-12-12", "startTime": "18:00", "location": "Queens, NY"},
        amount_total=10000,
    )
    res = _post(client, event, signed_headers)
    assert res.status_code == 200
    email = mailer.sent[0]
    assert email.subject.startswith("Deposit Received")
    assert "- Guests: 4" in email.body
    assert "- Deposit: $100.00" in email.body


def test_recipient_from_customer_details(client, mailer, completed_event, signed_headers):
    event = completed_event(customer_email=None, customer_details={"email": "details@example.com"})
    _post(client, event, signed_headers)
    assert mailer.sent[0].to == "details@example.com"


def test_unrelated_event_is_acknowledged(client, mailer, signed_headers):
    event = {"id": "evt_other", "type": "charge.refunded", "data": {"object": {"id": "ch_1"}}}
    res = _post(client, event, signed_headers)
    assert res.status_code == 200
    assert mailer.calls == 0


def test_replayed_event_is_acknowledged_without_second_email(client, mailer, completed_event, signed_headers):
    event = completed_event(event_id="evt_replay")
    assert _post(client, event, signed_headers).status_code == 200
    assert _post(client, event, signed_headers).status_code == 200
    assert len(mailer.sent) == 1


def test_legacy_webhook_path(client, mailer, completed_event, signed_headers):
    res = _post(client, completed_event(), signed_headers, path="/nails/webhook")
    assert res.status_code == 200
    assert len(mailer.sent) == 1


def test_email_failure_still_acknowledges_and_is_reported(client, mailer, completed_event, signed_headers):
    mailer.fail_on_call = 1
    res = _post(client, completed_event(event_id="evt_smtp_down"), signed_headers)
    assert res.status_code == 200
    assert res.text == "OK"

    health = client.get("/health").json()
    assert health == {"ok": True, "side_task_failures": 1}
    recent = client.get("/health/side-tasks").json()["recent"]
    assert recent[0]["label"] == "order-confirmation:cs_test_abc"
    assert "SMTP relay unavailable" in recent[0]["error"]
