import re

from sqlmodel import Session, select

from app.constants.payment_status import PaymentStatus, can_transition
from app.database import engine
from app.models.payment import Payment
from tests.conftest import make_item, make_profile
from tests.test_downloads import add_payment

SESSION_URL = "/functions/v1/create-payment-session"


def test_create_payment_session(client, user, user_headers, payments_configured):
    item = make_item("Paid Car", price=2.0)

    res = client.post(
        SESSION_URL,
        json={"item_id": item.id, "amount": 2.0, "currency": "BNB"},
        headers=user_headers,
    )

    assert res.status_code == 200
    body = res.json()
    assert re.fullmatch(rf"item_{item.id}_{user.id}_\d+", body["order_id"])
    assert body["currency"] == "BNB"
    assert body["deposit_address"] == "0xDEPOSIT"
    assert body["payment_url"].startswith("https://pay.binance.com/checkout?orderId=")

    with Session(engine) as s:
        payment = s.get(Payment, body["payment_id"])
    assert payment.status == PaymentStatus.pending

    status = client.get(f"/payments/status/{item.id}", headers=user_headers).json()
    assert status == {"item_id": item.id, "status": "pending", "purchased": False}


def test_amount_mismatch(client, user_headers, payments_configured):
    item = make_item("Paid Car", price=2.0)

    res = client.post(
        SESSION_URL,
        json={"item_id": item.id, "amount": 2.5, "currency": "BNB"},
        headers=user_headers,
    )

    assert res.status_code == 400
    assert res.json() == {"error": "Amount mismatch"}


def test_already_purchased_regardless_of_other_rows(client, user, user_headers, payments_configured):
    item = make_item("Paid Car", price=2.0)
    add_payment(user, item, PaymentStatus.failed)
    add_payment(user, item, PaymentStatus.pending)
    add_payment(user, item, PaymentStatus.completed)

    res = client.post(
        SESSION_URL,
        json={"item_id": item.id, "amount": 2.0, "currency": "BNB"},
        headers=user_headers,
    )

    assert res.status_code == 400
    assert res.json() == {"error": "Item already purchased"}

    status = client.get(f"/payments/status/{item.id}", headers=user_headers).json()
    assert status["status"] == "completed"
    assert status["purchased"] is True


def test_payment_session_errors(client, user_headers, payments_configured):
    item = make_item("Paid Car", price=2.0)

    unauth = client.post(SESSION_URL, json={"item_id": item.id, "amount": 2.0, "currency": "BNB"})
    assert unauth.status_code == 401
    assert client.post(SESSION_URL).status_code == 401

    missing = client.post(SESSION_URL, json={"item_id": item.id, "amount": 2.0}, headers=user_headers)
    assert missing.status_code == 400
    assert missing.json() == {"error": "Missing required fields"}

    unknown = client.post(SESSION_URL, json={"item_id": 999, "amount": 2.0, "currency": "BNB"}, headers=user_headers)
    assert unknown.status_code == 404


def test_payment_service_unconfigured(client, user_headers):
    item = make_item("Paid Car", price=2.0)

    res = client.post(
        SESSION_URL,
        json={"item_id": item.id, "amount": 2.0, "currency": "BNB"},
        headers=user_headers,
    )

    assert res.status_code == 503
    assert res.json() == {"error": "Payment service unavailable"}
    with Session(engine) as s:
        assert s.exec(select(Payment)).all() == []


def test_status_without_payments(client, user_headers):
    item = make_item("Paid Car", price=2.0)
    status = client.get(f"/payments/status/{item.id}", headers=user_headers).json()
    assert status == {"item_id": item.id, "status": "none", "purchased": False}


def test_allowed_transitions():
    assert can_transition(PaymentStatus.pending, PaymentStatus.completed)
    assert can_transition(PaymentStatus.pending, PaymentStatus.failed)
    assert not can_transition(PaymentStatus.failed, PaymentStatus.pending)
    assert not can_transition(PaymentStatus.completed, PaymentStatus.failed)


def test_admin_settles_payment_manually(client, user, user_headers, admin_headers, signed_urls):
    item = make_item("Paid Car", price=2.0)
    add_payment(user, item, PaymentStatus.pending)

    pending = client.get("/admin/payments", params={"status": "pending"}, headers=admin_headers).json()
    assert len(pending) == 1
    payment_id = pending[0]["id"]

    done = client.post(f"/admin/payments/{payment_id}/complete", headers=admin_headers)
    assert done.status_code == 200
    assert done.json()["status"] == "completed"

    again = client.post(f"/admin/payments/{payment_id}/fail", headers=admin_headers)
    assert again.status_code == 400

    res = client.post("/functions/v1/get-download-url", json={"item_id": item.id}, headers=user_headers)
    assert res.status_code == 200

    mine = client.get("/payments/me", headers=user_headers).json()
    assert [p["status"] for p in mine] == ["completed"]


def test_admin_payments_require_admin(client, user_headers):
    assert client.get("/admin/payments", headers=user_headers).status_code == 403
    assert client.get("/admin/payments").status_code == 401
    assert client.post("/admin/payments/999/complete", headers=user_headers).status_code == 403


def test_admin_cannot_complete_second_payment_for_same_item(client, user, admin_headers):
    item = make_item("Paid Car", price=2.0)
    add_payment(user, item, PaymentStatus.completed)
    add_payment(user, item, PaymentStatus.pending)

    with Session(engine) as s:
        pending = s.exec(select(Payment).where(Payment.status == PaymentStatus.pending)).one()

    res = client.post(f"/admin/payments/{pending.id}/complete", headers=admin_headers)

    assert res.status_code == 400
    assert res.json() == {"error": "Item already purchased"}
    with Session(engine) as s:
        completed = s.exec(select(Payment).where(Payment.status == PaymentStatus.completed)).all()
    assert len(completed) == 1

    # the duplicate can still be closed out
    assert client.post(f"/admin/payments/{pending.id}/fail", headers=admin_headers).status_code == 200


def test_malformed_payment_body_checks_auth_first(client, user_headers, payments_configured):
    body = {"item_id": "abc", "amount": 2.0, "currency": "BNB"}

    assert client.post(SESSION_URL, json=body).status_code == 401

    res = client.post(SESSION_URL, json=body, headers=user_headers)
    assert res.status_code == 400
    assert res.json() == {"error": "Missing required fields"}
