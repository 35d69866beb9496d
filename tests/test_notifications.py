from sqlmodel import Session

from app.database import engine
from app.notifications import broadcast_new_release
from tests.conftest import SERVICE_HEADERS, make_item, make_profile

WEBHOOKS = [
    "https://discord.com/api/webhooks/1/ok",
    "https://discord.com/api/webhooks/2/fail",
    "https://discord.com/api/webhooks/3/ok",
    "https://discordapp.com/api/webhooks/4/fail",
    "https://discord.com/api/webhooks/5/ok",
]


def make_subscribers():
    for n, url in enumerate(WEBHOOKS):
        make_profile(f"sub{n}@example.com", webhook=url)
    make_profile("quiet@example.com")


def test_broadcast_counts_each_recipient(outbound):
    make_subscribers()

    with Session(engine) as s:
        result = broadcast_new_release(s, "Drift Pack")

    assert result["success"] is True
    assert result["message"] == "Discord notifications sent to 3 users (2 failed)"
    assert sorted(outbound.urls()) == sorted(WEBHOOKS)
    assert "Drift Pack" in outbound.calls[0]["json"]["content"]

    failed = [r for r in result["results"] if not r["success"]]
    assert {r["webhook"] for r in failed} == {WEBHOOKS[1], WEBHOOKS[3]}


def test_broadcast_without_recipients(outbound):
    with Session(engine) as s:
        result = broadcast_new_release(s, "Drift Pack")

    assert result == {"success": True, "message": "No users with Discord webhooks found", "results": []}
    assert outbound.calls == []


def test_notify_new_release_endpoint(client, admin_headers, user_headers):
    make_subscribers()

    res = client.post("/functions/v1/notify-new-release", json={"item_name": "Drift Pack"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["message"] == "Discord notifications sent to 3 users (2 failed)"
    assert set(res.json()) == {"success", "message", "results"}
    assert sum(1 for r in res.json()["results"] if not r["success"]) == 2

    denied = client.post("/functions/v1/notify-new-release", json={"item_name": "x"}, headers=user_headers)
    assert denied.status_code == 403


def test_publish_succeeds_while_some_webhooks_fail(client, admin_headers, outbound, monkeypatch):
    from app.services.r2_client import public_url

    uploads = []

    def fake_upload(file, key, content_type):
        uploads.append((key, content_type, file.read()))
        return public_url(key)

    monkeypatch.setattr("app.services.item_service.upload_to_r2", fake_upload)
    make_subscribers()

    res = client.post(
        "/admin/items",
        data={"name": "Drift Pack", "description": "Tuned handling", "price": "2.5", "category_id": "1"},
        files={
            "file": ("drift.zip", b"PK\x03\x04", "application/zip"),
            "image": ("cover.png", b"\x89PNG", "image/png"),
        },
        headers=admin_headers,
    )

    assert res.status_code == 201
    item = res.json()["item"]
    assert item["name"] == "Drift Pack"
    assert item["price"] == 2.5
    assert item["category_name"] == "SCRIPTS"
    assert item["image_url"].endswith("_image.png")

    assert any(k.endswith("_image.png") for k, _, _ in uploads)
    assert any(k.endswith("_script.zip") for k, _, _ in uploads)

    # the broadcast ran as a background task after the response
    assert sorted(outbound.urls()) == sorted(WEBHOOKS)


def test_publish_validation(client, admin_headers, user_headers, monkeypatch):
    monkeypatch.setattr("app.services.item_service.upload_to_r2", lambda f, k, c: "unused")

    no_file = client.post(
        "/admin/items",
        data={"name": "x", "description": "y", "price": "1", "category_id": "1"},
        headers=admin_headers,
    )
    assert no_file.status_code == 400

    bad_category = client.post(
        "/admin/items",
        data={"name": "x", "description": "y", "price": "1", "category_id": "99"},
        files={"file": ("a.zip", b"PK", "application/zip")},
        headers=admin_headers,
    )
    assert bad_category.status_code == 404

    forbidden = client.post(
        "/admin/items",
        data={"name": "x", "description": "y", "price": "1", "category_id": "1"},
        files={"file": ("a.zip", b"PK", "application/zip")},
        headers=user_headers,
    )
    assert forbidden.status_code == 403


def test_send_download_thanks_by_email(client, outbound, monkeypatch):
    from app.config import settings
    from app.services.email_service import BREVO_API_URL

    monkeypatch.setattr(settings, "BREVO_API_KEY", "brevo-key")
    buyer = make_profile("buyer@example.com")

    res = client.post(
        "/functions/v1/send-download-thanks",
        json={"user_id": buyer.id, "item_name": "Drift Pack", "item_image_url": None, "auth_provider": "email"},
        headers=SERVICE_HEADERS,
    )

    assert res.status_code == 200
    assert res.json()["success"] is True
    sent = outbound.calls[0]
    assert sent["url"] == BREVO_API_URL
    assert sent["json"]["to"] == [{"email": "buyer@example.com"}]
    assert "Drift Pack" in sent["json"]["htmlContent"]


def test_send_download_thanks_guards(client):
    payload = {"user_id": 999, "item_name": "Drift Pack"}

    assert client.post("/functions/v1/send-download-thanks", json=payload).status_code == 403
    wrong = client.post("/functions/v1/send-download-thanks", json=payload, headers={"X-Service-Key": "nope"})
    assert wrong.status_code == 403

    unknown = client.post("/functions/v1/send-download-thanks", json=payload, headers=SERVICE_HEADERS)
    assert unknown.status_code == 404
    assert unknown.json() == {"error": "User not found"}


def test_send_discord_notification(client, outbound):
    owner = make_profile("owner@example.com", webhook="https://discord.com/api/webhooks/7/owner")
    item = make_item("Owned", created_by=owner.id)
    fan = make_profile("fan@example.com")

    res = client.post(
        "/functions/v1/send-discord-notification",
        json={"item_id": item.id, "user_id": fan.id},
        headers=SERVICE_HEADERS,
    )

    assert res.json()["success"] is True
    assert outbound.urls() == ["https://discord.com/api/webhooks/7/owner"]

    unconfigured = make_item("Orphan")
    res = client.post(
        "/functions/v1/send-discord-notification",
        json={"item_id": unconfigured.id, "user_id": fan.id},
        headers=SERVICE_HEADERS,
    )
    assert res.json()["success"] is False
