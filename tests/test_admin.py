from datetime import datetime, timedelta

from sqlmodel import Session, select

from app.constants.payment_status import PaymentStatus
from app.database import engine
from app.models.ad import Ad
from app.models.favorite import Favorite
from app.models.item import Item
from app.models.payment import Payment
from app.models.rating import Rating
from tests.conftest import SERVICE_HEADERS, make_item
from tests.test_downloads import add_payment


def make_ad(title, *, expires_in=timedelta(days=1), active=True):
    with Session(engine) as s:
        ad = Ad(
            title=title,
            content=f"{title} content",
            is_active=active,
            expires_at=datetime.utcnow() + expires_in,
        )
        s.add(ad)
        s.commit()
        s.refresh(ad)
        return ad


def test_delete_item_removes_dependents(client, user, user_headers, admin_headers, monkeypatch):
    deleted = []
    monkeypatch.setattr("app.services.item_service.delete_from_r2", lambda url: deleted.append(url) or True)

    item = make_item("Doomed", price=1.0)
    add_payment(user, item, PaymentStatus.completed)
    client.post(f"/favorites/{item.id}/toggle", headers=user_headers)
    client.put(f"/ratings/{item.id}", json={"rating": 4}, headers=user_headers)

    res = client.delete(f"/admin/items/{item.id}", headers=admin_headers)
    assert res.status_code == 200

    with Session(engine) as s:
        assert s.get(Item, item.id) is None
        assert s.exec(select(Favorite)).all() == []
        assert s.exec(select(Rating)).all() == []
        assert s.exec(select(Payment)).all() == []
    assert deleted[0] == item.file_url

    assert client.delete(f"/admin/items/{item.id}", headers=admin_headers).status_code == 404


def test_overview(client, admin_headers, user_headers):
    make_item("One", price=3.0)
    make_ad("Promo")

    res = client.get("/admin/overview", headers=admin_headers)
    assert res.status_code == 200
    body = res.json()
    assert [c["name"] for c in body["categories"]] == ["CLOTHES", "SCRIPTS", "YMAP"]
    assert [i["name"] for i in body["items"]] == ["One"]
    assert [a["title"] for a in body["ads"]] == ["Promo"]
    assert body["cards"]["total_items"] == 1

    assert client.get("/admin/overview", headers=user_headers).status_code == 403


def test_ads_lifecycle(client, admin_headers):
    created = client.post("/admin/ads", json={"title": "Sale", "content": "50% off"}, headers=admin_headers)
    assert created.status_code == 201
    ad = created.json()
    assert ad["is_active"] is True

    expires = datetime.fromisoformat(ad["expires_at"])
    assert timedelta(days=6) < expires - datetime.utcnow() <= timedelta(days=7)

    assert [a["title"] for a in client.get("/ads").json()] == ["Sale"]

    toggled = client.patch(f"/admin/ads/{ad['id']}/toggle", headers=admin_headers).json()
    assert toggled["is_active"] is False
    assert client.get("/ads").json() == []

    assert client.delete(f"/admin/ads/{ad['id']}", headers=admin_headers).status_code == 200
    assert client.delete(f"/admin/ads/{ad['id']}", headers=admin_headers).status_code == 404


def test_public_ads_hide_expired(client):
    make_ad("Live")
    make_ad("Old", expires_in=timedelta(days=-1))
    assert [a["title"] for a in client.get("/ads").json()] == ["Live"]


def test_cleanup_with_nothing_expired(client):
    make_ad("Live")

    res = client.post("/functions/v1/cleanup-expired-ads", headers=SERVICE_HEADERS)

    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Removed 0 expired ads", "count": 0}
    with Session(engine) as s:
        assert len(s.exec(select(Ad)).all()) == 1


def test_cleanup_removes_expired(client):
    make_ad("Live")
    make_ad("Old", expires_in=timedelta(days=-1))
    make_ad("Older", expires_in=timedelta(days=-30), active=False)

    res = client.post("/functions/v1/cleanup-expired-ads", headers=SERVICE_HEADERS)

    assert res.json()["count"] == 2
    with Session(engine) as s:
        assert [a.title for a in s.exec(select(Ad)).all()] == ["Live"]


def test_cleanup_requires_service_key(client, monkeypatch):
    from app.config import settings

    assert client.post("/functions/v1/cleanup-expired-ads").status_code == 403

    monkeypatch.setattr(settings, "SERVICE_KEY", None)
    assert client.post("/functions/v1/cleanup-expired-ads", headers=SERVICE_HEADERS).status_code == 503


def test_cleanup_job():
    from app.jobs.cleanup_expired_ads import run

    make_ad("Old", expires_in=timedelta(days=-1))
    assert run()["count"] == 1
