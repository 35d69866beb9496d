import os

# settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"
os.environ["SERVICE_KEY"] = "test-service-key"
os.environ["ADMIN_EMAILS"] = '["admin@example.com"]'

import threading
from datetime import datetime

import pytest
import requests
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

import app.models  # noqa: F401
from app.database import engine
from app.main import app
from app.models.item import Item
from app.models.profile import Profile
from app.services.category_service import _cached_list_categories, seed_categories
from app.services.r2_client import public_url
from app.utils.token import create_access_token

SERVICE_HEADERS = {"X-Service-Key": "test-service-key"}


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self.text = str(self._payload)

    def json(self):
        return self._payload


class OutboundRecorder:
    """Stands in for requests.post; URLs containing 'fail' get a 500."""

    def __init__(self):
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, url, json=None, headers=None, timeout=None, **kwargs):
        with self._lock:
            self.calls.append({"url": url, "json": json, "headers": headers})
        if "fail" in url:
            return FakeResponse(500, {"message": "boom"})
        if url.endswith("/users/@me/channels"):
            return FakeResponse(200, {"id": "dm-channel-1"})
        return FakeResponse(204)

    def urls(self):
        return [c["url"] for c in self.calls]


@pytest.fixture(autouse=True)
def reset_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    _cached_list_categories.cache_clear()
    with Session(engine) as session:
        seed_categories(session)
    yield
    _cached_list_categories.cache_clear()


@pytest.fixture(autouse=True)
def outbound(monkeypatch):
    recorder = OutboundRecorder()
    monkeypatch.setattr(requests, "post", recorder)
    return recorder


@pytest.fixture
def signed_urls(monkeypatch):
    calls = []

    def fake_create_signed_url(bucket, key, expires, filename):
        calls.append((bucket, key, expires, filename))
        return f"https://signed.example.com/{bucket}/{key}?expires={expires}"

    monkeypatch.setattr("app.services.download_service.create_signed_url", fake_create_signed_url)
    return calls


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


def make_profile(email, *, role="user", auth_provider="email", webhook=None, discord_user_id=None):
    with Session(engine) as s:
        profile = Profile(
            email=email,
            username=email.split("@")[0],
            role=role,
            auth_provider=auth_provider,
            discord_webhook_url=webhook,
            discord_user_id=discord_user_id,
        )
        s.add(profile)
        s.commit()
        s.refresh(profile)
        return profile


def auth_headers(profile):
    token = create_access_token({"sub": str(profile.id)})
    return {"Authorization": f"Bearer {token}"}


def make_item(name="Garage Script", *, price=0.0, category_id=1, created_by=None, file_url=None, created_at=None):
    with Session(engine) as s:
        item = Item(
            name=name,
            description=f"{name} description",
            price=price,
            category_id=category_id,
            file_url=file_url or public_url(f"{name.lower().replace(' ', '_')}.zip"),
            created_by=created_by,
        )
        if created_at:
            item.created_at = created_at
        s.add(item)
        s.commit()
        s.refresh(item)
        return item


@pytest.fixture
def user():
    return make_profile("player@example.com")


@pytest.fixture
def user_headers(user):
    return auth_headers(user)


@pytest.fixture
def admin():
    return make_profile("admin@example.com", role="admin")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def payments_configured(monkeypatch):
    from app.config import settings

    monkeypatch.setattr(settings, "BINANCE_API_KEY", "key")
    monkeypatch.setattr(settings, "BINANCE_API_SECRET", "secret")
    monkeypatch.setattr(settings, "PAYMENT_DEPOSIT_ADDRESS", "0xDEPOSIT")
    return settings
