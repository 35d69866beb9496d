from datetime import datetime, timedelta

from sqlmodel import Session, select

from app.database import engine
from app.models.category import Category
from app.services.category_service import seed_categories
from tests.conftest import make_item


def test_categories_are_seeded(client):
    res = client.get("/categories")
    assert res.status_code == 200
    assert [c["name"] for c in res.json()] == ["CLOTHES", "SCRIPTS", "YMAP"]


def test_seeding_twice_creates_no_duplicates():
    with Session(engine) as s:
        s.exec(select(Category).where(Category.name == "SCRIPTS")).one().description = "Custom"
        s.commit()

        assert seed_categories(s) == 0
        assert seed_categories(s) == 0

        rows = s.exec(select(Category)).all()
        assert len(rows) == 3
        scripts = s.exec(select(Category).where(Category.name == "SCRIPTS")).one()
        assert scripts.description == "Custom"


def test_seeding_restores_missing_category():
    with Session(engine) as s:
        s.delete(s.exec(select(Category).where(Category.name == "YMAP")).one())
        s.commit()

        assert seed_categories(s) == 1
        assert len(s.exec(select(Category)).all()) == 3


def test_list_items_filters_and_sorts(client):
    base = datetime.utcnow()
    make_item("Cheap Garage", price=1.0, category_id=1, created_at=base - timedelta(days=2))
    make_item("Luxury Jacket", price=9.0, category_id=2, created_at=base - timedelta(days=1))
    make_item("Free Map", price=0.0, category_id=3, created_at=base)

    newest = client.get("/items").json()
    assert newest["total_items"] == 3
    assert [i["name"] for i in newest["results"]] == ["Free Map", "Luxury Jacket", "Cheap Garage"]

    by_price = client.get("/items", params={"sort": "price-high"}).json()
    assert by_price["results"][0]["name"] == "Luxury Jacket"

    scripts = client.get("/items", params={"category": "scripts"}).json()
    assert [i["name"] for i in scripts["results"]] == ["Cheap Garage"]
    assert scripts["results"][0]["category_name"] == "SCRIPTS"

    search = client.get("/items", params={"q": "jACK"}).json()
    assert [i["name"] for i in search["results"]] == ["Luxury Jacket"]

    everything = client.get("/items", params={"category": "all", "limit": 2, "page": 2}).json()
    assert everything["total_pages"] == 2
    assert len(everything["results"]) == 1


def test_unknown_category_is_empty_and_unknown_sort_rejected(client):
    make_item("Something")
    assert client.get("/items", params={"category": "weapons"}).json()["total_items"] == 0

    res = client.get("/items", params={"sort": "random"})
    assert res.status_code == 400


def test_featured_is_newest_three(client):
    base = datetime.utcnow()
    for n in range(5):
        make_item(f"Item {n}", created_at=base + timedelta(minutes=n))

    featured = client.get("/items/featured").json()
    assert [i["name"] for i in featured] == ["Item 4", "Item 3", "Item 2"]


def test_item_detail_and_404(client):
    item = make_item("Detail")
    res = client.get(f"/items/{item.id}")
    assert res.status_code == 200
    assert res.json()["name"] == "Detail"
    assert "file_url" not in res.json()

    missing = client.get("/items/999")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Item not found"}


def test_root_and_health(client):
    assert "functions" in client.get("/").json()
    health = client.get("/health/check").json()
    assert health["database"] == "ok"


def test_cors_preflight(client):
    res = client.options(
        "/functions/v1/get-download-url",
        headers={
            "Origin": "https://store.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization,content-type",
        },
    )
    assert res.status_code == 200
    assert "access-control-allow-origin" in res.headers


def test_seeding_from_two_workers():
    with Session(engine) as s:
        for category in s.exec(select(Category)).all():
            s.delete(category)
        s.commit()

    with Session(engine) as first, Session(engine) as second:
        assert seed_categories(first) == 3
        assert seed_categories(second) == 0

    with Session(engine) as s:
        names = sorted(c.name for c in s.exec(select(Category)).all())
    assert names == ["CLOTHES", "SCRIPTS", "YMAP"]
