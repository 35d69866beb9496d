from typing import Optional

from sqlmodel import Session, select

from app.exceptions import NotFound, ValidationFailed
from app.models.category import Category
from app.models.item import Item
from app.utils.pagination import paginate

SORT_ORDERS = {
    "newest": (Item.created_at.desc(), Item.id.desc()),
    "popular": (Item.downloads.desc(), Item.created_at.desc()),
    "rating": (Item.rating.desc(), Item.created_at.desc()),
    "price-low": (Item.price.asc(), Item.created_at.desc()),
    "price-high": (Item.price.desc(), Item.created_at.desc()),
}

FEATURED_COUNT = 3


def serialize_item(item: Item) -> dict:
    return {
        "id": item.id,
        "name": item.name,
        "description": item.description,
        "price": item.price,
        "category_id": item.category_id,
        "category_name": item.category.name if item.category else None,
        "image_url": item.image_url,
        "downloads": item.downloads,
        "rating": item.rating,
        "ratings_count": item.ratings_count,
        "created_at": item.created_at,
    }


def summarize_item(item: Item) -> dict:
    return {
        "id": item.id,
        "name": item.name,
        "description": item.description,
        "price": item.price,
        "image_url": item.image_url,
        "rating": item.rating,
        "category_name": item.category.name if item.category else None,
    }


def list_items(
    session: Session,
    *,
    category: Optional[str] = None,
    q: Optional[str] = None,
    sort: str = "newest",
    page: int = 1,
    limit: int = 12,
):
    if sort not in SORT_ORDERS:
        raise ValidationFailed(f"Unknown sort '{sort}'")

    query = select(Item)

    if q:
        like = f"%{q}%"
        query = query.where(Item.name.ilike(like) | Item.description.ilike(like))

    if category and category.lower() != "all":
        query = query.join(Category).where(Category.name == category.upper())

    query = query.order_by(*SORT_ORDERS[sort])

    return paginate(
        session=session,
        query=query,
        page=page,
        limit=limit,
        serialize=serialize_item,
    )


def featured_items(session: Session):
    items = session.exec(
        select(Item).order_by(Item.created_at.desc(), Item.id.desc()).limit(FEATURED_COUNT)
    ).all()
    return [serialize_item(i) for i in items]


def get_item_or_404(session: Session, item_id: int) -> Item:
    item = session.get(Item, item_id)
    if not item:
        raise NotFound("Item not found")
    return item
