from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from app.exceptions import NotFound
from app.models.favorite import Favorite
from app.models.item import Item
from app.models.profile import Profile
from app.models.rating import Rating
from app.services.catalog_service import summarize_item
from app.utils.upsert import conflict_insert


def _require_item(session: Session, item_id: int) -> Item:
    item = session.get(Item, item_id)
    if not item:
        raise NotFound("Item not found")
    return item


def _favorite_row(session: Session, user_id: int, item_id: int) -> Optional[Favorite]:
    return session.exec(
        select(Favorite).where(Favorite.user_id == user_id, Favorite.item_id == item_id)
    ).first()


def toggle_favorite(session: Session, *, user: Profile, item_id: int) -> dict:
    _require_item(session, item_id)

    existing = _favorite_row(session, user.id, item_id)
    if existing:
        session.delete(existing)
        favorited = False
    else:
        session.add(Favorite(user_id=user.id, item_id=item_id))
        favorited = True

    session.commit()
    return {"item_id": item_id, "favorited": favorited}


def favorite_status(session: Session, *, user: Profile, item_id: int) -> dict:
    return {"item_id": item_id, "favorited": _favorite_row(session, user.id, item_id) is not None}


def list_favorites(session: Session, *, user: Profile):
    rows = session.exec(
        select(Favorite, Item)
        .join(Item, Item.id == Favorite.item_id)
        .where(Favorite.user_id == user.id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
    ).all()

    return [
        {"id": fav.id, "created_at": fav.created_at, "item": summarize_item(item)}
        for fav, item in rows
    ]


def rating_aggregate(session: Session, item_id: int) -> tuple[float, int]:
    average, count = session.exec(
        select(func.avg(Rating.rating), func.count(Rating.id)).where(Rating.item_id == item_id)
    ).one()
    return round(float(average or 0), 2), int(count or 0)


def _user_rating(session: Session, user_id: int, item_id: int) -> Optional[Rating]:
    return session.exec(
        select(Rating).where(Rating.user_id == user_id, Rating.item_id == item_id)
    ).first()


def submit_rating(session: Session, *, user: Profile, item_id: int, rating: int) -> dict:
    """
    Upsert the caller's rating, then re-derive the item's average and count
    from the rating rows. Last write wins.
    """
    item = _require_item(session, item_id)

    now = datetime.utcnow()
    statement = conflict_insert(session, Rating).values(
        user_id=user.id,
        item_id=item_id,
        rating=rating,
        created_at=now,
        updated_at=now,
    )
    session.exec(statement.on_conflict_do_update(
        index_elements=["user_id", "item_id"],
        set_={"rating": statement.excluded.rating, "updated_at": statement.excluded.updated_at},
    ))

    average, count = rating_aggregate(session, item_id)
    item.rating = average
    item.ratings_count = count
    session.add(item)
    session.commit()

    return {"item_id": item_id, "average": average, "count": count, "your_rating": rating}


def rating_summary(session: Session, *, item_id: int, user: Optional[Profile] = None) -> dict:
    _require_item(session, item_id)
    average, count = rating_aggregate(session, item_id)

    your_rating = None
    if user is not None:
        row = _user_rating(session, user.id, item_id)
        your_rating = row.rating if row else None

    return {"item_id": item_id, "average": average, "count": count, "your_rating": your_rating}
