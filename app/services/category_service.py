import logging
import time
from datetime import datetime
from functools import lru_cache

from sqlmodel import Session, select

from app.constants.categories import REQUIRED_CATEGORIES
from app.models.category import Category
from app.utils.upsert import conflict_insert

logger = logging.getLogger(__name__)

CACHE_TTL = 60 * 60  # 60 minutes


def _ttl_bucket() -> int:
    """
    Changes every 60 minutes → auto cache expiry
    """
    return int(time.time() // CACHE_TTL)


def seed_categories(session: Session) -> int:
    """Insert the fixed categories that are missing. Safe to run any number of times, concurrently too."""
    now = datetime.utcnow()
    statement = conflict_insert(session, Category).values([
        {"name": name.value, "description": description, "created_at": now}
        for name, description in REQUIRED_CATEGORIES
    ]).on_conflict_do_nothing(index_elements=["name"])

    created = session.exec(statement).rowcount
    session.commit()

    if created:
        _cached_list_categories.cache_clear()

    logger.info("Category seeding done, %s created", created)
    return created


@lru_cache(maxsize=8)
def _cached_list_categories(bucket: int):
    from app.database import session_scope

    with session_scope() as session:
        names = [name.value for name, _ in REQUIRED_CATEGORIES]
        categories = session.exec(
            select(Category).where(Category.name.in_(names)).order_by(Category.name)
        ).all()
        return [
            {
                "id": c.id,
                "name": c.name,
                "description": c.description,
                "created_at": c.created_at,
            }
            for c in categories
        ]


def list_categories():
    return _cached_list_categories(_ttl_bucket())
