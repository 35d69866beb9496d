import logging
from typing import Optional

from fastapi import BackgroundTasks, UploadFile
from sqlmodel import Session, select

from app.exceptions import NotFound, UpstreamUnavailable, ValidationFailed
from app.models.category import Category
from app.models.download import Download
from app.models.favorite import Favorite
from app.models.item import Item
from app.models.payment import Payment
from app.models.profile import Profile
from app.models.rating import Rating
from app.notifications import StoreEvent, dispatch_store_event
from app.services.background import best_effort
from app.services.r2_client import StorageError, build_object_key, delete_from_r2, upload_to_r2

logger = logging.getLogger(__name__)


@best_effort
def announce_release(item_name: str) -> None:
    dispatch_store_event(event=StoreEvent.NEW_RELEASE, extra={"item_name": item_name})


def _upload(file: UploadFile, kind: str) -> str:
    key = build_object_key(file.filename or "", kind)
    try:
        return upload_to_r2(file.file, key, file.content_type)
    except StorageError:
        raise UpstreamUnavailable(f"Failed to upload {kind}")


def publish_item(
    session: Session,
    *,
    admin: Profile,
    name: str,
    description: str,
    price: float,
    category_id: int,
    file: Optional[UploadFile],
    image: Optional[UploadFile],
    background_tasks: BackgroundTasks,
) -> Item:
    """
    Upload the preview and archive, create the item, then announce it.

    The announcement is scheduled after the insert; its outcome never
    affects the publish result.
    """
    if not name or not description or not category_id or file is None:
        raise ValidationFailed("Please fill in all required fields")

    if price < 0:
        raise ValidationFailed("Price cannot be negative")

    category = session.get(Category, category_id)
    if not category:
        raise NotFound("Category not found")

    image_url = _upload(image, "image") if image is not None and image.filename else None
    file_url = _upload(file, "script")

    item = Item(
        name=name,
        description=description,
        price=price,
        category_id=category.id,
        image_url=image_url,
        file_url=file_url,
        created_by=admin.id,
    )
    session.add(item)
    session.commit()
    session.refresh(item)

    logger.info("Item %s published by %s", item.id, admin.email)
    background_tasks.add_task(announce_release, item.name)
    return item


def delete_item(session: Session, item_id: int) -> None:
    item = session.get(Item, item_id)
    if not item:
        raise NotFound("Item not found")

    for model in (Favorite, Rating, Download, Payment):
        for row in session.exec(select(model).where(model.item_id == item_id)).all():
            session.delete(row)
    session.flush()

    file_url, image_url = item.file_url, item.image_url
    session.delete(item)
    session.commit()

    # stored objects are removed after the rows; a failure only leaves an orphan object
    delete_from_r2(file_url)
    delete_from_r2(image_url)


def list_all_items(session: Session):
    return session.exec(select(Item).order_by(Item.created_at.desc(), Item.id.desc())).all()
