import logging
from typing import Optional

from fastapi import BackgroundTasks
from sqlmodel import Session

from app.config import settings
from app.database import session_scope
from app.exceptions import (
    AuthenticationRequired,
    InternalError,
    NotFound,
    PaymentRequired,
    ValidationFailed,
)
from app.models.download import Download
from app.models.item import Item
from app.models.profile import Profile
from app.notifications import StoreEvent, dispatch_store_event
from app.services.background import best_effort
from app.services.purchase_gate import check_purchase
from app.services.r2_client import StorageError, create_signed_url, parse_file_reference

logger = logging.getLogger(__name__)


@best_effort
def record_download(item_id: int, user_id: int) -> None:
    """Bump the item's download counter and keep a history row."""
    with session_scope() as session:
        item = session.get(Item, item_id)
        if item is None:
            logger.warning("Item %s vanished before its download was recorded", item_id)
            return
        # read-modify-write, last write wins on concurrent downloads
        item.downloads = (item.downloads or 0) + 1
        session.add(item)
        session.add(Download(user_id=user_id, item_id=item_id))
        session.commit()
    logger.info("Download count incremented for item %s", item_id)


@best_effort
def notify_download(item_id: int, user_id: int, item_name: str, item_image_url: Optional[str], auth_provider: str) -> None:
    dispatch_store_event(
        event=StoreEvent.DOWNLOAD_COMPLETED,
        item_id=item_id,
        user_id=user_id,
        extra={
            "item_name": item_name,
            "item_image_url": item_image_url,
            "auth_provider": auth_provider,
        },
    )


def download_filename(item: Item) -> str:
    return f"{item.name}.{settings.DOWNLOAD_FILE_EXTENSION}"


def authorize_download(
    session: Session,
    *,
    user: Optional[Profile],
    item_id: Optional[int],
    background_tasks: BackgroundTasks,
) -> dict:
    """
    Issue a short-lived signed link to an item's file.

    The counter bump and notifications are scheduled as detached background
    tasks; their outcome never changes the returned URL.
    """
    if user is None:
        raise AuthenticationRequired()

    if not item_id:
        raise ValidationFailed("Missing item_id")

    item = session.get(Item, item_id)
    if not item:
        raise NotFound("Item not found")

    gate = check_purchase(session, user, item)
    if not gate.allowed:
        raise PaymentRequired()

    reference = parse_file_reference(item.file_url)
    if reference is None:
        logger.error("Item %s has a malformed file reference: %s", item.id, item.file_url)
        raise InternalError("Invalid file URL")

    bucket, key = reference
    filename = download_filename(item)

    try:
        url = create_signed_url(bucket, key, settings.DOWNLOAD_URL_TTL_SECONDS, filename)
    except StorageError:
        raise InternalError("Failed to create download URL")

    background_tasks.add_task(record_download, item.id, user.id)
    background_tasks.add_task(
        notify_download,
        item.id,
        user.id,
        item.name,
        item.image_url,
        user.auth_provider,
    )

    return {"url": url, "filename": filename}
