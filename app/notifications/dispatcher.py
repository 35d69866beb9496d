import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from sqlmodel import Session, select

from app.config import settings
from app.database import session_scope
from app.exceptions import NotFound
from app.models.category import Category
from app.models.item import Item
from app.models.profile import Profile
from app.notifications.channels import Channel
from app.notifications.embeds import (
    download_notice_payload,
    download_thanks_embed,
    new_release_message,
)
from app.notifications.events import StoreEvent
from app.notifications.rules import NOTIFICATION_RULES
from app.services.discord_service import DeliveryError, post_webhook, send_direct_message
from app.services.email_service import send_download_thanks_email

logger = logging.getLogger(__name__)


def _deliver(url: str, payload: dict) -> dict:
    try:
        post_webhook(url, payload)
    except DeliveryError as e:
        logger.error(f"Discord webhook failed for URL {url}: {e}")
        return {"success": False, "webhook": url, "error": str(e)}
    return {"success": True, "webhook": url}


def broadcast_new_release(session: Session, item_name: str) -> dict:
    """
    Announce a new item to every profile with a webhook configured.

    Each recipient is independent: one failing endpoint never blocks the
    others. The result always reports success; per-recipient outcomes are in
    `results`.
    """
    urls = session.exec(
        select(Profile.discord_webhook_url).where(Profile.discord_webhook_url.is_not(None))
    ).all()
    urls = [u for u in urls if u]

    logger.info(f"Found {len(urls)} users with Discord webhooks")

    if not urls:
        return {
            "success": True,
            "message": "No users with Discord webhooks found",
            "results": [],
        }

    payload = new_release_message(item_name)
    workers = max(1, min(settings.NOTIFY_MAX_WORKERS, len(urls)))

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(lambda url: _deliver(url, payload), urls))

    successful = sum(1 for r in results if r["success"])
    failed = len(results) - successful

    logger.info(f"Discord notifications sent: {successful} successful, {failed} failed")

    return {
        "success": True,
        "message": f"Discord notifications sent to {successful} users ({failed} failed)",
        "results": results,
    }


def send_download_thanks(
    session: Session,
    *,
    user_id: int,
    item_name: str,
    item_image_url: Optional[str],
    auth_provider: Optional[str] = None,
) -> bool:
    """Thank the downloader by Discord DM or email, depending on how they signed in."""
    profile = session.get(Profile, user_id)
    if not profile:
        raise NotFound("User not found")

    provider = auth_provider or profile.auth_provider

    if profile.auth_provider == "discord" or provider == "discord":
        return send_direct_message(
            profile.discord_user_id,
            download_thanks_embed(item_name, item_image_url),
        )

    return send_download_thanks_email(profile.email, item_name, item_image_url)


def notify_item_owner(session: Session, *, item_id: int, user_id: int) -> bool:
    item = session.get(Item, item_id)
    if not item:
        raise NotFound("Item not found")

    downloader = session.get(Profile, user_id)
    if not downloader:
        raise NotFound("User profile not found")

    owner = session.get(Profile, item.created_by) if item.created_by else None
    if not owner or not owner.discord_webhook_url:
        logger.info("No Discord webhook URL configured for item owner")
        return False

    category = session.get(Category, item.category_id) if item.category_id else None
    payload = download_notice_payload(
        downloader.username,
        item.name,
        category.name if category else None,
    )

    try:
        post_webhook(owner.discord_webhook_url, payload)
    except DeliveryError as e:
        logger.error(f"Discord webhook failed: {e}")
        return False

    logger.info("Discord notification sent successfully")
    return True


def dispatch_store_event(
    *,
    event: StoreEvent,
    item_id: Optional[int] = None,
    user_id: Optional[int] = None,
    extra: dict | None = None,
) -> None:
    """
    Central notification dispatcher, meant to run detached from the request.

    Every channel is best-effort: failures are logged and never propagate to
    the operation that triggered the event.
    """
    rules = NOTIFICATION_RULES.get(event, {})
    extra = extra or {}

    with session_scope() as session:

        # -------------------------
        # NEW RELEASE BROADCAST
        # -------------------------
        if rules.get(Channel.WEBHOOK_BROADCAST):
            try:
                broadcast_new_release(session, extra["item_name"])
            except Exception:
                logger.exception("New release broadcast failed")

        # -------------------------
        # DOWNLOADER THANK-YOU
        # -------------------------
        if user_id and (rules.get(Channel.DISCORD_DM) or rules.get(Channel.EMAIL_USER)):
            try:
                send_download_thanks(
                    session,
                    user_id=user_id,
                    item_name=extra["item_name"],
                    item_image_url=extra.get("item_image_url"),
                    auth_provider=extra.get("auth_provider"),
                )
            except Exception:
                logger.exception("Failed to send thank you message")

        # -------------------------
        # ITEM OWNER WEBHOOK
        # -------------------------
        if item_id and user_id and rules.get(Channel.WEBHOOK_OWNER):
            try:
                notify_item_owner(session, item_id=item_id, user_id=user_id)
            except Exception:
                logger.exception("Failed to notify item owner")
