import logging
import requests
from typing import Optional

from app.config import settings

logger = logging.getLogger(__name__)

ALLOWED_WEBHOOK_PREFIXES = (
    "https://discord.com/api/webhooks/",
    "https://discordapp.com/api/webhooks/",
)


class DeliveryError(Exception):
    pass


def is_valid_webhook_url(url: str) -> bool:
    return any(url.startswith(prefix) for prefix in ALLOWED_WEBHOOK_PREFIXES)


def post_webhook(url: str, payload: dict) -> None:
    """POST a JSON payload to a webhook. Raises DeliveryError on any non-2xx."""
    try:
        response = requests.post(
            url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=settings.NOTIFY_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise DeliveryError(str(e)) from e

    if not 200 <= response.status_code < 300:
        raise DeliveryError(f"Webhook returned {response.status_code}")


def _bot_headers() -> dict:
    return {
        "Authorization": f"Bot {settings.DISCORD_BOT_TOKEN}",
        "Content-Type": "application/json",
    }


def send_direct_message(discord_user_id: Optional[str], embed: dict) -> bool:
    if not discord_user_id:
        logger.error("No Discord user ID found")
        return False

    if not settings.DISCORD_BOT_TOKEN:
        logger.warning("DISCORD_BOT_TOKEN not configured, skipping DM")
        return False

    try:
        channel_response = requests.post(
            f"{settings.DISCORD_API_BASE}/users/@me/channels",
            json={"recipient_id": discord_user_id},
            headers=_bot_headers(),
            timeout=settings.NOTIFY_TIMEOUT_SECONDS,
        )
        if channel_response.status_code >= 400:
            logger.error("Failed to create DM channel: %s", channel_response.text)
            return False

        channel_id = channel_response.json()["id"]

        message_response = requests.post(
            f"{settings.DISCORD_API_BASE}/channels/{channel_id}/messages",
            json={"embeds": [embed]},
            headers=_bot_headers(),
            timeout=settings.NOTIFY_TIMEOUT_SECONDS,
        )
        if message_response.status_code >= 400:
            logger.error("Failed to send Discord message: %s", message_response.text)
            return False

    except (requests.RequestException, KeyError, ValueError):
        logger.exception("Error sending Discord DM")
        return False

    logger.info("Discord DM sent to %s", discord_user_id)
    return True
