import logging
import requests
from typing import Dict, Optional

from app.config import settings

logger = logging.getLogger(__name__)


def verify_discord_token(access_token: str) -> Optional[Dict[str, str]]:
    """Resolve a Discord OAuth access token to the Discord account it belongs to."""
    try:
        response = requests.get(
            f"{settings.DISCORD_API_BASE}/users/@me",
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=settings.NOTIFY_TIMEOUT_SECONDS,
        )
    except requests.RequestException:
        logger.exception("Discord token verification failed")
        return None

    if response.status_code != 200:
        logger.warning("Discord rejected access token (%s)", response.status_code)
        return None

    data = response.json()
    if not data.get("id"):
        return None

    return {
        "id": str(data["id"]),
        "email": data.get("email"),
        "name": data.get("global_name") or data.get("username") or "Discord User",
    }
