from datetime import datetime
from typing import Optional

from app.config import settings

GREEN = 0x00FF00
BLUE = 0x3B82F6


def _now_iso() -> str:
    return datetime.utcnow().isoformat() + "Z"


def new_release_message(item_name: str) -> dict:
    return {
        "content": (
            "🎉 **DEAR CUSTOMER, A NEW RELEASE HAS BEEN UPLOADED TO OUR STORE** 🎉\n\n"
            f"📦 **New Release:** {item_name}\n\n"
            "Visit our store to check it out!"
        ),
        "username": "Store Bot",
    }


def download_thanks_embed(item_name: str, image_url: Optional[str]) -> dict:
    embed = {
        "title": "🎉 Thank You for Your Download!",
        "description": (
            f"Thank you for downloading **{item_name}**!\n\n"
            "We hope you enjoy using this script. If you have any questions "
            "or need support, feel free to reach out to us."
        ),
        "color": BLUE,
        "footer": {"text": f"Best regards from {settings.STORE_NAME} Team"},
        "timestamp": _now_iso(),
    }
    if image_url:
        embed["image"] = {"url": image_url}
    return embed


def download_notice_payload(downloaded_by: str, item_name: str, category_name: Optional[str]) -> dict:
    return {
        "embeds": [
            {
                "title": "🎉 New Resource Download!",
                "description": "A resource has been downloaded from your FiveM store",
                "color": GREEN,
                "fields": [
                    {"name": "👤 Downloaded by", "value": downloaded_by or "Unknown User", "inline": True},
                    {"name": "📦 Resource", "value": item_name, "inline": True},
                    {"name": "🏷️ Category", "value": category_name or "Uncategorized", "inline": True},
                ],
                "timestamp": _now_iso(),
            }
        ]
    }
