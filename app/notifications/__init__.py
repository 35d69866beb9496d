from .events import StoreEvent
from .dispatcher import (
    broadcast_new_release,
    dispatch_store_event,
    notify_item_owner,
    send_download_thanks,
)

__all__ = [
    "StoreEvent",
    "broadcast_new_release",
    "dispatch_store_event",
    "notify_item_owner",
    "send_download_thanks",
]
