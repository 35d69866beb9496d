from app.client.dismissed_ads import DismissedAds
from app.client.session import SessionContext, SessionEvent, SessionState
from app.client.storefront import StorefrontClient, StorefrontClientError

__all__ = [
    "DismissedAds",
    "SessionContext",
    "SessionEvent",
    "SessionState",
    "StorefrontClient",
    "StorefrontClientError",
]
