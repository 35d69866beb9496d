import hmac
from typing import Optional

from fastapi import Depends, Header
from app.config import settings
from app.exceptions import PermissionDenied, UpstreamUnavailable
from app.models.profile import Profile
from app.utils.token import get_current_user

def require_admin(current_user: Profile = Depends(get_current_user)):
    if not current_user.is_admin:
        raise PermissionDenied("Admin access required")
    return current_user


def require_service_key(x_service_key: Optional[str] = Header(None)):
    """Machine-to-machine guard for scheduler and internal calls."""
    if not settings.SERVICE_KEY:
        raise UpstreamUnavailable("Service key not configured")
    if not x_service_key or not hmac.compare_digest(x_service_key, settings.SERVICE_KEY):
        raise PermissionDenied("Invalid service key")
    return True
