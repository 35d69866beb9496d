import logging
from typing import Any, Type, TypeVar

from fastapi import APIRouter, BackgroundTasks, Body, Depends
from pydantic import BaseModel, ValidationError
from sqlmodel import Session

from app.database import get_session
from app.dependencies.admin import require_admin, require_service_key
from app.exceptions import AuthenticationRequired, ValidationFailed
from app.models.profile import Profile
from app.notifications import broadcast_new_release, notify_item_owner, send_download_thanks
from app.schemas.ad_schemas import CleanupResponse
from app.schemas.download_schemas import DownloadUrlRequest, DownloadUrlResponse
from app.schemas.notification_schemas import (
    DownloadNoticeRequest,
    DownloadThanksRequest,
    NewReleaseRequest,
    NewReleaseResponse,
    NotificationAck,
)
from app.schemas.payment_schemas import PaymentSessionRequest, PaymentSessionResponse
from app.services.ad_service import cleanup_expired_ads
from app.services.download_service import authorize_download
from app.services.payment_service import create_payment_session
from app.utils.token import get_optional_user

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

router = APIRouter()


def _parse_body(model: Type[T], payload: Any) -> T:
    """Validate a JSON body after the caller is known, so anonymous calls always get 401."""
    try:
        return model.model_validate(payload or {})
    except ValidationError as e:
        logger.info("Rejected request body: %s invalid field(s)", e.error_count())
        raise ValidationFailed("Missing required fields")


# ---------------------------------------------------------
# PAYMENTS
# ---------------------------------------------------------

@router.post("/create-payment-session", response_model=PaymentSessionResponse)
def create_payment(
    payload: Any = Body(None),
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_optional_user)
):
    # auth is checked before the body so a missing token always yields 401
    if current_user is None:
        raise AuthenticationRequired()

    data = _parse_body(PaymentSessionRequest, payload)
    return create_payment_session(
        session,
        user=current_user,
        item_id=data.item_id,
        amount=data.amount,
        currency=data.currency,
    )


# ---------------------------------------------------------
# DOWNLOADS
# ---------------------------------------------------------

@router.post("/get-download-url", response_model=DownloadUrlResponse)
def get_download_url(
    background_tasks: BackgroundTasks,
    payload: Any = Body(None),
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_optional_user)
):
    if current_user is None:
        raise AuthenticationRequired()

    data = _parse_body(DownloadUrlRequest, payload)
    return authorize_download(
        session,
        user=current_user,
        item_id=data.item_id,
        background_tasks=background_tasks,
    )


# ---------------------------------------------------------
# NOTIFICATIONS
# ---------------------------------------------------------

@router.post("/notify-new-release", response_model=NewReleaseResponse)
def notify_new_release(
    data: NewReleaseRequest,
    session: Session = Depends(get_session),
    current_admin: Profile = Depends(require_admin)
):
    return broadcast_new_release(session, data.item_name)


@router.post(
    "/send-download-thanks",
    response_model=NotificationAck,
    dependencies=[Depends(require_service_key)],
)
def download_thanks(data: DownloadThanksRequest, session: Session = Depends(get_session)):
    sent = send_download_thanks(
        session,
        user_id=data.user_id,
        item_name=data.item_name,
        item_image_url=data.item_image_url,
        auth_provider=data.auth_provider,
    )
    # delivery problems are logged by the channel, the call itself succeeded
    return {"success": True, "message": "Thank you message sent" if sent else "Thank you message not delivered"}


@router.post(
    "/send-discord-notification",
    response_model=NotificationAck,
    dependencies=[Depends(require_service_key)],
)
def discord_download_notice(data: DownloadNoticeRequest, session: Session = Depends(get_session)):
    sent = notify_item_owner(session, item_id=data.item_id, user_id=data.user_id)
    if not sent:
        return {"success": False, "message": "No Discord webhook URL configured"}
    return {"success": True, "message": "Discord notification sent"}


# ---------------------------------------------------------
# MAINTENANCE
# ---------------------------------------------------------

@router.post(
    "/cleanup-expired-ads",
    response_model=CleanupResponse,
    dependencies=[Depends(require_service_key)],
)
def cleanup_ads(session: Session = Depends(get_session)):
    return cleanup_expired_ads(session)
