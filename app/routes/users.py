from datetime import datetime
from fastapi import APIRouter, Depends
from sqlmodel import Session, select
from app.database import get_session
from app.exceptions import ValidationFailed
from app.models.download import Download
from app.models.item import Item
from app.models.profile import Profile
from app.schemas.download_schemas import DownloadHistoryEntry
from app.schemas.review_schemas import FavoriteEntry
from app.schemas.user_schemas import ProfileResponse, ProfileUpdate, WebhookSettings
from app.services.catalog_service import summarize_item
from app.services.discord_service import is_valid_webhook_url
from app.services.engagement_service import list_favorites
from app.utils.token import get_current_user
from typing import List

router = APIRouter()

RECENT_DOWNLOADS_LIMIT = 10


# -------- USER PROFILE --------

@router.get("/me", response_model=ProfileResponse)
def get_my_profile(current_user: Profile = Depends(get_current_user)):
    return current_user


@router.put("/me", response_model=ProfileResponse)
def update_my_profile(
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_current_user)
):
    username = payload.username.strip()
    if not username:
        raise ValidationFailed("Username cannot be empty")

    current_user.username = username
    current_user.updated_at = datetime.utcnow()

    session.add(current_user)
    session.commit()
    session.refresh(current_user)
    return current_user


# -------- WEBHOOK SETTINGS --------

@router.get("/me/webhook", response_model=WebhookSettings)
def get_webhook_settings(current_user: Profile = Depends(get_current_user)):
    return WebhookSettings(discord_webhook_url=current_user.discord_webhook_url)


@router.put("/me/webhook", response_model=WebhookSettings)
def save_webhook_settings(
    payload: WebhookSettings,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_current_user)
):
    url = (payload.discord_webhook_url or "").strip() or None

    if url and not is_valid_webhook_url(url):
        raise ValidationFailed("Webhook URL must be a Discord webhook URL")

    current_user.discord_webhook_url = url
    current_user.updated_at = datetime.utcnow()

    session.add(current_user)
    session.commit()

    return WebhookSettings(discord_webhook_url=url)


# -------- LIBRARY --------

@router.get("/me/downloads", response_model=List[DownloadHistoryEntry])
def my_downloads(
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_current_user)
):
    rows = session.exec(
        select(Download, Item)
        .join(Item, Item.id == Download.item_id)
        .where(Download.user_id == current_user.id)
        .order_by(Download.created_at.desc(), Download.id.desc())
        .limit(RECENT_DOWNLOADS_LIMIT)
    ).all()

    return [
        {"id": d.id, "created_at": d.created_at, "item": summarize_item(item)}
        for d, item in rows
    ]


@router.get("/me/favorites", response_model=List[FavoriteEntry])
def my_favorites(
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_current_user)
):
    return list_favorites(session, user=current_user)
