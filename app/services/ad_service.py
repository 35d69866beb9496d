import logging
from datetime import datetime, timedelta

from sqlmodel import Session, select

from app.config import settings
from app.exceptions import NotFound
from app.models.ad import Ad

logger = logging.getLogger(__name__)


def active_ads(session: Session):
    now = datetime.utcnow()
    return session.exec(
        select(Ad)
        .where(Ad.is_active == True)  # noqa: E712
        .where(Ad.expires_at > now)
        .order_by(Ad.created_at.desc(), Ad.id.desc())
    ).all()


def list_all_ads(session: Session):
    return session.exec(select(Ad).order_by(Ad.created_at.desc(), Ad.id.desc())).all()


def create_ad(session: Session, *, title: str, content: str, image_url=None, expires_at=None) -> Ad:
    ad = Ad(
        title=title,
        content=content,
        image_url=image_url,
        expires_at=expires_at or datetime.utcnow() + timedelta(days=settings.AD_DEFAULT_TTL_DAYS),
    )
    session.add(ad)
    session.commit()
    session.refresh(ad)
    return ad


def toggle_ad(session: Session, ad_id: int) -> Ad:
    ad = session.get(Ad, ad_id)
    if not ad:
        raise NotFound("Ad not found")

    ad.is_active = not ad.is_active
    session.add(ad)
    session.commit()
    session.refresh(ad)
    return ad


def delete_ad(session: Session, ad_id: int) -> None:
    ad = session.get(Ad, ad_id)
    if not ad:
        raise NotFound("Ad not found")
    session.delete(ad)
    session.commit()


def cleanup_expired_ads(session: Session) -> dict:
    logger.info("Starting cleanup of expired ads...")
    now = datetime.utcnow()

    expired = session.exec(select(Ad).where(Ad.expires_at < now)).all()
    count = len(expired)
    logger.info(f"Found {count} expired ads")

    if count:
        for ad in expired:
            session.delete(ad)
        session.commit()
        logger.info(f"Successfully removed {count} expired ads")

    return {"success": True, "message": f"Removed {count} expired ads", "count": count}
