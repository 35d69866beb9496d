from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from app.database import get_session
from app.dependencies.admin import require_admin
from app.schemas.ad_schemas import AdCreate, AdResponse
from app.services.ad_service import active_ads, create_ad, delete_ad, list_all_ads, toggle_ad

# public: GET /ads
router = APIRouter()

# admin: /admin/ads
admin_router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[AdResponse])
def list_active_ads(session: Session = Depends(get_session)):
    return active_ads(session)


@admin_router.get("", response_model=List[AdResponse])
def admin_list_ads(session: Session = Depends(get_session)):
    return list_all_ads(session)


@admin_router.post("", status_code=status.HTTP_201_CREATED, response_model=AdResponse)
def admin_create_ad(data: AdCreate, session: Session = Depends(get_session)):
    return create_ad(
        session,
        title=data.title,
        content=data.content,
        image_url=data.image_url,
        expires_at=data.expires_at,
    )


@admin_router.patch("/{ad_id}/toggle", response_model=AdResponse)
def admin_toggle_ad(ad_id: int, session: Session = Depends(get_session)):
    return toggle_ad(session, ad_id)


@admin_router.delete("/{ad_id}")
def admin_delete_ad(ad_id: int, session: Session = Depends(get_session)):
    delete_ad(session, ad_id)
    return {"message": "Ad deleted successfully"}
