from fastapi import APIRouter, Depends
from sqlmodel import Session
from app.database import get_session
from app.models.profile import Profile
from app.schemas.review_schemas import FavoriteState
from app.services.engagement_service import favorite_status, toggle_favorite
from app.utils.token import get_current_user

router = APIRouter()


@router.post("/{item_id}/toggle", response_model=FavoriteState)
def toggle(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_current_user)
):
    return toggle_favorite(session, user=current_user, item_id=item_id)


@router.get("/status/{item_id}", response_model=FavoriteState)
def status(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_current_user)
):
    return favorite_status(session, user=current_user, item_id=item_id)
