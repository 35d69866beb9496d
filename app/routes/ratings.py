from typing import Optional
from fastapi import APIRouter, Depends
from sqlmodel import Session
from app.database import get_session
from app.models.profile import Profile
from app.schemas.review_schemas import RatingSubmit, RatingSummary
from app.services.engagement_service import rating_summary, submit_rating
from app.utils.token import get_current_user, get_optional_user


router = APIRouter()


# ---------------------------------------------------------
# SUBMIT OR REPLACE MY RATING
# ---------------------------------------------------------

@router.put("/{item_id}", response_model=RatingSummary)
def rate_item(
    item_id: int,
    data: RatingSubmit,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_current_user)
):
    return submit_rating(session, user=current_user, item_id=item_id, rating=data.rating)


# ---------------------------------------------------------
# RATING STATS FOR AN ITEM
# ---------------------------------------------------------

@router.get("/{item_id}", response_model=RatingSummary)
def get_rating(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: Optional[Profile] = Depends(get_optional_user)
):
    return rating_summary(session, item_id=item_id, user=current_user)
