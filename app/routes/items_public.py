from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from typing import List, Optional

from app.database import get_session
from app.models.profile import Profile
from app.schemas.item_schemas import ItemAccessResponse, ItemPage, ItemResponse
from app.services.catalog_service import featured_items, get_item_or_404, list_items, serialize_item
from app.services.purchase_gate import check_purchase
from app.utils.token import get_current_user

router = APIRouter()


@router.get("", response_model=ItemPage, summary="Browse the catalog")
def browse_items(
    category: Optional[str] = Query(None, description="'all' or a category name"),
    q: Optional[str] = Query(None, description="Search term for name or description"),
    sort: str = Query("newest", description="newest | popular | rating | price-low | price-high"),
    page: int = 1,
    limit: int = Query(12, le=100),
    session: Session = Depends(get_session)
):
    return list_items(session, category=category, q=q, sort=sort, page=page, limit=limit)


@router.get("/featured", response_model=List[ItemResponse])
def get_featured_items(session: Session = Depends(get_session)):
    return featured_items(session)


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: int, session: Session = Depends(get_session)):
    return serialize_item(get_item_or_404(session, item_id))


@router.get("/{item_id}/access", response_model=ItemAccessResponse)
def get_item_access(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_current_user)
):
    item = get_item_or_404(session, item_id)
    gate = check_purchase(session, current_user, item)
    return {"item_id": item.id, "allowed": gate.allowed, "reason": gate.reason}
