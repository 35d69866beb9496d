from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, UploadFile, status
from sqlmodel import Session, select, func
from typing import List

from app.constants.payment_status import PaymentStatus
from app.database import get_session
from app.dependencies.admin import require_admin
from app.models.ad import Ad
from app.models.item import Item
from app.models.payment import Payment
from app.models.profile import Profile
from app.schemas.item_schemas import ItemPublishResponse, ItemResponse
from app.schemas.ad_schemas import AdResponse
from app.services.ad_service import list_all_ads
from app.services.catalog_service import serialize_item
from app.services.category_service import list_categories
from app.services.item_service import delete_item, list_all_items, publish_item

router = APIRouter()


@router.post("/items", status_code=status.HTTP_201_CREATED, response_model=ItemPublishResponse)
def create_item(
    background_tasks: BackgroundTasks,
    name: str = Form(""),
    description: str = Form(""),
    price: float = Form(0.0),
    category_id: int = Form(0),
    image: UploadFile = File(None),
    file: UploadFile = File(None),

    session: Session = Depends(get_session),
    current_admin: Profile = Depends(require_admin),
):
    item = publish_item(
        session,
        admin=current_admin,
        name=name.strip(),
        description=description.strip(),
        price=price,
        category_id=category_id,
        file=file,
        image=image,
        background_tasks=background_tasks,
    )
    return {"message": "Item published successfully", "item": serialize_item(item)}


@router.get("/items", response_model=List[ItemResponse])
def admin_list_items(
    session: Session = Depends(get_session),
    current_admin: Profile = Depends(require_admin),
):
    return [serialize_item(i) for i in list_all_items(session)]


@router.delete("/items/{item_id}")
def remove_item(
    item_id: int,
    session: Session = Depends(get_session),
    current_admin: Profile = Depends(require_admin),
):
    delete_item(session, item_id)
    return {"message": "Item deleted successfully"}


# -------- ADMIN OVERVIEW --------

@router.get("/overview")
def admin_overview(
    session: Session = Depends(get_session),
    current_admin: Profile = Depends(require_admin)
):
    total_items = session.exec(select(func.count(Item.id))).one()
    total_users = session.exec(select(func.count(Profile.id))).one()
    total_downloads = session.exec(select(func.coalesce(func.sum(Item.downloads), 0))).one()

    total_revenue = session.exec(
        select(func.coalesce(func.sum(Payment.amount), 0))
        .where(Payment.status == PaymentStatus.completed)
    ).one()

    pending_payments = session.exec(
        select(func.count(Payment.id)).where(Payment.status == PaymentStatus.pending)
    ).one()

    active_ads = session.exec(
        select(func.count(Ad.id)).where(Ad.is_active == True)  # noqa: E712
    ).one()

    return {
        "categories": list_categories(),
        "items": [serialize_item(i) for i in list_all_items(session)],
        "ads": [AdResponse.model_validate(a).model_dump() for a in list_all_ads(session)],
        "cards": {
            "total_items": total_items,
            "total_users": total_users,
            "total_downloads": int(total_downloads),
            "total_revenue": float(total_revenue),
            "pending_payments": pending_payments,
            "active_ads": active_ads,
        },
        "admin_info": {
            "id": current_admin.id,
            "username": current_admin.username,
            "email": current_admin.email
        }
    }
