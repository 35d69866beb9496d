from fastapi import APIRouter
from typing import List

from app.schemas.category_schemas import CategoryResponse
from app.services.category_service import list_categories

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
def get_categories():
    return list_categories()
