# storefront/api/routers/categories.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.schemas import CategoryIn, CategoryListOut, CategoryOut
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=CategoryListOut)
def list_categories(db: Session = Depends(get_db)):
    with handle_errors("List categories"):
        return {"categories": ProductService(db).list_categories()}


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(payload: CategoryIn, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Create category"):
        return ProductService(db).create_category(payload)
