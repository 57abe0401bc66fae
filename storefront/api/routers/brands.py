# storefront/api/routers/brands.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.schemas import BrandIn, BrandListOut, BrandResponse, BrandUpdate, SuccessOut
from storefront.services.brand_service import BrandService

router = APIRouter(prefix="/api/brands", tags=["brands"])


@router.get("", response_model=BrandListOut)
def list_brands(db: Session = Depends(get_db)):
    with handle_errors("Get brands"):
        return {"brands": BrandService(db).list_brands()}


@router.get("/{brand_id}", response_model=BrandResponse)
def get_brand(brand_id: int, db: Session = Depends(get_db)):
    with handle_errors("Get brand"):
        return {"brand": BrandService(db).get_brand(brand_id)}


@router.post("", response_model=BrandResponse, status_code=201)
def create_brand(payload: BrandIn, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Create brand"):
        return {"brand": BrandService(db).create_brand(payload)}


@router.put("/{brand_id}", response_model=BrandResponse)
def update_brand(brand_id: int, payload: BrandUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Update brand"):
        return {"brand": BrandService(db).update_brand(brand_id, payload)}


@router.delete("/{brand_id}", response_model=SuccessOut)
def delete_brand(brand_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Delete brand"):
        BrandService(db).delete_brand(brand_id)
        return {"success": True}
