# storefront/api/routers/discounts.py
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.schemas import (
    ActiveDiscountOut,
    DiscountCreate,
    DiscountListOut,
    DiscountResponse,
    DiscountUpdate,
    SuccessOut,
)
from storefront.services.discount_service import DiscountService

router = APIRouter(prefix="/api/discounts", tags=["discounts"])


@router.get("/active", response_model=ActiveDiscountOut)
def active_discount(
    subtotal: Optional[Decimal] = Query(None, ge=0, description="Preview the discount checkout would pick"),
    db: Session = Depends(get_db),
):
    with handle_errors("Get active discount"):
        return DiscountService(db).active_discount(subtotal)


@router.get("", response_model=DiscountListOut)
def list_discounts(admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Get discounts"):
        return {"discounts": DiscountService(db).list_discounts()}


@router.post("", response_model=DiscountResponse, status_code=201)
def create_discount(payload: DiscountCreate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Create discount"):
        return {"discount": DiscountService(db).create_discount(payload)}


@router.put("/{discount_id}", response_model=DiscountResponse)
def update_discount(
    discount_id: int,
    payload: DiscountUpdate,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    with handle_errors("Update discount"):
        return {"discount": DiscountService(db).update_discount(discount_id, payload)}


@router.delete("/{discount_id}", response_model=SuccessOut)
def delete_discount(discount_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Delete discount"):
        DiscountService(db).delete_discount(discount_id)
        return {"success": True}
