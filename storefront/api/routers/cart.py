# storefront/api/routers/cart.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.schemas import (
    CartAddIn,
    CartItemResponse,
    CartItemUpdateIn,
    CartOut,
    CartSetQuantityIn,
    SuccessOut,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(user=Depends(get_current_user), db: Session = Depends(get_db)):
    with handle_errors("Get cart"):
        return get_service(db).get_cart(user.id)


@router.post("", response_model=CartOut)
def add_item(payload: CartAddIn, user=Depends(get_current_user), db: Session = Depends(get_db)):
    with handle_errors("Add to cart"):
        return get_service(db).add_product(
            user_id=user.id,
            product_id=payload.product_id,
            variant_id=payload.variant_id,
            quantity=payload.quantity,
        )


@router.put("", response_model=CartOut)
def set_quantity(payload: CartSetQuantityIn, user=Depends(get_current_user), db: Session = Depends(get_db)):
    """quantity <= 0 removes the item."""
    with handle_errors("Update cart"):
        return get_service(db).set_quantity(user.id, payload.item_id, payload.quantity)


@router.delete("", response_model=CartOut)
def delete_items(
    id: Optional[int] = Query(None, gt=0, description="Cart item id; omit to clear the cart"),
    user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    with handle_errors("Delete cart"):
        svc = get_service(db)
        if id is not None:
            return svc.remove_item(user.id, id)
        return svc.clear_cart(user.id)


@router.put("/{item_id}", response_model=CartItemResponse)
def update_item(
    item_id: int,
    payload: CartItemUpdateIn,
    user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    with handle_errors("Update cart item"):
        return {"item": get_service(db).update_item(user.id, item_id, payload.quantity)}


@router.delete("/{item_id}", response_model=SuccessOut)
def remove_item(item_id: int, user=Depends(get_current_user), db: Session = Depends(get_db)):
    with handle_errors("Delete cart item"):
        get_service(db).remove_item(user.id, item_id)
        return {"success": True}
