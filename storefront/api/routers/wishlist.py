# storefront/api/routers/wishlist.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.schemas import SuccessOut, WishlistAddIn, WishlistOut
from storefront.services.wishlist_service import WishlistService

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@router.get("", response_model=WishlistOut)
def list_wishlist(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    with handle_errors("Get wishlist"):
        return WishlistService(db).list_items(user.id, limit, offset)


@router.post("", response_model=SuccessOut)
def add_to_wishlist(payload: WishlistAddIn, user=Depends(get_current_user), db: Session = Depends(get_db)):
    with handle_errors("Add to wishlist"):
        WishlistService(db).add_item(user.id, payload.product_id)
        return {"success": True}


@router.delete("", response_model=SuccessOut)
def remove_from_wishlist(
    product_id: int = Query(..., gt=0),
    user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    with handle_errors("Remove from wishlist"):
        WishlistService(db).remove_product(user.id, product_id)
        return {"success": True}


@router.delete("/{item_id}", response_model=SuccessOut)
def delete_wishlist_item(item_id: int, user=Depends(get_current_user), db: Session = Depends(get_db)):
    with handle_errors("Delete wishlist item"):
        WishlistService(db).remove_item(user.id, item_id)
        return {"success": True}
