# storefront/api/routers/orders.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, require_admin
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.schemas import OrderCreate, OrderListOut, OrderResponse, OrderStatus, OrderStatusUpdate
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("", response_model=OrderResponse, status_code=201)
def create_order(payload: OrderCreate, user=Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Checkout: turns the current cart into an order.
    The cart is emptied only when the order is committed.
    """
    with handle_errors("Create order"):
        order = get_service(db).place_order(user.id, payload.shipping_address, payload.payment_method)
        return {"order": order}


@router.get("", response_model=OrderListOut)
def list_orders(
    status: Optional[OrderStatus] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Own orders; admins see every order."""
    with handle_errors("Get orders"):
        return get_service(db).list_orders(user, status=status, limit=limit, offset=offset)


@router.get("/{order_ref}", response_model=OrderResponse)
def get_order(order_ref: str, user=Depends(get_current_user), db: Session = Depends(get_db)):
    """Lookup by numeric id or order number."""
    with handle_errors("Get order"):
        return {"order": get_service(db).get_order(user, order_ref)}


@router.put("/{order_id}", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    with handle_errors("Update order"):
        return {"order": get_service(db).update_status(order_id, payload.status)}
