# storefront/api/routers/products.py
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_optional_user, require_admin
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.schemas import (
    BulkProductsIn,
    BulkResultOut,
    ProductCreate,
    ProductListOut,
    ProductResponse,
    ProductUpdate,
    SuccessOut,
)
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductListOut)
def list_products(
    category: Optional[str] = Query(None, description="Category slug"),
    brand: Optional[str] = Query(None, description="Brand slug"),
    search: Optional[str] = Query(None),
    featured: Optional[bool] = Query(None),
    new_arrival: Optional[bool] = Query(None, alias="new"),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    sort: str = Query("created_at"),
    order: str = Query("desc"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    with handle_errors("Get products"):
        return ProductService(db).list_products(
            category=category,
            brand=brand,
            search=search,
            featured=featured,
            new_arrival=new_arrival,
            min_price=min_price,
            max_price=max_price,
            sort=sort,
            order=order,
            limit=limit,
            offset=offset,
        )


@router.get("/{id_or_slug}", response_model=ProductResponse)
def get_product(id_or_slug: str, user=Depends(get_optional_user), db: Session = Depends(get_db)):
    with handle_errors("Get product"):
        return {"product": ProductService(db).get_product(id_or_slug, viewer_id=user.id if user else None)}


@router.post("", response_model=ProductResponse, status_code=201)
def create_product(payload: ProductCreate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Create product"):
        return {"product": ProductService(db).create_product(payload)}


@router.post("/bulk", response_model=BulkResultOut)
def bulk_import(payload: BulkProductsIn, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Bulk import products"):
        return ProductService(db).bulk_import(payload.products)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    with handle_errors("Update product"):
        return {"product": ProductService(db).update_product(product_id, payload)}


@router.delete("/{product_id}", response_model=SuccessOut)
def delete_product(product_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Delete product"):
        ProductService(db).delete_product(product_id)
        return {"success": True}
