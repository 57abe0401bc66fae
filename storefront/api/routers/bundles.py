# storefront/api/routers/bundles.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.schemas import (
    BundleCreate,
    BundleItemIn,
    BundleItemResponse,
    BundleListOut,
    BundleResponse,
    BundleUpdate,
    SuccessOut,
)
from storefront.services.bundle_service import BundleService

router = APIRouter(prefix="/api/bundles", tags=["bundles"])


@router.get("", response_model=BundleListOut)
def list_bundles(db: Session = Depends(get_db)):
    with handle_errors("Get bundles"):
        return {"bundles": BundleService(db).list_bundles()}


@router.get("/{id_or_slug}", response_model=BundleResponse)
def get_bundle(id_or_slug: str, db: Session = Depends(get_db)):
    with handle_errors("Get bundle"):
        return {"bundle": BundleService(db).get_bundle(id_or_slug)}


@router.post("", response_model=BundleResponse, status_code=201)
def create_bundle(payload: BundleCreate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Create bundle"):
        return {"bundle": BundleService(db).create_bundle(payload)}


@router.put("/{bundle_id}", response_model=BundleResponse)
def update_bundle(bundle_id: int, payload: BundleUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Update bundle"):
        return {"bundle": BundleService(db).update_bundle(bundle_id, payload)}


@router.delete("/{bundle_id}", response_model=SuccessOut)
def delete_bundle(bundle_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Delete bundle"):
        BundleService(db).delete_bundle(bundle_id)
        return {"success": True}


@router.post("/{bundle_id}/items", response_model=BundleItemResponse)
def add_bundle_item(
    bundle_id: int,
    payload: BundleItemIn,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    with handle_errors("Add bundle item"):
        return {"item": BundleService(db).add_item(bundle_id, payload)}


@router.delete("/{bundle_id}/items/{item_id}", response_model=SuccessOut)
def remove_bundle_item(bundle_id: int, item_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Remove bundle item"):
        BundleService(db).remove_item(bundle_id, item_id)
        return {"success": True}
