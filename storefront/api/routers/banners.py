# storefront/api/routers/banners.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.schemas import BannerIn, BannerListOut, BannerResponse, BannerUpdate, SuccessOut
from storefront.services.banner_service import BannerService

router = APIRouter(prefix="/api/banners", tags=["banners"])


@router.get("", response_model=BannerListOut)
def list_banners(
    active: bool = Query(False, description="Only banners that are switched on"),
    db: Session = Depends(get_db),
):
    with handle_errors("Get banners"):
        return {"banners": BannerService(db).list_banners(active_only=active)}


@router.get("/{banner_id}", response_model=BannerResponse)
def get_banner(banner_id: int, db: Session = Depends(get_db)):
    with handle_errors("Get banner"):
        return {"banner": BannerService(db).get_banner(banner_id)}


@router.post("", response_model=BannerResponse, status_code=201)
def create_banner(payload: BannerIn, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Create banner"):
        return {"banner": BannerService(db).create_banner(payload)}


@router.put("/{banner_id}", response_model=BannerResponse)
def update_banner(banner_id: int, payload: BannerUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Update banner"):
        return {"banner": BannerService(db).update_banner(banner_id, payload)}


@router.delete("/{banner_id}", response_model=SuccessOut)
def delete_banner(banner_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Delete banner"):
        BannerService(db).delete_banner(banner_id)
        return {"success": True}
