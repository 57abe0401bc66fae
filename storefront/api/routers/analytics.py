# storefront/api/routers/analytics.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.schemas import AnalyticsOut
from storefront.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsOut)
def overview(admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Get analytics"):
        return AnalyticsService(db).overview()
