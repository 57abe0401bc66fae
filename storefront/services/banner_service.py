# storefront/services/banner_service.py
from sqlalchemy.orm import Session

from storefront.data.models.banner import BannerModel
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import BannerIn, BannerUpdate
from storefront.repos.banner_repo import BannerRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class BannerService:
    def __init__(self, db: Session):
        self.repo = BannerRepo(db)

    def list_banners(self, active_only: bool = False) -> list[BannerModel]:
        return self.repo.list_banners(active_only)

    def get_banner(self, banner_id: int) -> BannerModel:
        banner = self.repo.get_banner(banner_id)
        if not banner:
            raise NotFoundError("Banner not found")
        return banner

    def create_banner(self, payload: BannerIn) -> BannerModel:
        banner = self.repo.add_banner(BannerModel(**payload.model_dump()))
        self.repo.commit()
        logger.info(f"Created banner {banner.id} at position {banner.sort_order}")
        return banner

    def update_banner(self, banner_id: int, payload: BannerUpdate) -> BannerModel:
        banner = self.get_banner(banner_id)
        for field, value in payload.changes().items():
            setattr(banner, field, value)
        self.repo.commit()
        return banner

    def delete_banner(self, banner_id: int):
        banner = self.get_banner(banner_id)
        self.repo.delete_banner(banner)
        self.repo.commit()
        logger.info(f"Deleted banner {banner_id}")
