# storefront/repos/banner_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.banner import BannerModel


class BannerRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_banners(self, active_only: bool = False) -> list[BannerModel]:
        query = select(BannerModel)
        if active_only:
            query = query.where(BannerModel.is_active.is_(True))
        query = query.order_by(BannerModel.sort_order.asc(), BannerModel.id.asc())
        return list(self.db.execute(query).scalars().all())

    def get_banner(self, banner_id: int) -> BannerModel | None:
        return self.db.get(BannerModel, banner_id)

    def add_banner(self, banner: BannerModel) -> BannerModel:
        self.db.add(banner)
        self.db.flush()
        return banner

    def delete_banner(self, banner: BannerModel):
        self.db.delete(banner)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
