# storefront/repos/brand_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.brand import BrandModel


class BrandRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_brands(self) -> list[BrandModel]:
        query = select(BrandModel).order_by(BrandModel.is_featured.desc(), BrandModel.name.asc(), BrandModel.id.asc())
        return list(self.db.execute(query).scalars().all())

    def get_brand(self, brand_id: int) -> BrandModel | None:
        return self.db.get(BrandModel, brand_id)

    def add_brand(self, brand: BrandModel) -> BrandModel:
        self.db.add(brand)
        self.db.flush()
        return brand

    def delete_brand(self, brand: BrandModel):
        self.db.delete(brand)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
