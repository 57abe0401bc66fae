# storefront/services/brand_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.brand import BrandModel
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.schemas import BrandIn, BrandUpdate
from storefront.repos.brand_repo import BrandRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class BrandService:
    def __init__(self, db: Session):
        self.repo = BrandRepo(db)

    def list_brands(self) -> list[BrandModel]:
        return self.repo.list_brands()

    def get_brand(self, brand_id: int) -> BrandModel:
        brand = self.repo.get_brand(brand_id)
        if not brand:
            raise NotFoundError("Brand not found")
        return brand

    def create_brand(self, payload: BrandIn) -> BrandModel:
        brand = BrandModel(**payload.model_dump())
        try:
            self.repo.add_brand(brand)
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Brand slug already exists")

        logger.info(f"Created brand {brand.id} ({brand.slug})")
        return brand

    def update_brand(self, brand_id: int, payload: BrandUpdate) -> BrandModel:
        brand = self.get_brand(brand_id)
        changes = payload.changes()
        for field, value in changes.items():
            setattr(brand, field, value)

        try:
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Brand slug already exists")

        logger.info(f"Updated brand {brand_id}: {sorted(changes)}")
        return brand

    def delete_brand(self, brand_id: int):
        # products keep existing, their brand_id goes to NULL
        brand = self.get_brand(brand_id)
        self.repo.delete_brand(brand)
        self.repo.commit()
        logger.info(f"Deleted brand {brand_id}")
