# storefront/repos/bundle_repo.py
from sqlalchemy import or_, select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.bundle import BundleModel
from storefront.data.models.bundle_item import BundleItemModel


def _with_items():
    return selectinload(BundleModel.items).selectinload(BundleItemModel.product)


class BundleRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_bundles(self, active_only: bool = True) -> list[BundleModel]:
        query = select(BundleModel).options(_with_items())
        if active_only:
            query = query.where(BundleModel.is_active.is_(True))
        query = query.order_by(BundleModel.created_at.desc(), BundleModel.id.desc())
        return list(self.db.execute(query).scalars().all())

    def get_bundle(self, bundle_id: int) -> BundleModel | None:
        return self.db.execute(
            select(BundleModel).where(BundleModel.id == bundle_id).options(_with_items())
        ).scalar_one_or_none()

    def find_bundle(self, id_or_slug: str) -> BundleModel | None:
        """Lookup by numeric id or by slug."""
        query = select(BundleModel).options(_with_items())
        if id_or_slug.isdigit():
            query = query.where(or_(BundleModel.id == int(id_or_slug), BundleModel.slug == id_or_slug))
        else:
            query = query.where(BundleModel.slug == id_or_slug)
        return self.db.execute(query).scalars().first()

    def add_bundle(self, bundle: BundleModel) -> BundleModel:
        self.db.add(bundle)
        self.db.flush()
        return bundle

    def delete_bundle(self, bundle: BundleModel):
        self.db.delete(bundle)

    def get_item(self, bundle_id: int, item_id: int) -> BundleItemModel | None:
        return self.db.execute(
            select(BundleItemModel).where(BundleItemModel.id == item_id, BundleItemModel.bundle_id == bundle_id)
        ).scalar_one_or_none()

    def find_item_for_product(self, bundle_id: int, product_id: int) -> BundleItemModel | None:
        return self.db.execute(
            select(BundleItemModel).where(
                BundleItemModel.bundle_id == bundle_id, BundleItemModel.product_id == product_id
            )
        ).scalar_one_or_none()

    def delete_item(self, item: BundleItemModel):
        self.db.delete(item)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
