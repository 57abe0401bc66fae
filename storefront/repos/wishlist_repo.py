# storefront/repos/wishlist_repo.py
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from storefront.data.database import dialect_insert
from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.data.models.wishlist_item import WishlistItemModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_items(self, user_id: int, limit: int, offset: int):
        rows = self.db.execute(
            select(WishlistItemModel, ProductModel, CategoryModel)
            .join(ProductModel, WishlistItemModel.product_id == ProductModel.id)
            .outerjoin(CategoryModel, ProductModel.category_id == CategoryModel.id)
            .where(WishlistItemModel.user_id == user_id)
            .order_by(WishlistItemModel.created_at.desc(), WishlistItemModel.id.desc())
            .limit(limit)
            .offset(offset)
        ).all()
        total = self.db.execute(
            select(func.count(WishlistItemModel.id)).where(WishlistItemModel.user_id == user_id)
        ).scalar_one()
        return [tuple(row) for row in rows], total

    def add_item(self, user_id: int, product_id: int):
        stmt = (
            dialect_insert(self.db, WishlistItemModel)
            .values(user_id=user_id, product_id=product_id)
            .on_conflict_do_nothing(index_elements=["user_id", "product_id"])
        )
        self.db.execute(stmt)

    def delete_by_product(self, user_id: int, product_id: int) -> int:
        result = self.db.execute(
            delete(WishlistItemModel)
            .where(WishlistItemModel.user_id == user_id, WishlistItemModel.product_id == product_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_by_id(self, user_id: int, item_id: int) -> int:
        result = self.db.execute(
            delete(WishlistItemModel)
            .where(WishlistItemModel.user_id == user_id, WishlistItemModel.id == item_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
