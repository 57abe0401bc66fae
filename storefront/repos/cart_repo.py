# storefront/repos/cart_repo.py
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from storefront.data.database import dialect_insert
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.product import ProductModel
from storefront.data.models.product_variant import ProductVariantModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_lines(
        self, user_id: int
    ) -> list[tuple[CartItemModel, ProductModel, ProductVariantModel | None]]:
        """Cart rows joined with the live product and (optional) variant, newest first."""
        rows = self.db.execute(
            select(CartItemModel, ProductModel, ProductVariantModel)
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .outerjoin(ProductVariantModel, CartItemModel.variant_id == ProductVariantModel.id)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.added_at.desc(), CartItemModel.id.desc())
        ).all()
        return [tuple(row) for row in rows]

    def get_cart_item(self, user_id: int, item_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
        ).scalar_one_or_none()

    def upsert_cart_item(self, user_id: int, product_id: int, variant_id: int | None, quantity: int):
        """
        Single INSERT .. ON CONFLICT DO UPDATE: a second add of the same
        product/variant bumps the quantity instead of creating a row.
        """
        stmt = dialect_insert(self.db, CartItemModel).values(
            user_id=user_id,
            product_id=product_id,
            variant_id=variant_id,
            quantity=quantity,
        )
        if variant_id is None:
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "product_id"],
                index_where=CartItemModel.variant_id.is_(None),
                set_={"quantity": CartItemModel.quantity + stmt.excluded.quantity},
            )
        else:
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "product_id", "variant_id"],
                index_where=CartItemModel.variant_id.is_not(None),
                set_={"quantity": CartItemModel.quantity + stmt.excluded.quantity},
            )
        self.db.execute(stmt)

    def delete_cart_item(self, item: CartItemModel):
        self.db.delete(item)

    def clear_cart(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
