from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.pricing import cart_totals, unit_price
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.analytics_service import AnalyticsService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart use cases.
    query (get_cart, priced_lines) only reads and prices against the live catalog,
    commands (add, set, update, remove, clear) change cart rows.
    """

    def __init__(self, db: Session, analytics: AnalyticsService | None = None):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.analytics = analytics or AnalyticsService(db)

    #query
    def priced_lines(self, user_id: int) -> List[Dict[str, Any]]:
        lines = []
        for item, product, variant in self.repo.get_cart_lines(user_id):
            modifier = variant.price_modifier if variant is not None else None
            price = unit_price(product.current_price, modifier)
            lines.append(
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "variant_id": item.variant_id,
                    "quantity": item.quantity,
                    "added_at": item.added_at,
                    "name": product.name,
                    "slug": product.slug,
                    "image_url": product.image_url,
                    "current_price": product.current_price,
                    "original_price": product.original_price,
                    "stock_quantity": product.stock_quantity,
                    "variant_name": variant.variant_name if variant is not None else None,
                    "variant_value": variant.variant_value if variant is not None else None,
                    "price_modifier": modifier,
                    "unit_price": price,
                    "line_total": price * item.quantity,
                }
            )
        return lines

    def get_cart(self, user_id: int) -> Dict[str, Any]:
        lines = self.priced_lines(user_id)
        subtotal, item_count = cart_totals((l["unit_price"], l["quantity"]) for l in lines)
        return {"items": lines, "subtotal": subtotal, "item_count": item_count}

    #commands
    def add_product(
        self,
        user_id: int,
        product_id: int,
        variant_id: int | None = None,
        quantity: int = 1,
    ) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        if variant_id is not None:
            variant = self.products.get_variant(variant_id)
            if not variant or variant.product_id != product_id:
                raise ValidationError("Variant does not belong to product")

        try:
            self.repo.upsert_cart_item(user_id, product_id, variant_id, quantity)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Added product {product_id} (variant {variant_id}) x{quantity} to cart of user {user_id}")
        self.analytics.track(
            "add_to_cart",
            user_id=user_id,
            product_id=product_id,
            data={"quantity": quantity, "variant_id": variant_id},
        )
        return self.get_cart(user_id)

    def set_quantity(self, user_id: int, item_id: int, quantity: int) -> Dict[str, Any]:
        """quantity <= 0 removes the line."""
        item = self._own_item(user_id, item_id)

        if quantity <= 0:
            self.repo.delete_cart_item(item)
            logger.info(f"Removed cart item {item_id} of user {user_id}")
        else:
            item.quantity = quantity
            logger.info(f"Cart item {item_id} of user {user_id} set to {quantity}")
        self.repo.commit()
        return self.get_cart(user_id)

    def update_item(self, user_id: int, item_id: int, quantity: int) -> CartItemModel:
        if quantity < 1:
            raise ValidationError("Invalid quantity")

        item = self._own_item(user_id, item_id)
        item.quantity = quantity
        self.repo.commit()
        self.repo.db.refresh(item)
        return item

    def remove_item(self, user_id: int, item_id: int) -> Dict[str, Any]:
        item = self._own_item(user_id, item_id)
        self.repo.delete_cart_item(item)
        self.repo.commit()
        logger.info(f"Removed cart item {item_id} of user {user_id}")
        return self.get_cart(user_id)

    def clear_cart(self, user_id: int) -> Dict[str, Any]:
        removed = self.repo.clear_cart(user_id)
        self.repo.commit()
        logger.info(f"Cleared {removed} cart items of user {user_id}")
        return {"items": [], "subtotal": Decimal("0.00"), "item_count": 0}

    def _own_item(self, user_id: int, item_id: int) -> CartItemModel:
        #other users' rows look exactly like missing ones
        item = self.repo.get_cart_item(user_id, item_id)
        if not item:
            raise NotFoundError("Cart item not found")
        return item
