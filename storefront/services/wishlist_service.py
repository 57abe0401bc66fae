# storefront/services/wishlist_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.domain.errors import NotFoundError
from storefront.repos.product_repo import ProductRepo
from storefront.repos.wishlist_repo import WishlistRepo
from storefront.services.analytics_service import AnalyticsService
from storefront.services.serializers import pagination
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class WishlistService:
    def __init__(self, db: Session):
        self.repo = WishlistRepo(db)
        self.products = ProductRepo(db)
        self.analytics = AnalyticsService(db)

    def list_items(self, user_id: int, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
        rows, total = self.repo.list_items(user_id, limit, offset)
        items = [
            {
                "id": item.id,
                "product_id": product.id,
                "created_at": item.created_at,
                "name": product.name,
                "slug": product.slug,
                "image_url": product.image_url,
                "current_price": product.current_price,
                "original_price": product.original_price,
                "stock_quantity": product.stock_quantity,
                "category_name": category.name if category else None,
            }
            for item, product, category in rows
        ]
        return {"items": items, "pagination": pagination(total, limit, offset, len(items))}

    def add_item(self, user_id: int, product_id: int):
        if not self.products.get_product(product_id):
            raise NotFoundError("Product not found")

        #ON CONFLICT DO NOTHING, adding twice is harmless
        self.repo.add_item(user_id, product_id)
        self.repo.commit()
        logger.info(f"Product {product_id} on wishlist of user {user_id}")
        self.analytics.track("add_to_wishlist", user_id=user_id, product_id=product_id)

    def remove_product(self, user_id: int, product_id: int):
        self.repo.delete_by_product(user_id, product_id)
        self.repo.commit()

    def remove_item(self, user_id: int, item_id: int):
        removed = self.repo.delete_by_id(user_id, item_id)
        self.repo.commit()
        if not removed:
            raise NotFoundError("Wishlist item not found")
