#import all models so SQLAlchemy registers them in Base.metadata

from storefront.data.models.user import UserModel
from storefront.data.models.category import CategoryModel
from storefront.data.models.brand import BrandModel
from storefront.data.models.product import ProductModel
from storefront.data.models.product_variant import ProductVariantModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.wishlist_item import WishlistItemModel
from storefront.data.models.discount import DiscountModel
from storefront.data.models.order import OrderModel, ORDER_STATUSES
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.analytics_event import AnalyticsEventModel
from storefront.data.models.bundle import BundleModel
from storefront.data.models.bundle_item import BundleItemModel
from storefront.data.models.banner import BannerModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "BrandModel",
    "ProductModel",
    "ProductVariantModel",
    "CartItemModel",
    "WishlistItemModel",
    "DiscountModel",
    "OrderModel",
    "ORDER_STATUSES",
    "OrderItemModel",
    "AnalyticsEventModel",
    "BundleModel",
    "BundleItemModel",
    "BannerModel",
]
