# storefront/services/order_service.py
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.data.models.order import ORDER_STATUSES, OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.user import UserModel
from storefront.domain.errors import EmptyCartError, InsufficientStockError, NotFoundError, ValidationError
from storefront.domain.pricing import cart_totals, generate_order_number
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.analytics_service import AnalyticsService
from storefront.services.cart_service import CartService
from storefront.services.discount_service import DiscountService
from storefront.services.notification_service import NotificationService
from storefront.services.serializers import pagination, serialize_order
from storefront.utils.logging import get_logger
from storefront.utils.settings import DEFAULT_PAYMENT_METHOD

logger = get_logger(__name__)


class OrderService:
    """
    Order use cases: checkout (cart -> order), reads, and admin status changes.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.analytics = AnalyticsService(db)
        self.carts = CartService(db, analytics=self.analytics)
        self.discounts = DiscountService(db)
        self.notification_service = notification_service or NotificationService()

    def place_order(
        self,
        user_id: int,
        shipping_address: str,
        payment_method: str | None = None,
    ) -> Dict[str, Any]:
        """
        Use case: checkout.

        1. Price the cart against the live catalog (empty cart -> EmptyCartError)
        2. Pick the discount and compute the reduction
        3. In one transaction: insert the order, freeze each line's price,
           conditionally decrement stock, clear the cart
        4. After commit: purchase analytics and the notification, both best-effort
        """
        lines = self.carts.priced_lines(user_id)
        if not lines:
            raise EmptyCartError("Cart is empty")

        subtotal, _ = cart_totals((l["unit_price"], l["quantity"]) for l in lines)

        discount = self.discounts.select_discount(subtotal)
        discount_applied = self.discounts.compute_reduction(discount, subtotal)
        total = subtotal - discount_applied

        order = OrderModel(
            order_number=generate_order_number(),
            user_id=user_id,
            subtotal=subtotal,
            discount_applied=discount_applied,
            total_amount=total,
            status="pending",
            payment_method=payment_method or DEFAULT_PAYMENT_METHOD,
            shipping_address=shipping_address,
        )

        try:
            self.repo.add_order(order)

            for line in lines:
                self.repo.add_order_item(
                    OrderItemModel(
                        order_id=order.id,
                        product_id=line["product_id"],
                        variant_id=line["variant_id"],
                        quantity=line["quantity"],
                        price_at_purchase=line["unit_price"],
                    )
                )

                if not self.products.decrement_stock(line["product_id"], line["quantity"]):
                    raise InsufficientStockError(line["product_id"], line["quantity"])

                if line["variant_id"] is not None and not self.products.decrement_variant_stock(
                    line["variant_id"], line["quantity"]
                ):
                    raise InsufficientStockError(line["product_id"], line["quantity"], line["variant_id"])

            self.cart_repo.clear_cart(user_id)
            self.repo.commit()

        except Exception as e:
            #nothing is kept: no order row, no stock change, cart intact
            logger.error(f"Checkout for user {user_id} rolled back: {e}")
            self.repo.rollback()
            raise

        logger.info(
            f"Order {order.order_number} (id {order.id}) placed by user {user_id}: "
            f"subtotal {subtotal}, discount {discount_applied}"
            f"{f' (discount {discount.id})' if discount else ''}, total {total}"
        )

        order_id = order.id
        for line in lines:
            self.analytics.track(
                "purchase",
                user_id=user_id,
                product_id=line["product_id"],
                data={"quantity": line["quantity"], "price": str(line["unit_price"]), "order_id": order_id},
            )

        created = self.repo.get_order(order_id)
        self._notify(created)
        return serialize_order(created)

    def list_orders(self, user: UserModel, status: str | None = None, limit: int = 50, offset: int = 0):
        is_admin = user.role == "admin"
        orders, total = self.repo.list_orders(
            user_id=None if is_admin else user.id,
            status=status,
            limit=limit,
            offset=offset,
        )
        return {
            "orders": [serialize_order(o, include_customer=is_admin) for o in orders],
            "pagination": pagination(total, limit, offset, len(orders)),
        }

    def get_order(self, user: UserModel, id_or_number: str) -> Dict[str, Any]:
        is_admin = user.role == "admin"
        order = self.repo.find_order(id_or_number, user_id=None if is_admin else user.id)
        if not order:
            raise NotFoundError("Order not found")
        return serialize_order(order, include_customer=is_admin)

    def update_status(self, order_id: int, status: str) -> Dict[str, Any]:
        # any of the six values is accepted from any current status
        if status not in ORDER_STATUSES:
            raise ValidationError("Invalid status")

        order = self.repo.update_order_status(order_id, status)
        if not order:
            raise NotFoundError("Order not found")

        logger.info(f"Order {order.order_number} status set to {status}")
        return serialize_order(order, include_customer=True)

    def _notify(self, order: OrderModel):
        try:
            self.notification_service.send_order_notification(order.user_id, order.id, order.order_number)
        except Exception as e:
            logger.warning(f"Order notification for {order.order_number} not sent: {e}")
