# storefront/repos/analytics_repo.py
from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storefront.data.models.analytics_event import AnalyticsEventModel
from storefront.data.models.order import OrderModel
from storefront.data.models.product import ProductModel
from storefront.data.models.user import UserModel


class AnalyticsRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_event(self, event: AnalyticsEventModel):
        self.db.add(event)

    def count_customers(self) -> int:
        return self.db.execute(select(func.count(UserModel.id)).where(UserModel.role == "customer")).scalar_one()

    def count_orders(self) -> int:
        return self.db.execute(select(func.count(OrderModel.id))).scalar_one()

    def revenue(self) -> Decimal:
        total = self.db.execute(
            select(func.coalesce(func.sum(OrderModel.total_amount), 0)).where(OrderModel.status != "cancelled")
        ).scalar_one()
        return Decimal(str(total))

    def count_products(self) -> int:
        return self.db.execute(select(func.count(ProductModel.id))).scalar_one()

    def count_views_since(self, since: datetime) -> int:
        return self.db.execute(
            select(func.count(AnalyticsEventModel.id)).where(
                AnalyticsEventModel.event_type == "view",
                AnalyticsEventModel.created_at >= since,
            )
        ).scalar_one()

    def orders_by_status(self) -> list[tuple[str, int]]:
        rows = self.db.execute(
            select(OrderModel.status, func.count(OrderModel.id)).group_by(OrderModel.status).order_by(OrderModel.status)
        ).all()
        return [(status, count) for status, count in rows]

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
