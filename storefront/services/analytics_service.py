# storefront/services/analytics_service.py
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from storefront.data.models.analytics_event import AnalyticsEventModel
from storefront.repos.analytics_repo import AnalyticsRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.serializers import serialize_order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AnalyticsService:
    def __init__(self, db: Session):
        self.repo = AnalyticsRepo(db)

    def track(
        self,
        event_type: str,
        user_id: int | None = None,
        product_id: int | None = None,
        data: dict | None = None,
    ) -> bool:
        """
        Best-effort event insert in its own commit. Never raises: a failed
        event must not fail the request that produced it.
        """
        try:
            self.repo.add_event(
                AnalyticsEventModel(
                    user_id=user_id,
                    product_id=product_id,
                    event_type=event_type,
                    event_data=data or {},
                )
            )
            self.repo.commit()
            return True
        except Exception as e:
            self.repo.rollback()
            logger.warning(f"Analytics event {event_type} skipped: {e}")
            return False

    def overview(self) -> dict:
        today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
        recent, _ = OrderRepo(self.repo.db).list_orders(user_id=None, status=None, limit=5, offset=0)
        return {
            "overview": {
                "total_users": self.repo.count_customers(),
                "total_orders": self.repo.count_orders(),
                "total_revenue": self.repo.revenue(),
                "total_products": self.repo.count_products(),
                "views_today": self.repo.count_views_since(today),
            },
            "orders_by_status": [
                {"status": status, "count": count} for status, count in self.repo.orders_by_status()
            ],
            "recent_orders": [serialize_order(o, include_customer=True) for o in recent],
        }
