# storefront/services/discount_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.discount import DiscountModel
from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.domain.pricing import compute_reduction
from storefront.domain.schemas import DiscountCreate, DiscountUpdate
from storefront.repos.discount_repo import DiscountRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class DiscountService:
    def __init__(self, db: Session):
        self.repo = DiscountRepo(db)

    def select_discount(self, subtotal: Decimal, now: datetime | None = None) -> DiscountModel | None:
        """
        Active, global, inside [start_date, end_date] and with
        min_purchase_amount <= subtotal (or unset). Highest raw
        discount_value wins, whatever its type.
        """
        return self.repo.find_best_for_subtotal(subtotal, now or datetime.now(timezone.utc))

    @staticmethod
    def compute_reduction(discount: DiscountModel | None, subtotal: Decimal) -> Decimal:
        return compute_reduction(discount, subtotal)

    def active_discount(self, subtotal: Decimal | None = None) -> Dict[str, Any]:
        if subtotal is None:
            return {"discount": self.repo.latest_active(datetime.now(timezone.utc)), "reduction": None}

        discount = self.select_discount(subtotal)
        return {
            "discount": discount,
            "reduction": self.compute_reduction(discount, subtotal),
        }

    #admin
    def list_discounts(self) -> list[DiscountModel]:
        return self.repo.list_discounts()

    def create_discount(self, payload: DiscountCreate) -> DiscountModel:
        discount = DiscountModel(**payload.model_dump())
        try:
            self.repo.add_discount(discount)
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Discount code already exists")

        logger.info(f"Created discount {discount.id} ({discount.discount_type} {discount.discount_value})")
        return discount

    def update_discount(self, discount_id: int, payload: DiscountUpdate) -> DiscountModel:
        discount = self.repo.get_discount(discount_id)
        if not discount:
            raise NotFoundError("Discount not found")

        for field, value in payload.changes().items():
            setattr(discount, field, value)

        if _naive(discount.end_date) < _naive(discount.start_date):
            self.repo.rollback()
            raise ValidationError("end_date must not be before start_date")

        try:
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Discount code already exists")

        logger.info(f"Updated discount {discount_id}")
        return discount

    def delete_discount(self, discount_id: int):
        discount = self.repo.get_discount(discount_id)
        if not discount:
            raise NotFoundError("Discount not found")
        self.repo.delete_discount(discount)
        self.repo.commit()
        logger.info(f"Deleted discount {discount_id}")

    def expire_discounts(self, now: datetime | None = None) -> int:
        count = self.repo.deactivate_expired(now or datetime.now(timezone.utc))
        self.repo.commit()
        return count


def _naive(value: datetime) -> datetime:
    #sqlite hands back naive datetimes, everything is stored as UTC
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
