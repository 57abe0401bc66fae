# storefront/repos/discount_repo.py
from datetime import datetime
from decimal import Decimal

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from storefront.data.models.discount import DiscountModel


def _active_global(now: datetime):
    return (
        DiscountModel.is_active.is_(True),
        DiscountModel.apply_to_all.is_(True),
        DiscountModel.start_date <= now,
        DiscountModel.end_date >= now,
    )


class DiscountRepo:
    def __init__(self, db: Session):
        self.db = db

    def find_best_for_subtotal(self, subtotal: Decimal, now: datetime) -> DiscountModel | None:
        # raw discount_value comparison, percentage vs fixed not normalized
        return self.db.execute(
            select(DiscountModel)
            .where(
                *_active_global(now),
                or_(
                    DiscountModel.min_purchase_amount.is_(None),
                    DiscountModel.min_purchase_amount <= subtotal,
                ),
            )
            .order_by(
                DiscountModel.discount_value.desc(),
                DiscountModel.created_at.desc(),
                DiscountModel.id.desc(),
            )
            .limit(1)
        ).scalar_one_or_none()

    def latest_active(self, now: datetime) -> DiscountModel | None:
        return self.db.execute(
            select(DiscountModel)
            .where(*_active_global(now))
            .order_by(DiscountModel.created_at.desc(), DiscountModel.id.desc())
            .limit(1)
        ).scalar_one_or_none()

    def list_discounts(self) -> list[DiscountModel]:
        return list(
            self.db.execute(
                select(DiscountModel).order_by(DiscountModel.created_at.desc(), DiscountModel.id.desc())
            ).scalars().all()
        )

    def get_discount(self, discount_id: int) -> DiscountModel | None:
        return self.db.get(DiscountModel, discount_id)

    def add_discount(self, discount: DiscountModel) -> DiscountModel:
        self.db.add(discount)
        self.db.flush()
        return discount

    def delete_discount(self, discount: DiscountModel):
        self.db.delete(discount)

    def deactivate_expired(self, now: datetime) -> int:
        result = self.db.execute(
            update(DiscountModel)
            .where(DiscountModel.is_active.is_(True), DiscountModel.end_date < now)
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
