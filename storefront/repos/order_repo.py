# storefront/repos/order_repo.py
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, joinedload, selectinload

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel


def _with_details(query):
    return query.options(
        selectinload(OrderModel.items).joinedload(OrderItemModel.product),
        joinedload(OrderModel.user),
    )


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        #flush only, the caller commits the whole checkout at once
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        return item

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            _with_details(select(OrderModel)).where(OrderModel.id == order_id)
        ).unique().scalar_one_or_none()

    def find_order(self, id_or_number: str, user_id: int | None = None) -> OrderModel | None:
        """Numeric id or order_number; restricted to `user_id` when given."""
        if id_or_number.isdigit():
            match = or_(OrderModel.id == int(id_or_number), OrderModel.order_number == id_or_number)
        else:
            match = OrderModel.order_number == id_or_number

        query = _with_details(select(OrderModel)).where(match)
        if user_id is not None:
            query = query.where(OrderModel.user_id == user_id)
        return self.db.execute(query).unique().scalars().first()

    def list_orders(
        self,
        user_id: int | None,
        status: str | None,
        limit: int,
        offset: int,
    ) -> tuple[list[OrderModel], int]:
        filters = []
        if user_id is not None:
            filters.append(OrderModel.user_id == user_id)
        if status:
            filters.append(OrderModel.status == status)

        orders = self.db.execute(
            _with_details(select(OrderModel))
            .where(*filters)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .limit(limit)
            .offset(offset)
        ).unique().scalars().all()
        total = self.db.execute(select(func.count(OrderModel.id)).where(*filters)).scalar_one()
        return list(orders), total

    def update_order_status(self, order_id: int, status: str) -> OrderModel | None:
        order = self.db.get(OrderModel, order_id)
        if order:
            order.status = status
            self.db.commit()
            order = self.get_order(order_id)
        return order

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
