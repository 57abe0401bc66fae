# storefront/repos/user_repo.py
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.lower())
        ).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def list_users(self, role: str | None, search: str | None, limit: int, offset: int) -> tuple[list, int]:
        """
        Rows of (user, order_count, total_spent), newest first. The aggregates
        are correlated subqueries so users without orders still show up.
        """
        order_count = (
            select(func.count(OrderModel.id)).where(OrderModel.user_id == UserModel.id).scalar_subquery()
        )
        total_spent = (
            select(func.coalesce(func.sum(OrderModel.total_amount), 0))
            .where(OrderModel.user_id == UserModel.id)
            .scalar_subquery()
        )

        filters = []
        if role:
            filters.append(UserModel.role == role)
        if search:
            pattern = f"%{search}%"
            filters.append(or_(UserModel.name.ilike(pattern), UserModel.email.ilike(pattern)))

        rows = self.db.execute(
            select(UserModel, order_count, total_spent)
            .where(*filters)
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
            .limit(limit)
            .offset(offset)
        ).all()
        total = self.db.execute(select(func.count(UserModel.id)).where(*filters)).scalar_one()
        return [tuple(row) for row in rows], total

    def delete_user(self, user: UserModel):
        self.db.delete(user)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
