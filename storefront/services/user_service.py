# storefront/services/user_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.schemas import AdminUserUpdate, ProfileUpdate
from storefront.repos.user_repo import UserRepo
from storefront.services.serializers import serialize_user
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: int, payload: ProfileUpdate) -> UserModel:
        return self._apply(self.get_user(user_id), payload.changes())

    def list_users(self, role: str | None, search: str | None, limit: int, offset: int) -> tuple[list[dict], int]:
        rows, total = self.repo.list_users(role, search, limit, offset)
        return [serialize_user(user, order_count, total_spent) for user, order_count, total_spent in rows], total

    def update_user(self, user_id: int, payload: AdminUserUpdate) -> UserModel:
        changes = payload.changes()
        if "email" in changes:
            changes["email"] = changes["email"].lower()
        user = self._apply(self.get_user(user_id), changes)
        logger.info(f"Admin updated user {user_id}: {sorted(changes)}")
        return user

    def delete_user(self, user_id: int):
        user = self.get_user(user_id)
        try:
            self.repo.delete_user(user)
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("User has orders and cannot be deleted")
        logger.info(f"Deleted user {user_id}")

    def _apply(self, user: UserModel, changes: dict) -> UserModel:
        for field, value in changes.items():
            setattr(user, field, value)
        try:
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Email already registered")
        self.repo.db.refresh(user)
        return user
