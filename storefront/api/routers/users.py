# storefront/api/routers/users.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, require_admin
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.errors import ValidationError
from storefront.domain.schemas import AdminUserUpdate, ProfileUpdate, Role, SuccessOut, UserListOut, UserResponse
from storefront.services.serializers import pagination
from storefront.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile", response_model=UserResponse)
def get_profile(user=Depends(get_current_user)):
    return {"user": user}


@router.put("/profile", response_model=UserResponse)
def update_profile(payload: ProfileUpdate, user=Depends(get_current_user), db: Session = Depends(get_db)):
    with handle_errors("Update profile"):
        return {"user": UserService(db).update_profile(user.id, payload)}


@router.get("", response_model=UserListOut)
def list_users(
    role: Optional[Role] = Query(None),
    search: Optional[str] = Query(None, description="Matches name or email"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    with handle_errors("List users"):
        users, total = UserService(db).list_users(role, search, limit, offset)
        return {"users": users, "pagination": pagination(total, limit, offset, len(users))}


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Get user"):
        return {"user": UserService(db).get_user(user_id)}


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    payload: AdminUserUpdate,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    with handle_errors("Update user"):
        return {"user": UserService(db).update_user(user_id, payload)}


@router.delete("/{user_id}", response_model=SuccessOut)
def delete_user(user_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    with handle_errors("Delete user"):
        if user_id == admin.id:
            raise ValidationError("Cannot delete your own account")
        UserService(db).delete_user(user_id)
        return {"success": True}
