# storefront/api/deps.py
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.services.auth_service import AuthService
from storefront.utils.settings import AUTH_COOKIE_NAME


def _token_from(request: Request) -> str | None:
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> UserModel | None:
    return AuthService(db).resolve_user(_token_from(request))


def get_current_user(user: UserModel | None = Depends(get_optional_user)) -> UserModel:
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_admin(user: UserModel = Depends(get_current_user)) -> UserModel:
    #wrong role gets the same 401 as no session
    if user.role != "admin":
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user
