# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_optional_user
from storefront.api.errors import handle_errors
from storefront.data.database import get_db
from storefront.domain.schemas import SigninIn, SignupIn, SuccessOut, UserResponse
from storefront.services.auth_service import AuthService
from storefront.utils.settings import AUTH_COOKIE_NAME, AUTH_COOKIE_SECURE, JWT_EXPIRES_DAYS

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_auth_cookie(response: Response, token: str):
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=AUTH_COOKIE_SECURE,
        samesite="lax",
        max_age=60 * 60 * 24 * JWT_EXPIRES_DAYS,
        path="/",
    )


@router.post("/signup", response_model=UserResponse)
def signup(payload: SignupIn, response: Response, db: Session = Depends(get_db)):
    with handle_errors("Signup"):
        user, token = AuthService(db).signup(payload)
    _set_auth_cookie(response, token)
    return {"user": user}


@router.post("/signin", response_model=UserResponse)
def signin(payload: SigninIn, response: Response, db: Session = Depends(get_db)):
    with handle_errors("Signin"):
        user, token = AuthService(db).signin(payload)
    _set_auth_cookie(response, token)
    return {"user": user}


@router.post("/signout", response_model=SuccessOut)
def signout(response: Response):
    response.delete_cookie(AUTH_COOKIE_NAME, path="/")
    return {"success": True}


@router.get("/me", response_model=UserResponse)
def me(user=Depends(get_optional_user)):
    """Current user, or null when there is no valid session."""
    return {"user": user}
