# storefront/services/auth_service.py
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import AuthenticationError, ValidationError
from storefront.domain.schemas import SigninIn, SignupIn
from storefront.repos.user_repo import UserRepo
from storefront.utils.settings import JWT_ALGORITHM, JWT_EXPIRES_DAYS, JWT_SECRET
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def create_token(user_id: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "userId": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=JWT_EXPIRES_DAYS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict | None:
    """Decoded claims, or None for a bad signature, expired or malformed token."""
    try:
        claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None
    if not str(claims.get("userId", "")).isdigit():
        return None
    return claims


class AuthService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def signup(self, payload: SignupIn) -> tuple[UserModel, str]:
        if self.repo.get_by_email(payload.email):
            raise ValidationError("Email already registered")

        user = UserModel(
            email=payload.email.lower(),
            password_hash=hash_password(payload.password),
            name=payload.name,
            role="customer",
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            #lost a race with a concurrent signup for the same email
            self.repo.rollback()
            raise ValidationError("Email already registered")

        logger.info(f"Registered user {created.id}")
        return created, create_token(created.id)

    def signin(self, payload: SigninIn) -> tuple[UserModel, str]:
        user = self.repo.get_by_email(payload.email)
        if not user or not verify_password(payload.password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        logger.info(f"User {user.id} signed in")
        return user, create_token(user.id)

    def resolve_user(self, token: str | None) -> UserModel | None:
        if not token:
            return None
        claims = verify_token(token)
        if claims is None:
            return None
        return self.repo.get_user(int(claims["userId"]))
