import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.data.database import Base, get_db
from storefront.data.models import CategoryModel, DiscountModel, ProductModel, ProductVariantModel, UserModel
from storefront.main import create_app
from storefront.services.auth_service import create_token, hash_password
from storefront.utils.settings import AUTH_COOKIE_NAME

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db):
    return TestingSessionLocal


@pytest.fixture
def app(db):
    app = create_app(init_database=False)

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def _make_user(db, email, role="customer", name="Test User"):
    user = UserModel(email=email, password_hash=hash_password("secret123"), name=name, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db):
    return _make_user(db, "customer@example.com")


@pytest.fixture
def admin(db):
    return _make_user(db, "admin@example.com", role="admin", name="Admin")


@pytest.fixture
def user_client(app, user):
    client = TestClient(app)
    client.cookies.set(AUTH_COOKIE_NAME, create_token(user.id))
    return client


@pytest.fixture
def admin_client(app, admin):
    client = TestClient(app)
    client.cookies.set(AUTH_COOKIE_NAME, create_token(admin.id))
    return client


@pytest.fixture
def category(db):
    category = CategoryModel(name="Apparel", slug="apparel")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def product(db, category):
    product = ProductModel(
        category_id=category.id,
        name="Classic Tee",
        slug="classic-tee",
        description="Heavyweight cotton t-shirt",
        original_price=Decimal("1200.00"),
        current_price=Decimal("1000.00"),
        stock_quantity=5,
    )
    product.variants = [
        ProductVariantModel(variant_name="size", variant_value="M", stock_quantity=3),
        ProductVariantModel(
            variant_name="size",
            variant_value="XL",
            price_modifier=Decimal("100.00"),
            stock_quantity=1,
        ),
    ]
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def make_discount(db):
    def _make(**overrides):
        now = datetime.now(timezone.utc)
        fields = {
            "name": "Sale",
            "discount_type": "percentage",
            "discount_value": Decimal("10"),
            "min_purchase_amount": Decimal("0"),
            "start_date": now - timedelta(days=1),
            "end_date": now + timedelta(days=1),
            "is_active": True,
            "apply_to_all": True,
        }
        fields.update(overrides)
        discount = DiscountModel(**fields)
        db.add(discount)
        db.commit()
        db.refresh(discount)
        return discount

    return _make
