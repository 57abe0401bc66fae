# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal, init_db
from storefront.data.models import (
    BannerModel,
    BrandModel,
    CategoryModel,
    ProductModel,
    ProductVariantModel,
    UserModel,
)
from storefront.services.auth_service import hash_password
from storefront.utils.settings import ADMIN_EMAIL, ADMIN_PASSWORD
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def seed():
    init_db()
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(UserModel).filter(UserModel.role == "admin").first() is None:
            db.add(
                UserModel(
                    email=ADMIN_EMAIL.lower(),
                    password_hash=hash_password(ADMIN_PASSWORD),
                    name="Administrator",
                    role="admin",
                )
            )
            logger.info(f"Seeded admin user {ADMIN_EMAIL}")

        if db.query(ProductModel).first() is None:
            apparel = CategoryModel(name="Apparel", slug="apparel")
            accessories = CategoryModel(name="Accessories", slug="accessories")
            house = BrandModel(name="Northcoast", slug="northcoast", is_featured=True)
            db.add_all([apparel, accessories, house])

            tee = ProductModel(
                category=apparel,
                brand=house,
                name="Classic Tee",
                slug="classic-tee",
                description="Heavyweight cotton t-shirt",
                original_price=Decimal("1200.00"),
                current_price=Decimal("1000.00"),
                stock_quantity=50,
                is_featured=True,
            )
            tee.variants = [
                ProductVariantModel(variant_name="size", variant_value="M", sku="TEE-M", stock_quantity=20),
                ProductVariantModel(
                    variant_name="size",
                    variant_value="XL",
                    sku="TEE-XL",
                    price_modifier=Decimal("100.00"),
                    stock_quantity=10,
                ),
            ]
            cap = ProductModel(
                category=accessories,
                name="Logo Cap",
                slug="logo-cap",
                original_price=Decimal("600.00"),
                current_price=Decimal("600.00"),
                stock_quantity=30,
                is_new_arrival=True,
            )
            db.add_all([tee, cap])
            db.add(
                BannerModel(
                    title="New season",
                    image_url="/images/banners/new-season.jpg",
                    link_url="/products?new=true",
                )
            )
            logger.info("Seeded sample catalog")

        db.commit()
    finally:
        db.close()


if __name__ == "__main__":
    seed()
