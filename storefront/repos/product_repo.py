# storefront/repos/product_repo.py
from decimal import Decimal

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.brand import BrandModel
from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.data.models.product_variant import ProductVariantModel

SORT_FIELDS = {
    "created_at": ProductModel.created_at,
    "current_price": ProductModel.current_price,
    "name": ProductModel.name,
    "stock_quantity": ProductModel.stock_quantity,
}


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def find_product(self, id_or_slug: str) -> ProductModel | None:
        """Lookup by numeric id or by slug."""
        query = select(ProductModel).options(
            selectinload(ProductModel.variants),
            selectinload(ProductModel.category),
            selectinload(ProductModel.brand),
        )
        if id_or_slug.isdigit():
            query = query.where(or_(ProductModel.id == int(id_or_slug), ProductModel.slug == id_or_slug))
        else:
            query = query.where(ProductModel.slug == id_or_slug)
        return self.db.execute(query).scalars().first()

    def list_products(
        self,
        *,
        category: str | None = None,
        brand: str | None = None,
        search: str | None = None,
        featured: bool | None = None,
        new_arrival: bool | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        sort: str = "created_at",
        order: str = "desc",
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[ProductModel], int]:
        filters = []
        if category:
            filters.append(CategoryModel.slug == category)
        if brand:
            filters.append(ProductModel.brand.has(BrandModel.slug == brand))
        if search:
            pattern = f"%{search}%"
            filters.append(or_(ProductModel.name.ilike(pattern), ProductModel.description.ilike(pattern)))
        if featured:
            filters.append(ProductModel.is_featured.is_(True))
        if new_arrival:
            filters.append(ProductModel.is_new_arrival.is_(True))
        if min_price is not None:
            filters.append(ProductModel.current_price >= min_price)
        if max_price is not None:
            filters.append(ProductModel.current_price <= max_price)

        sort_column = SORT_FIELDS.get(sort, ProductModel.created_at)
        ordering = sort_column.asc() if order == "asc" else sort_column.desc()

        query = (
            select(ProductModel)
            .outerjoin(CategoryModel, ProductModel.category_id == CategoryModel.id)
            .where(*filters)
            .options(
                selectinload(ProductModel.variants),
                selectinload(ProductModel.category),
                selectinload(ProductModel.brand),
            )
            .order_by(ordering, ProductModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        count = (
            select(func.count(ProductModel.id))
            .select_from(ProductModel)
            .outerjoin(CategoryModel, ProductModel.category_id == CategoryModel.id)
            .where(*filters)
        )

        products = self.db.execute(query).scalars().all()
        return list(products), self.db.execute(count).scalar_one()

    def get_by_slug(self, slug: str) -> ProductModel | None:
        return self.db.execute(select(ProductModel).where(ProductModel.slug == slug)).scalar_one_or_none()

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def delete_product(self, product: ProductModel):
        self.db.delete(product)

    def get_variant(self, variant_id: int) -> ProductVariantModel | None:
        return self.db.get(ProductVariantModel, variant_id)

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """
        Conditional relative decrement. False when the row has less than
        `quantity` left, in which case nothing is written.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock_quantity >= quantity)
            .values(stock_quantity=ProductModel.stock_quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def decrement_variant_stock(self, variant_id: int, quantity: int) -> bool:
        result = self.db.execute(
            update(ProductVariantModel)
            .where(ProductVariantModel.id == variant_id, ProductVariantModel.stock_quantity >= quantity)
            .values(stock_quantity=ProductVariantModel.stock_quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    # categories

    def list_categories(self) -> list[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.name)).scalars().all())

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def find_category_by_name(self, name: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(func.lower(CategoryModel.name) == name.lower()).limit(1)
        ).scalar_one_or_none()

    def add_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.flush()
        return category

    def get_brand(self, brand_id: int) -> BrandModel | None:
        return self.db.get(BrandModel, brand_id)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
