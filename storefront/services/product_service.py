# storefront/services/product_service.py
import re
from decimal import Decimal
from typing import Any, Dict, List

from pydantic import ValidationError as PayloadError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.data.models.product_variant import ProductVariantModel
from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.domain.schemas import BulkProductIn, CategoryIn, ProductCreate, ProductUpdate
from storefront.repos.product_repo import ProductRepo
from storefront.services.analytics_service import AnalyticsService
from storefront.services.serializers import pagination, serialize_product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.analytics = AnalyticsService(db)

    def list_products(
        self,
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
    ) -> Dict[str, Any]:
        products, total = self.repo.list_products(
            category=category,
            brand=brand,
            search=search,
            featured=featured,
            new_arrival=new_arrival,
            min_price=min_price,
            max_price=max_price,
            sort=sort,
            order=order,
            limit=limit,
            offset=offset,
        )
        return {
            "products": [serialize_product(p) for p in products],
            "pagination": pagination(total, limit, offset, len(products)),
        }

    def get_product(self, id_or_slug: str, viewer_id: int | None = None) -> Dict[str, Any]:
        product = self.repo.find_product(id_or_slug)
        if not product:
            raise NotFoundError("Product not found")

        data = serialize_product(product)
        self.analytics.track("view", user_id=viewer_id, product_id=product.id, data={"source": "product_detail"})
        return data

    def create_product(self, payload: ProductCreate) -> Dict[str, Any]:
        self._check_category(payload.category_id)
        self._check_brand(payload.brand_id)

        fields = payload.model_dump(exclude={"variants"})
        product = ProductModel(**fields)
        product.variants = [ProductVariantModel(**v.model_dump()) for v in payload.variants]

        try:
            self.repo.add_product(product)
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Product slug already exists")

        logger.info(f"Created product {product.id} ({product.slug}) with {len(payload.variants)} variants")
        return serialize_product(product)

    def update_product(self, product_id: int, payload: ProductUpdate) -> Dict[str, Any]:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        changes = payload.changes(exclude={"variants"})
        if "category_id" in changes:
            self._check_category(changes["category_id"])
        if "brand_id" in changes:
            self._check_brand(changes["brand_id"])

        for field, value in changes.items():
            setattr(product, field, value)

        if payload.variants is not None:
            #full replacement, delete-orphan drops the old rows
            product.variants = [ProductVariantModel(**v.model_dump()) for v in payload.variants]

        try:
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Product slug already exists")

        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        self.repo.db.refresh(product)
        return serialize_product(product)

    def delete_product(self, product_id: int):
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        try:
            self.repo.delete_product(product)
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Product is referenced by orders and cannot be deleted")
        logger.info(f"Deleted product {product_id}")

    #categories
    def list_categories(self) -> list[CategoryModel]:
        return self.repo.list_categories()

    def create_category(self, payload: CategoryIn) -> CategoryModel:
        category = CategoryModel(name=payload.name, slug=payload.slug)
        try:
            self.repo.add_category(category)
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Category slug already exists")
        return category

    def _check_category(self, category_id: int | None):
        if category_id is not None and not self.repo.get_category(category_id):
            raise ValidationError("Category does not exist")

    def _check_brand(self, brand_id: int | None):
        if brand_id is not None and not self.repo.get_brand(brand_id):
            raise ValidationError("Brand does not exist")

    #bulk import
    def bulk_import(self, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Upsert by slug, one commit per row. A failing row is rolled back and
        reported, the rest of the batch goes on.
        """
        results, errors = [], []
        for index, row in enumerate(rows):
            try:
                product = self._import_row(BulkProductIn.model_validate(row))
                self.repo.commit()
            except PayloadError as e:
                errors.append(_row_error(index, row, "; ".join(err["msg"] for err in e.errors())))
                continue
            except ValidationError as e:
                self.repo.rollback()
                errors.append(_row_error(index, row, str(e)))
                continue
            except IntegrityError:
                self.repo.rollback()
                errors.append(_row_error(index, row, "Duplicate value"))
                continue
            results.append(serialize_product(product))

        logger.info(f"Bulk import: {len(results)} imported, {len(errors)} failed")
        return {"success": len(results), "failed": len(errors), "results": results, "errors": errors}

    def _import_row(self, item: BulkProductIn) -> ProductModel:
        if item.category_name:
            category = self.repo.find_category_by_name(item.category_name)
            if category is None:
                slug = _slugify(item.category_name)
                if not slug:
                    raise ValidationError("Category name has no usable characters")
                category = self.repo.add_category(CategoryModel(name=item.category_name, slug=slug))
            category_id = category.id
        else:
            self._check_category(item.category_id)
            category_id = item.category_id
        self._check_brand(item.brand_id)

        fields = item.model_dump(exclude={"category_id", "category_name"})
        product = self.repo.get_by_slug(item.slug)
        if product is None:
            return self.repo.add_product(ProductModel(category_id=category_id, **fields))

        for field, value in fields.items():
            setattr(product, field, value)
        product.category_id = category_id
        self.repo.db.flush()
        return product


def _slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def _row_error(index: int, row: Dict[str, Any], message: str) -> Dict[str, Any]:
    name = row.get("name") if isinstance(row, dict) else None
    return {"index": index, "product": name if isinstance(name, str) else None, "error": message}
