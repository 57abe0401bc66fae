# storefront/services/bundle_service.py
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.bundle import BundleModel
from storefront.data.models.bundle_item import BundleItemModel
from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.domain.schemas import BundleCreate, BundleItemIn, BundleUpdate
from storefront.repos.bundle_repo import BundleRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.serializers import serialize_bundle
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class BundleService:
    """
    Product bundles: a set of products sold together for `bundle_price`.
    The `original_price` shown next to it is never stored, it is the live sum
    of the items' current prices.
    """

    def __init__(self, db: Session):
        self.repo = BundleRepo(db)
        self.products = ProductRepo(db)

    def list_bundles(self) -> list[Dict[str, Any]]:
        return [serialize_bundle(b) for b in self.repo.list_bundles(active_only=True)]

    def get_bundle(self, id_or_slug: str) -> Dict[str, Any]:
        bundle = self.repo.find_bundle(id_or_slug)
        if not bundle:
            raise NotFoundError("Bundle not found")
        return serialize_bundle(bundle)

    def create_bundle(self, payload: BundleCreate) -> Dict[str, Any]:
        product_ids = [item.product_id for item in payload.items]
        if len(set(product_ids)) != len(product_ids):
            raise ValidationError("A product can appear only once in a bundle")
        for product_id in product_ids:
            self._check_product(product_id)

        bundle = BundleModel(**payload.model_dump(exclude={"items"}))
        bundle.items = [BundleItemModel(**item.model_dump()) for item in payload.items]
        try:
            self.repo.add_bundle(bundle)
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Bundle slug already exists")

        logger.info(f"Created bundle {bundle.id} ({bundle.slug}) with {len(bundle.items)} items")
        return serialize_bundle(self._get(bundle.id))

    def update_bundle(self, bundle_id: int, payload: BundleUpdate) -> Dict[str, Any]:
        bundle = self._get(bundle_id)
        changes = payload.changes()
        for field, value in changes.items():
            setattr(bundle, field, value)

        try:
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Bundle slug already exists")

        logger.info(f"Updated bundle {bundle_id}: {sorted(changes)}")
        return serialize_bundle(self._get(bundle_id))

    def delete_bundle(self, bundle_id: int):
        bundle = self._get(bundle_id)
        self.repo.delete_bundle(bundle)
        self.repo.commit()
        logger.info(f"Deleted bundle {bundle_id}")

    def add_item(self, bundle_id: int, payload: BundleItemIn) -> Dict[str, Any]:
        """Adding a product that is already in the bundle sets its quantity."""
        product = self._check_product(payload.product_id)
        bundle = self._get(bundle_id)

        item = self.repo.find_item_for_product(bundle_id, payload.product_id)
        if item:
            item.quantity = payload.quantity
        else:
            item = BundleItemModel(product_id=payload.product_id, quantity=payload.quantity)
            bundle.items.append(item)
        self.repo.commit()

        return {
            "id": item.id,
            "product_id": product.id,
            "quantity": item.quantity,
            "product_name": product.name,
            "product_image": product.image_url,
            "product_price": product.current_price,
        }

    def remove_item(self, bundle_id: int, item_id: int):
        item = self.repo.get_item(bundle_id, item_id)
        if not item:
            raise NotFoundError("Bundle item not found")
        self.repo.delete_item(item)
        self.repo.commit()

    def _get(self, bundle_id: int) -> BundleModel:
        bundle = self.repo.get_bundle(bundle_id)
        if not bundle:
            raise NotFoundError("Bundle not found")
        return bundle

    def _check_product(self, product_id: int):
        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product
