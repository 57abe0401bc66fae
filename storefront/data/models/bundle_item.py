from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class BundleItemModel(Base):
    __tablename__ = "bundle_items"

    id = Column(Integer, primary_key=True)
    bundle_id = Column(Integer, ForeignKey("product_bundles.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    bundle = relationship("BundleModel", back_populates="items")
    product = relationship("ProductModel", back_populates="bundle_items")

    __table_args__ = (UniqueConstraint("bundle_id", "product_id", name="uq_bundle_item_product"),)
