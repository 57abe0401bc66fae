from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ProductVariantModel(Base):
    __tablename__ = "product_variants"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)

    variant_name = Column(String(100), nullable=False)  # e.g. size, color
    variant_value = Column(String(100), nullable=False)
    sku = Column(String(100))

    price_modifier = Column(Numeric(10, 2), nullable=False, default=0)
    stock_quantity = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel", back_populates="variants")
