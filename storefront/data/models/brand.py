from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class BrandModel(Base):
    __tablename__ = "brand_partnerships"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text)
    logo_url = Column(String(1000))
    website_url = Column(String(1000))
    contact_email = Column(String(255))
    established_year = Column(Integer)

    is_featured = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # deleting a brand unlinks its products
    products = relationship("ProductModel", back_populates="brand")
