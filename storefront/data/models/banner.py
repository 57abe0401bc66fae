from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from storefront.data.database import Base


class BannerModel(Base):
    __tablename__ = "homepage_banners"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    image_url = Column(String(1000), nullable=False)
    link_url = Column(String(1000))
    is_active = Column(Boolean, nullable=False, default=True)
    # lower first
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
