from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, Numeric, ForeignKey, JSON
from sqlalchemy.orm import relationship

from shopcenter.data.database import Base
from shopcenter.data.models._common import utcnow


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    short_description = Column(String(500), nullable=True)

    price = Column(Numeric(10, 2), nullable=False)
    sale_price = Column(Numeric(10, 2), nullable=True)
    sku = Column(String(100), nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    images = Column(JSON, nullable=False, default=list)

    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    brand = Column(String(100), nullable=True)

    rating = Column(Numeric(3, 2), nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)

    weight = Column(Numeric(8, 2), nullable=True)
    dimensions = Column(JSON, nullable=True)  # {"length", "width", "height"}
    tags = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    category = relationship("CategoryModel")
