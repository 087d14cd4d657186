from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow


class BrandORM(Base):
    __tablename__ = "brands"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False, unique=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    products = relationship("ProductORM", back_populates="brand")


class ProductORM(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, default=new_id)
    # RESTRICT: a brand with products cannot be removed
    brand_id = Column(
        String, ForeignKey("brands.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    priority_specializations = Column(JSON, default=list, nullable=False)
    annotations = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    brand = relationship("BrandORM", back_populates="products")
