"""
Database models for the Roomcraft product catalog
"""
import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Float, Index, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _new_product_id() -> str:
    return str(uuid.uuid4())


class ProductRecord(Base):
    """Catalog product as stored in the database"""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=_new_product_id)
    name = Column(String(500), nullable=False, index=True)
    price = Column(Float, nullable=False, default=0.0, index=True)
    category = Column(String(20), nullable=False, index=True)
    description = Column(Text, nullable=True)

    # Variable-shape data kept as JSON documents
    style_tags = Column(JSON, nullable=False, default=list)
    dimensions = Column(JSON, nullable=False, default=dict)
    images = Column(JSON, nullable=False, default=list)
    store_links = Column(JSON, nullable=False, default=list)
    model_3d_url = Column(Text, nullable=False, default="")

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_product_price_category", "price", "category"),
    )

    def __repr__(self):
        return f"<ProductRecord(id={self.id}, name='{self.name[:50]}', price={self.price})>"
