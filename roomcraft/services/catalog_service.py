"""
Catalog store backed by the products table
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roomcraft.core.database import get_db
from roomcraft.core.exceptions import CatalogUnavailable
from roomcraft.database.models import ProductRecord
from roomcraft.schemas.products import Product
from roomcraft.services.sample_data import SAMPLE_PRODUCTS

logger = logging.getLogger(__name__)


def _to_product(record: ProductRecord) -> Product:
    """Convert a database row to the API product model"""
    return Product(
        id=record.id,
        name=record.name,
        price=record.price,
        category=record.category,
        style_tags=record.style_tags or [],
        dimensions=record.dimensions or {},
        images=record.images or [],
        model_3d_url=record.model_3d_url or "",
        store_links=record.store_links or [],
        description=record.description,
        created_at=record.created_at,
        updated_at=record.updated_at or record.created_at,
    )


class CatalogService:
    """Read access to the product catalog plus demo seeding"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_products(
        self,
        category: Optional[str] = None,
        style_tags: Optional[List[str]] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Product]:
        """
        List products, newest first

        Args:
            category: Exact category match
            style_tags: Keep products carrying any of these tags
            search: Case-insensitive substring over name and description
            limit: Page size
            offset: Rows to skip

        Returns:
            Matching products

        Raises:
            CatalogUnavailable: the database query failed
        """
        query = select(ProductRecord)

        if category:
            query = query.where(ProductRecord.category == category)

        if search:
            query = query.where(
                or_(
                    ProductRecord.name.ilike(f"%{search}%"),
                    ProductRecord.description.ilike(f"%{search}%"),
                )
            )

        query = query.order_by(ProductRecord.created_at.desc())

        # JSON tag columns are not portably queryable, so tag matching and
        # the page window are applied after the fetch when tags are given
        if not style_tags:
            query = query.offset(offset).limit(limit)

        try:
            result = await self.db.execute(query)
            records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Catalog query failed: {e}", exc_info=True)
            raise CatalogUnavailable(str(e)) from e

        products = [_to_product(record) for record in records]

        if style_tags:
            wanted = set(style_tags)
            products = [p for p in products if wanted.intersection(p.style_tags)]
            products = products[offset:offset + limit]

        logger.info(f"Catalog returned {len(products)} products")
        return products

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        """Get a single product, or None when it does not exist"""
        try:
            result = await self.db.execute(select(ProductRecord).where(ProductRecord.id == product_id))
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Catalog lookup failed for {product_id}: {e}", exc_info=True)
            raise CatalogUnavailable(str(e)) from e

        return _to_product(record) if record else None

    async def seed_sample_data(self) -> int:
        """
        Insert the demo catalog when the products table is empty

        Returns:
            Number of products inserted
        """
        try:
            count = (await self.db.execute(select(func.count()).select_from(ProductRecord))).scalar()
            if count:
                return 0

            now = datetime.utcnow()
            for data in SAMPLE_PRODUCTS:
                self.db.add(ProductRecord(**data, model_3d_url="", created_at=now, updated_at=now))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to seed sample products: {e}", exc_info=True)
            raise CatalogUnavailable(str(e)) from e

        logger.info(f"Inserted {len(SAMPLE_PRODUCTS)} sample products")
        return len(SAMPLE_PRODUCTS)


async def get_catalog(db: AsyncSession = Depends(get_db)) -> CatalogService:
    """FastAPI dependency for the catalog store"""
    return CatalogService(db)
