"""
Filtering Service for Product Filtering

Narrows a catalog snapshot by style-tag overlap and budget range.
"""
import logging
from typing import Iterable, List, Optional

from roomcraft.schemas.products import Product

from .schemas import BudgetRange

logger = logging.getLogger(__name__)


class FilteringService:
    """Service for filtering products by style and budget"""

    def filter_products(
        self,
        products: List[Product],
        style_tags: Optional[Iterable[str]] = None,
        budget: Optional[BudgetRange] = None,
    ) -> List[Product]:
        """
        Filter products by style tags and budget

        Both filters keep catalog order, so they commute and applying them
        twice gives the same list.

        Args:
            products: Catalog snapshot
            style_tags: Requested tags; a product passes if it carries any of them
            budget: Inclusive price range

        Returns:
            Filtered list of products
        """
        filtered = products

        wanted = set(style_tags or [])
        if wanted:
            filtered = [p for p in filtered if wanted.intersection(p.style_tags)]

        if budget is not None:
            filtered = [p for p in filtered if budget.min <= p.price <= budget.max]

        logger.info(f"Filtered from {len(products)} to {len(filtered)} products")
        return filtered


filtering_service = FilteringService()
