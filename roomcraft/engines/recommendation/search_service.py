"""
Search Service for Product Discovery

Handles catalog search, relevance scoring and similar-product lookup.
"""
import logging
from typing import List, Optional

from roomcraft.schemas.products import Product

from .schemas import DimensionBounds, SearchFilters, SearchResult

logger = logging.getLogger(__name__)


def _matches_query(product: Product, query: str) -> bool:
    return (
        query in product.name.lower()
        or query in (product.description or "").lower()
        or query in product.category.lower()
        or any(query in tag.lower() for tag in product.style_tags)
    )


def _within_min(product: Product, bounds: DimensionBounds) -> bool:
    dims = product.dimensions
    return (
        (not bounds.length or dims.length >= bounds.length)
        and (not bounds.width or dims.width >= bounds.width)
        and (not bounds.height or dims.height >= bounds.height)
    )


def _within_max(product: Product, bounds: DimensionBounds) -> bool:
    dims = product.dimensions
    return (
        (not bounds.length or dims.length <= bounds.length)
        and (not bounds.width or dims.width <= bounds.width)
        and (not bounds.height or dims.height <= bounds.height)
    )


class SearchService:
    """Service for product search and discovery"""

    def search_products(
        self,
        products: List[Product],
        filters: SearchFilters,
        page: int = 1,
        page_size: int = 20,
    ) -> SearchResult:
        """
        Search a catalog snapshot

        Args:
            products: Catalog snapshot
            filters: Search criteria
            page: 1-based page number
            page_size: Results per page

        Returns:
            SearchResult with the requested page and the pre-pagination total
        """
        results = list(products)

        if filters.query:
            query = filters.query.lower()
            results = [p for p in results if _matches_query(p, query)]

        if filters.category:
            results = [p for p in results if p.category == filters.category]

        if filters.min_price is not None:
            results = [p for p in results if p.price >= filters.min_price]

        if filters.max_price is not None:
            results = [p for p in results if p.price <= filters.max_price]

        if filters.style_tags:
            wanted = set(filters.style_tags)
            results = [p for p in results if wanted.intersection(p.style_tags)]

        if filters.min_dimensions and not filters.min_dimensions.is_empty():
            results = [p for p in results if _within_min(p, filters.min_dimensions)]

        if filters.max_dimensions and not filters.max_dimensions.is_empty():
            results = [p for p in results if _within_max(p, filters.max_dimensions)]

        results = self._sort(results, filters)

        total = len(results)
        start = (page - 1) * page_size
        page_items = results[start:start + page_size]

        logger.info(f"Search matched {total} products, returning {len(page_items)} (page {page})")
        return SearchResult(
            products=page_items,
            total=total,
            page=page,
            page_size=page_size,
            filters=filters,
        )

    def _sort(self, products: List[Product], filters: SearchFilters) -> List[Product]:
        reverse = filters.sort_order == "desc"

        if filters.sort_by == "price":
            return sorted(products, key=lambda p: p.price, reverse=reverse)
        if filters.sort_by == "name":
            return sorted(products, key=lambda p: p.name.lower(), reverse=reverse)
        if filters.sort_by == "relevance" and filters.query:
            # Most relevant first; sort_order does not apply to relevance
            return sorted(
                products,
                key=lambda p: self.calculate_relevance_score(p, filters.query),
                reverse=True,
            )
        # popularity has no signal in the catalog yet; keep catalog order
        return products

    def calculate_relevance_score(self, product: Product, query: str) -> float:
        """
        Score how well a product matches a free-text query

        Name match +10, description +5, category +3, each matching style tag +2.
        """
        query = query.lower()
        score = 0.0

        if query in product.name.lower():
            score += 10
        if product.description and query in product.description.lower():
            score += 5
        if query in product.category.lower():
            score += 3
        for tag in product.style_tags:
            if query in tag.lower():
                score += 2

        return score

    def calculate_similarity(self, first: Product, second: Product) -> float:
        """Similarity from shared category, shared style tags and price closeness"""
        score = 0.0

        if first.category == second.category:
            score += 5

        common_tags = [tag for tag in first.style_tags if tag in second.style_tags]
        score += len(common_tags) * 2

        max_price = max(first.price, second.price)
        if max_price > 0:
            score += (1 - abs(first.price - second.price) / max_price) * 3

        return score

    def get_similar_products(
        self,
        products: List[Product],
        product_id: str,
        limit: int = 5,
    ) -> List[Product]:
        """
        Find the products most similar to a given one

        Args:
            products: Catalog snapshot
            product_id: Reference product
            limit: Maximum results

        Returns:
            Similar products, most similar first; empty when product_id is unknown
        """
        reference: Optional[Product] = next((p for p in products if p.id == product_id), None)
        if reference is None:
            return []

        others = [p for p in products if p.id != product_id]
        ranked = sorted(others, key=lambda p: self.calculate_similarity(reference, p), reverse=True)
        return ranked[:limit]


search_service = SearchService()
