"""
Product API routes
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from roomcraft.core.config import settings
from roomcraft.core.exceptions import CatalogUnavailable
from roomcraft.engines.recommendation.schemas import DimensionBounds, SearchFilters, SearchResult
from roomcraft.engines.recommendation.search_service import search_service
from roomcraft.schemas.common import ApiResponse
from roomcraft.schemas.products import Product, ProductCategory
from roomcraft.services.catalog_service import CatalogService, get_catalog

logger = logging.getLogger(__name__)
router = APIRouter(tags=["products"])


def _split_tags(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    tags = [tag.strip() for tag in value.split(",") if tag.strip()]
    return tags or None


def _bounds(length: Optional[float], width: Optional[float], height: Optional[float]) -> Optional[DimensionBounds]:
    if length is None and width is None and height is None:
        return None
    return DimensionBounds(length=length, width=width, height=height)


@router.get("/products", response_model=ApiResponse[List[Product]], response_model_exclude_none=True)
async def get_products(
    category: Optional[ProductCategory] = Query(None),
    search: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=settings.catalog_fetch_limit),
    offset: int = Query(0, ge=0),
    style_tags: Optional[str] = Query(None, alias="styleTags"),
    catalog: CatalogService = Depends(get_catalog),
):
    """List catalog products, newest first"""
    try:
        products = await catalog.get_products(
            category=category.value if category else None,
            style_tags=_split_tags(style_tags),
            search=search,
            limit=limit,
            offset=offset,
        )
        return ApiResponse(success=True, data=products)
    except CatalogUnavailable as e:
        logger.error(f"Error fetching products: {e}", exc_info=True)
        return JSONResponse(status_code=500, content=ApiResponse.failure("Failed to fetch products"))


@router.get("/products/{product_id}", response_model=ApiResponse[Product], response_model_exclude_none=True)
async def get_product(product_id: str, catalog: CatalogService = Depends(get_catalog)):
    """Get a single product"""
    try:
        product = await catalog.get_product_by_id(product_id)
    except CatalogUnavailable as e:
        logger.error(f"Error fetching product {product_id}: {e}", exc_info=True)
        return JSONResponse(status_code=500, content=ApiResponse.failure("Failed to fetch product"))

    if product is None:
        return JSONResponse(status_code=404, content=ApiResponse.failure("Product not found"))
    return ApiResponse(success=True, data=product)


@router.get(
    "/products/{product_id}/similar",
    response_model=ApiResponse[List[Product]],
    response_model_exclude_none=True,
)
async def get_similar_products(
    product_id: str,
    limit: int = Query(5, ge=1, le=50),
    catalog: CatalogService = Depends(get_catalog),
):
    """Products most similar to the given one"""
    try:
        products = await catalog.get_products(limit=settings.catalog_fetch_limit)
    except CatalogUnavailable as e:
        logger.error(f"Error fetching similar products for {product_id}: {e}", exc_info=True)
        return JSONResponse(status_code=500, content=ApiResponse.failure("Failed to fetch similar products"))

    similar = search_service.get_similar_products(products, product_id, limit=limit)
    return ApiResponse(success=True, data=similar)


@router.get("/search", response_model=ApiResponse[SearchResult], response_model_exclude_none=True)
async def search_products(
    query: Optional[str] = Query(None),
    category: Optional[ProductCategory] = Query(None),
    min_price: Optional[float] = Query(None, ge=0, alias="minPrice"),
    max_price: Optional[float] = Query(None, ge=0, alias="maxPrice"),
    style_tags: Optional[str] = Query(None, alias="styleTags"),
    min_length: Optional[float] = Query(None, ge=0, alias="minLength"),
    min_width: Optional[float] = Query(None, ge=0, alias="minWidth"),
    min_height: Optional[float] = Query(None, ge=0, alias="minHeight"),
    max_length: Optional[float] = Query(None, ge=0, alias="maxLength"),
    max_width: Optional[float] = Query(None, ge=0, alias="maxWidth"),
    max_height: Optional[float] = Query(None, ge=0, alias="maxHeight"),
    sort_by: Optional[str] = Query(None, alias="sortBy", pattern="^(price|name|relevance|popularity)$"),
    sort_order: str = Query("asc", alias="sortOrder", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, alias="pageSize"),
    catalog: CatalogService = Depends(get_catalog),
):
    """Search the catalog with filters, sorting and pagination"""
    filters = SearchFilters(
        query=query,
        category=category,
        min_price=min_price,
        max_price=max_price,
        style_tags=_split_tags(style_tags),
        min_dimensions=_bounds(min_length, min_width, min_height),
        max_dimensions=_bounds(max_length, max_width, max_height),
        sort_by=sort_by,
        sort_order=sort_order,
    )

    try:
        products = await catalog.get_products(limit=settings.catalog_fetch_limit)
    except CatalogUnavailable as e:
        logger.error(f"Error searching products: {e}", exc_info=True)
        return JSONResponse(status_code=500, content=ApiResponse.failure("Failed to search products"))

    result = search_service.search_products(products, filters, page=page, page_size=page_size)
    return ApiResponse(success=True, data=result)
