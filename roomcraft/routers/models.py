"""
3D model lookup routes
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from roomcraft.core.exceptions import CatalogUnavailable
from roomcraft.schemas.common import ApiResponse
from roomcraft.schemas.products import ModelUrl
from roomcraft.services.catalog_service import CatalogService, get_catalog

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/models", tags=["models"])


@router.get("/{product_id}", response_model=ApiResponse[ModelUrl], response_model_exclude_none=True)
async def get_model_url(product_id: str, catalog: CatalogService = Depends(get_catalog)):
    """3D model URL of a product, empty when it has none"""
    try:
        product = await catalog.get_product_by_id(product_id)
    except CatalogUnavailable as e:
        logger.error(f"Error fetching model URL for {product_id}: {e}", exc_info=True)
        return JSONResponse(status_code=500, content=ApiResponse.failure("Failed to fetch model URL"))

    if product is None:
        return JSONResponse(status_code=404, content=ApiResponse.failure("Product not found"))
    return ApiResponse(success=True, data=ModelUrl(url=product.model_3d_url or ""))
