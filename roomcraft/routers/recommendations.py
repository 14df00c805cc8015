"""
Recommendation API routes
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from roomcraft.core.exceptions import CatalogUnavailable
from roomcraft.engines.recommendation.core import RecommendationEngine, recommendation_engine
from roomcraft.engines.recommendation.schemas import Recommendation, RecommendationRequest
from roomcraft.schemas.common import ApiResponse
from roomcraft.services.catalog_service import CatalogService, get_catalog

logger = logging.getLogger(__name__)
router = APIRouter(tags=["recommendations"])


def get_recommendation_engine() -> RecommendationEngine:
    return recommendation_engine


@router.post("/recommend", response_model=ApiResponse[List[Recommendation]], response_model_exclude_none=True)
async def recommend(
    request: RecommendationRequest,
    catalog: CatalogService = Depends(get_catalog),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """
    Recommend catalog products for a room

    The model and parse failures are absorbed by the engine's fallback, so
    only a catalog failure produces an error response.
    """
    try:
        recommendations = await engine.get_recommendations(request, catalog)
        return ApiResponse(success=True, data=recommendations)
    except CatalogUnavailable as e:
        logger.error(f"Error getting recommendations: {e}", exc_info=True)
        return JSONResponse(status_code=500, content=ApiResponse.failure("Failed to get recommendations"))
