"""
Recommendation Engine

Filters the catalog, asks the recommender model for picks, falls back to
catalog order when the model is unavailable, and ranks the result. Also
hosts catalog search and similarity.
"""

from .core import RecommendationEngine, build_room_context, recommendation_engine
from .fallback_service import FallbackService
from .filtering_service import FilteringService
from .ranking_service import RankingService
from .response_normalizer import ResponseNormalizer
from .schemas import (
    BudgetRange,
    Recommendation,
    RecommendationRequest,
    RoomDescription,
    SearchFilters,
    SearchResult,
    UserPreferences,
)
from .search_service import SearchService

__all__ = [
    "RecommendationEngine",
    "recommendation_engine",
    "build_room_context",
    "RecommendationRequest",
    "Recommendation",
    "RoomDescription",
    "UserPreferences",
    "BudgetRange",
    "SearchFilters",
    "SearchResult",
    "SearchService",
    "FilteringService",
    "RankingService",
    "FallbackService",
    "ResponseNormalizer",
]
