"""
Recommendation Engine Core

Main orchestration class for product recommendations.

Per request: Filtering -> Calling -> Normalizing -> Ranking -> Done. A failed
model call or an unparseable reply moves to the fallback composer and then to
Ranking; only a catalog failure escapes to the caller.
"""
from datetime import datetime
from typing import List, Optional, Protocol

from roomcraft.core.config import settings
from roomcraft.core.exceptions import ExternalServiceError, ResponseParseError
from roomcraft.middleware.logging_middleware import get_logger
from roomcraft.schemas.products import Product
from roomcraft.services.llm_service import LLMService, llm_service
from roomcraft.utils.degradation import attempt

from .fallback_service import FallbackService, fallback_service
from .filtering_service import FilteringService, filtering_service
from .ranking_service import RankingService, ranking_service
from .response_normalizer import ResponseNormalizer, response_normalizer
from .schemas import Recommendation, RecommendationRequest

logger = get_logger(__name__)


class ProductSource(Protocol):
    """What the engine needs from the catalog store"""

    async def get_products(
        self,
        category: Optional[str] = None,
        style_tags: Optional[List[str]] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Product]:
        ...


def build_room_context(request: RecommendationRequest) -> str:
    """Describe the room and preferences as prompt text"""
    room = request.room_description
    if room is not None:
        style_preference = ", ".join(room.style_preference or []) or "none"
        lines = [
            f"Room dimensions: {room.length:g}ft x {room.width:g}ft. "
            f"Wall colors: {', '.join(room.wall_colors)}. "
            f"Lighting: {room.lighting}. "
            f"Style preference: {style_preference}."
        ]
        if room.height:
            lines.append(f"Ceiling height: {room.height:g}ft.")
        if room.floor_type:
            lines.append(f"Floor: {room.floor_type}.")
        if room.existing_furniture:
            lines.append(f"Existing furniture: {', '.join(room.existing_furniture)}.")
    else:
        lines = ["No room description provided."]

    prefs = request.preferences
    if prefs.style_tags:
        lines.append(f"Preferred styles: {', '.join(prefs.style_tags)}.")
    if prefs.color_palette:
        lines.append(f"Color palette: {', '.join(prefs.color_palette)}.")
    if prefs.material_preferences:
        lines.append(f"Materials: {', '.join(prefs.material_preferences)}.")
    if request.budget is not None:
        budget = request.budget
        lines.append(f"Budget: {budget.min:g}-{budget.max:g} {budget.currency}.")
    if request.room_photo_url:
        lines.append(f"Room photo: {request.room_photo_url}")

    return "\n".join(lines)


class RecommendationEngine:
    """
    Main Recommendation Engine

    Filters the catalog, asks the recommender model to pick from the
    candidates, normalizes its answer, tops it up from the catalog when it
    is short or missing, and ranks the result.
    """

    def __init__(
        self,
        llm: Optional[LLMService] = None,
        filtering: Optional[FilteringService] = None,
        normalizer: Optional[ResponseNormalizer] = None,
        fallback: Optional[FallbackService] = None,
        ranking: Optional[RankingService] = None,
    ):
        """Initialize the recommendation engine with all services"""
        self.llm_service = llm or llm_service
        self.filtering_service = filtering or filtering_service
        self.response_normalizer = normalizer or response_normalizer
        self.fallback_service = fallback or fallback_service
        self.ranking_service = ranking or ranking_service

        self.page_size = settings.recommendation_page_size
        self.min_results = settings.recommendation_min_results
        self.catalog_fetch_limit = settings.catalog_fetch_limit

    async def get_recommendations(
        self,
        request: RecommendationRequest,
        catalog: ProductSource,
    ) -> List[Recommendation]:
        """
        Get ranked product recommendations for a room

        Args:
            request: Room description, preferences and budget
            catalog: Catalog store

        Returns:
            Up to `recommendation_page_size` recommendations, ranked 1..N

        Raises:
            CatalogUnavailable: the catalog query failed
        """
        start_time = datetime.now()

        all_products = await catalog.get_products(limit=self.catalog_fetch_limit)
        filtered = self.filtering_service.filter_products(
            all_products,
            style_tags=request.preferences.style_tags,
            budget=request.budget,
        )

        if not filtered:
            self._log_done(start_time, "no_candidates", 0)
            return []

        room_context = build_room_context(request)

        async def ask_model() -> List[Recommendation]:
            raw_text = await self.llm_service.call_recommender(room_context, filtered)
            return self.response_normalizer.normalize(raw_text, filtered, all_products)

        outcome = await attempt(
            ask_model,
            lambda error: self.fallback_service.compose_fallback(filtered, None, self.page_size),
            recover_on=(ExternalServiceError, ResponseParseError),
            label="Recommender model",
        )

        candidates = outcome.value
        if outcome.degraded:
            strategy = "fallback"
        elif len(candidates) < self.min_results:
            strategy = "ai_partial_fill"
            candidates = self.fallback_service.compose_fallback(filtered, candidates, self.min_results)
        else:
            strategy = "ai"

        ranked = self.ranking_service.rank_recommendations(candidates, limit=self.page_size)
        self._log_done(start_time, strategy, len(ranked))
        return ranked

    def _log_done(self, start_time: datetime, strategy: str, count: int) -> None:
        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"Returning {count} recommendations "
            f"(processing time: {processing_time:.2f}s, strategy: {strategy})"
        )


# Global recommendation engine instance
recommendation_engine = RecommendationEngine()
