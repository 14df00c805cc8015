"""
Ranking Service for final recommendation ordering
"""
import logging
from typing import List

from .schemas import Recommendation

logger = logging.getLogger(__name__)


class RankingService:
    """Service for ranking recommendations"""

    def rank_recommendations(self, recommendations: List[Recommendation], limit: int = 16) -> List[Recommendation]:
        """
        Order recommendations by match score and renumber them

        The sort is stable, so equal scores keep their incoming order. A
        product appearing more than once keeps its first occurrence.

        Args:
            recommendations: Candidates from the model and/or the fallback
            limit: Page size

        Returns:
            At most `limit` recommendations with ranks 1..N
        """
        ordered = sorted(recommendations, key=lambda rec: rec.match_score, reverse=True)

        ranked: List[Recommendation] = []
        seen_ids = set()
        for rec in ordered:
            if rec.product.id in seen_ids:
                continue
            seen_ids.add(rec.product.id)
            ranked.append(rec.model_copy(update={"rank": len(ranked) + 1}))
            if len(ranked) == limit:
                break

        logger.info(f"Ranked {len(recommendations)} candidates into {len(ranked)} recommendations")
        return ranked


ranking_service = RankingService()
