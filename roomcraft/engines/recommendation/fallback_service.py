"""
Fallback Composer

Builds deterministic recommendations straight from the filtered catalog when
the recommender model is unavailable or returns too little.
"""
import logging
from typing import List, Optional

from roomcraft.schemas.products import Product

from .schemas import Recommendation

logger = logging.getLogger(__name__)

FALLBACK_MATCH_SCORE = 0.7
TOTAL_FAILURE_REASONING = "This {category} matches your preferences."
PARTIAL_FILL_REASONING = "This {category} matches your style preferences."


class FallbackService:
    """Composes recommendations without the model. Never raises."""

    def compose_fallback(
        self,
        filtered_products: List[Product],
        existing_recommendations: Optional[List[Recommendation]] = None,
        target_count: int = 16,
    ) -> List[Recommendation]:
        """
        Compose a fallback recommendation list

        Args:
            filtered_products: Filtered catalog, in catalog order
            existing_recommendations: None when the model call failed outright;
                otherwise the normalized recommendations to top up
            target_count: Desired list length

        Returns:
            existing_recommendations followed by generated entries, at most
            target_count long unless existing was already longer
        """
        if existing_recommendations is None:
            composed = self._generate(filtered_products, [], target_count, TOTAL_FAILURE_REASONING)
            logger.info(f"Total-failure fallback produced {len(composed)} recommendations")
            return composed

        added = self._generate(filtered_products, existing_recommendations, target_count, PARTIAL_FILL_REASONING)
        logger.info(f"Partial-fill fallback appended {len(added)} recommendations to {len(existing_recommendations)}")
        return list(existing_recommendations) + added

    def _generate(
        self,
        filtered_products: List[Product],
        existing: List[Recommendation],
        target_count: int,
        reasoning_template: str,
    ) -> List[Recommendation]:
        present = {rec.product.id for rec in existing}
        generated: List[Recommendation] = []

        for product in filtered_products:
            if len(existing) + len(generated) >= target_count:
                break
            if product.id in present:
                continue
            present.add(product.id)
            generated.append(
                Recommendation(
                    product=product,
                    rank=len(existing) + len(generated) + 1,
                    reasoning=reasoning_template.format(category=product.category),
                    match_score=FALLBACK_MATCH_SCORE,
                    suggested_combinations=[],
                )
            )

        return generated


fallback_service = FallbackService()
