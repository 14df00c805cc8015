"""
Unit tests for the fallback composer
"""
import pytest

from roomcraft.engines.recommendation.fallback_service import FALLBACK_MATCH_SCORE, fallback_service
from roomcraft.engines.recommendation.schemas import Recommendation
from tests.factories import make_product


class TestTotalFailure:
    """Fallback when the model produced nothing usable"""

    @pytest.mark.unit
    def test_takes_first_products_in_catalog_order(self, modern_catalog):
        """The first target_count filtered products are used, ranked 1..N"""
        result = fallback_service.compose_fallback(modern_catalog, None, target_count=16)

        assert [r.product.id for r in result] == [p.id for p in modern_catalog[:16]]
        assert [r.rank for r in result] == list(range(1, 17))
        assert all(r.match_score == FALLBACK_MATCH_SCORE for r in result)
        assert all(r.suggested_combinations == [] for r in result)

    @pytest.mark.unit
    def test_reasoning_mentions_category(self):
        """Reasoning is the templated preference message"""
        result = fallback_service.compose_fallback([make_product("Vase", category="decor")])

        assert result[0].reasoning == "This decor matches your preferences."

    @pytest.mark.unit
    def test_empty_catalog(self):
        """No products gives no recommendations and no error"""
        assert fallback_service.compose_fallback([], None) == []
        assert fallback_service.compose_fallback([], []) == []


class TestPartialFill:
    """Fallback topping up a short model answer"""

    @pytest.mark.unit
    def test_appends_missing_products_up_to_target(self, modern_catalog):
        """Existing entries are kept and new ones are added until the target"""
        existing = [
            Recommendation(product=modern_catalog[3], rank=1, reasoning="ai", match_score=0.95),
            Recommendation(product=modern_catalog[0], rank=2, reasoning="ai", match_score=0.9),
        ]

        result = fallback_service.compose_fallback(modern_catalog, existing, target_count=8)

        assert len(result) == 8
        assert result[:2] == existing
        added_ids = [r.product.id for r in result[2:]]
        assert modern_catalog[0].id not in added_ids
        assert modern_catalog[3].id not in added_ids
        assert added_ids == [p.id for p in modern_catalog if p.id not in {modern_catalog[0].id, modern_catalog[3].id}][:6]

    @pytest.mark.unit
    def test_partial_fill_reasoning(self, sample_catalog):
        """Added entries use the style-preference message"""
        result = fallback_service.compose_fallback(sample_catalog, [], target_count=1)

        assert result[0].reasoning == "This furniture matches your style preferences."
        assert result[0].match_score == 0.7

    @pytest.mark.unit
    def test_stops_when_catalog_runs_out(self):
        """Fewer products than the target gives as many as exist"""
        products = [make_product("Only One")]

        assert len(fallback_service.compose_fallback(products, [], target_count=8)) == 1
