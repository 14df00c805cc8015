"""
Unit tests for final recommendation ranking
"""
import pytest

from roomcraft.engines.recommendation.ranking_service import ranking_service
from roomcraft.engines.recommendation.schemas import Recommendation
from tests.factories import make_product


def _rec(product, score, rank=1):
    return Recommendation(product=product, rank=rank, reasoning="test", match_score=score)


class TestRankRecommendations:
    """Tests for RankingService.rank_recommendations"""

    @pytest.mark.unit
    def test_sorts_by_score_and_renumbers(self):
        """Highest score first, ranks rewritten to 1..N"""
        a, b, c = make_product("A"), make_product("B"), make_product("C")
        ranked = ranking_service.rank_recommendations([_rec(a, 0.5, 1), _rec(b, 0.9, 2), _rec(c, 0.7, 3)])

        assert [r.product.name for r in ranked] == ["B", "C", "A"]
        assert [r.rank for r in ranked] == [1, 2, 3]

    @pytest.mark.unit
    def test_equal_scores_keep_incoming_order(self):
        """The sort is stable"""
        products = [make_product(f"P{i}") for i in range(5)]
        ranked = ranking_service.rank_recommendations([_rec(p, 0.7) for p in products])

        assert [r.product.name for r in ranked] == ["P0", "P1", "P2", "P3", "P4"]

    @pytest.mark.unit
    def test_duplicate_products_keep_first(self):
        """A product listed twice appears once, with its higher-ranked entry"""
        product = make_product("Dup")
        other = make_product("Other")
        ranked = ranking_service.rank_recommendations([_rec(product, 0.6), _rec(other, 0.8), _rec(product, 0.9)])

        assert [(r.product.name, r.match_score) for r in ranked] == [("Dup", 0.9), ("Other", 0.8)]

    @pytest.mark.unit
    def test_truncates_to_limit(self):
        """No more than limit recommendations are returned"""
        recs = [_rec(make_product(f"P{i}"), 0.5) for i in range(30)]

        ranked = ranking_service.rank_recommendations(recs, limit=16)

        assert len(ranked) == 16
        assert ranked[-1].rank == 16

    @pytest.mark.unit
    def test_empty_input(self):
        assert ranking_service.rank_recommendations([]) == []
