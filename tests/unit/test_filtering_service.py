"""
Unit tests for style-tag and budget filtering
"""
import pytest

from roomcraft.engines.recommendation.filtering_service import filtering_service
from roomcraft.engines.recommendation.schemas import BudgetRange
from tests.factories import make_product


class TestFilterProducts:
    """Tests for FilteringService.filter_products"""

    @pytest.mark.unit
    def test_no_filters_returns_catalog(self, sample_catalog):
        """Empty style tags and no budget keep every product"""
        assert filtering_service.filter_products(sample_catalog, style_tags=[], budget=None) == sample_catalog

    @pytest.mark.unit
    def test_style_tags_match_any(self, sample_catalog):
        """A product passes when it carries at least one requested tag"""
        result = filtering_service.filter_products(sample_catalog, style_tags=["rustic", "luxury"])

        assert [p.name for p in result] == ["Rustic Coffee Table", "Wooden Bookshelf", "Marble Tiles"]

    @pytest.mark.unit
    def test_budget_is_inclusive(self):
        """Prices equal to either bound are kept"""
        products = [make_product("Low", 100), make_product("Mid", 150), make_product("High", 200), make_product("Over", 200.01)]

        result = filtering_service.filter_products(products, budget=BudgetRange(min=100, max=200))

        assert [p.name for p in result] == ["Low", "Mid", "High"]

    @pytest.mark.unit
    def test_budget_excludes_cheap_product(self):
        """A $50 product is outside a 100-200 budget"""
        products = [make_product("Cheap Stool", 50)]

        assert filtering_service.filter_products(products, budget=BudgetRange(min=100, max=200)) == []

    @pytest.mark.unit
    def test_filters_commute(self, sample_catalog):
        """Filtering by tags then budget equals budget then tags"""
        budget = BudgetRange(min=10, max=500)
        tags = ["modern"]

        both = filtering_service.filter_products(sample_catalog, style_tags=tags, budget=budget)
        tags_first = filtering_service.filter_products(
            filtering_service.filter_products(sample_catalog, style_tags=tags), budget=budget
        )
        budget_first = filtering_service.filter_products(
            filtering_service.filter_products(sample_catalog, budget=budget), style_tags=tags
        )

        assert both == tags_first == budget_first

    @pytest.mark.unit
    def test_filter_is_idempotent(self, sample_catalog):
        """Applying the same filter twice changes nothing"""
        budget = BudgetRange(min=0, max=300)
        once = filtering_service.filter_products(sample_catalog, style_tags=["modern"], budget=budget)
        twice = filtering_service.filter_products(once, style_tags=["modern"], budget=budget)

        assert once == twice

    @pytest.mark.unit
    def test_inverted_budget_matches_nothing(self, sample_catalog):
        """min greater than max yields an empty result rather than an error"""
        assert filtering_service.filter_products(sample_catalog, budget=BudgetRange(min=500, max=100)) == []
