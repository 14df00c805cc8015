"""
Unit tests for catalog search, relevance and similarity
"""
import pytest

from roomcraft.engines.recommendation.schemas import DimensionBounds, SearchFilters
from roomcraft.engines.recommendation.search_service import search_service
from tests.factories import make_product


class TestRelevanceScore:

    @pytest.mark.unit
    def test_all_fields_contribute(self):
        product = make_product(
            "Modern Sofa",
            category="furniture",
            style_tags=["modern", "mid-modern", "rustic"],
            description="A modern sofa",
        )

        # name 10 + description 5 + two matching tags 2 each
        assert search_service.calculate_relevance_score(product, "Modern") == 19

    @pytest.mark.unit
    def test_category_match(self):
        product = make_product("Oak Bench", category="furniture", style_tags=[], description=None)

        assert search_service.calculate_relevance_score(product, "furn") == 3

    @pytest.mark.unit
    def test_no_match(self):
        assert search_service.calculate_relevance_score(make_product("Lamp", style_tags=[]), "marble") == 0


class TestSimilarity:

    @pytest.mark.unit
    def test_same_category_shared_tags_and_price(self):
        a = make_product("A", 100, "furniture", ["modern", "minimal"])
        b = make_product("B", 80, "furniture", ["modern", "rustic"])

        # 5 category + 2 one shared tag + 3 * (1 - 20/100)
        assert search_service.calculate_similarity(a, b) == pytest.approx(9.4)

    @pytest.mark.unit
    def test_zero_prices(self):
        a = make_product("A", 0, "decor", [])
        b = make_product("B", 0, "tiles", [])

        assert search_service.calculate_similarity(a, b) == 0

    @pytest.mark.unit
    def test_similar_products_ordering(self, sample_catalog):
        sofa = next(p for p in sample_catalog if p.name == "Modern Sofa")

        similar = search_service.get_similar_products(sample_catalog, sofa.id, limit=3)

        assert len(similar) == 3
        assert sofa.id not in [p.id for p in similar]
        assert similar[0].name == "Minimalist Chair"

    @pytest.mark.unit
    def test_unknown_product_has_no_similar(self, sample_catalog):
        assert search_service.get_similar_products(sample_catalog, "missing") == []


class TestSearchProducts:

    @pytest.mark.unit
    def test_query_matches_tags_and_description(self, sample_catalog):
        result = search_service.search_products(sample_catalog, SearchFilters(query="ceramic"))

        assert {p.name for p in result.products} == {"Ceramic Floor Tiles", "Decorative Vase"}
        assert result.total == 2

    @pytest.mark.unit
    def test_price_and_category_filters(self, sample_catalog):
        filters = SearchFilters(category="furniture", min_price=200, max_price=500)

        result = search_service.search_products(sample_catalog, filters)

        assert {p.name for p in result.products} == {"Rustic Coffee Table", "Wooden Bookshelf"}

    @pytest.mark.unit
    def test_dimension_bounds(self):
        small = make_product("Small", dimensions={"length": 20, "width": 20, "height": 20})
        tall = make_product("Tall", dimensions={"length": 20, "width": 20, "height": 80})
        wide = make_product("Wide", dimensions={"length": 90, "width": 40, "height": 30})

        filters = SearchFilters(
            min_dimensions=DimensionBounds(height=25),
            max_dimensions=DimensionBounds(length=50),
        )
        result = search_service.search_products([small, tall, wide], filters)

        assert [p.name for p in result.products] == ["Tall"]

    @pytest.mark.unit
    def test_sort_by_price_desc(self, sample_catalog):
        result = search_service.search_products(sample_catalog, SearchFilters(sort_by="price", sort_order="desc"))

        prices = [p.price for p in result.products]
        assert prices == sorted(prices, reverse=True)

    @pytest.mark.unit
    def test_sort_by_name(self, sample_catalog):
        result = search_service.search_products(sample_catalog, SearchFilters(sort_by="name"))

        assert result.products[0].name == "Ceramic Floor Tiles"

    @pytest.mark.unit
    def test_sort_by_relevance(self, sample_catalog):
        result = search_service.search_products(sample_catalog, SearchFilters(query="modern", sort_by="relevance"))

        assert result.products[0].name == "Modern Sofa"

    @pytest.mark.unit
    def test_pagination_keeps_total(self, modern_catalog):
        result = search_service.search_products(modern_catalog, SearchFilters(), page=2, page_size=8)

        assert result.total == 20
        assert result.page == 2
        assert [p.id for p in result.products] == [p.id for p in modern_catalog[8:16]]

    @pytest.mark.unit
    def test_page_past_end_is_empty(self, modern_catalog):
        result = search_service.search_products(modern_catalog, SearchFilters(), page=5, page_size=10)

        assert result.products == []
        assert result.total == 20
