"""Unit tests for facet and price-bucket suggestions."""

from decimal import Decimal

import pytest

from search_service.services.facets import FacetSummarizer
from tests.conftest import make_product


@pytest.fixture
def summarizer() -> FacetSummarizer:
    return FacetSummarizer()


class TestFacets:
    def test_empty_page(self, summarizer: FacetSummarizer) -> None:
        facets = summarizer.suggest_facets([])
        assert facets.categories == []
        assert facets.brands == []
        assert facets.colors == []
        assert facets.sizes == []
        assert facets.price_ranges == []

    def test_distinct_values(self, summarizer: FacetSummarizer, sample_products) -> None:
        facets = summarizer.suggest_facets(sample_products[:4])

        assert facets.categories == ["dresses", "footwear", "accessories"]
        assert facets.brands == ["Sunwear", "Noir", "Stride"]
        assert facets.colors == ["red", "white", "black", "blue", "brown"]
        assert facets.sizes == ["S", "M", "L", "42", "43"]

    def test_empty_values_skipped(self, summarizer: FacetSummarizer) -> None:
        facets = summarizer.suggest_facets([make_product("Plain", category="", brand="")])
        assert facets.categories == []
        assert facets.brands == []


class TestPriceRanges:
    def test_equal_width_buckets_include_maximum(self, summarizer: FacetSummarizer) -> None:
        products = [make_product(f"P{p}", price=Decimal(p)) for p in (10000, 20000, 35000, 50000)]

        ranges = summarizer.suggest_facets(products).price_ranges

        assert [(r.min, r.max) for r in ranges] == [
            (10000, 20000),
            (20000, 30000),
            (30000, 40000),
            (40000, 50000),
        ]
        assert [r.count for r in ranges] == [1, 1, 1, 1]

    @pytest.mark.parametrize(
        "prices",
        [
            [5],
            [5, 5, 5],
            [1, 2, 3, 4, 5, 6, 7, 8, 9, 10],
            [0.99, 19.99, 19.99, 250.5, 1000],
        ],
    )
    def test_counts_cover_whole_page(self, summarizer: FacetSummarizer, prices) -> None:
        ranges = summarizer.price_ranges(prices)
        assert len(ranges) == 4
        assert sum(r.count for r in ranges) == len(prices)

    def test_sub_unit_prices_keep_cent_bounds(self, summarizer: FacetSummarizer) -> None:
        ranges = summarizer.price_ranges([0.1, 0.4, 0.55, 0.7])

        assert [(r.min, r.max) for r in ranges] == [
            (0.1, 0.25),
            (0.25, 0.4),
            (0.4, 0.55),
            (0.55, 0.7),
        ]
        assert [r.count for r in ranges] == [1, 0, 1, 2]

    def test_single_price_lands_in_last_bucket(self, summarizer: FacetSummarizer) -> None:
        ranges = summarizer.price_ranges([42.0, 42.0])
        assert [r.count for r in ranges] == [0, 0, 0, 2]
