"""Unit tests for search option validation and product models."""

from decimal import Decimal

import pytest

from search_service.schemas import Product, RankedProduct, SearchOptions, SortMode, clamp_limit


class TestSearchOptionsDefaults:
    def test_defaults(self) -> None:
        options = SearchOptions()
        assert options.page == 1
        assert options.limit == 20
        assert options.min_price == Decimal("0")
        assert options.max_price == Decimal("10000000")
        assert options.sort_by is SortMode.RELEVANCE
        assert options.user_id is None
        assert options.offset == 0


class TestSearchOptionsClamping:
    @pytest.mark.parametrize("page, expected", [(-3, 1), (0, 1), ("abc", 1), (None, 1), ("4", 4)])
    def test_page(self, page, expected) -> None:
        assert SearchOptions(page=page).page == expected

    @pytest.mark.parametrize(
        "limit, expected",
        [(0, 1), (-5, 1), (500, 100), (None, 20), ("junk", 20), ("30", 30)],
    )
    def test_limit(self, limit, expected) -> None:
        assert SearchOptions(limit=limit).limit == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [("0", 1), ("abc", 10), ("500", 50), (None, 10), ("", 10), ("7", 7)],
    )
    def test_clamp_limit_helper(self, raw, expected) -> None:
        assert clamp_limit(raw, default=10, maximum=50) == expected

    def test_offset(self) -> None:
        assert SearchOptions(page=3, limit=25).offset == 50

    def test_prices(self) -> None:
        options = SearchOptions(min_price=-10, max_price="not-a-number")
        assert options.min_price == Decimal("0")
        assert options.max_price == Decimal("10000000")

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("price-asc", SortMode.PRICE_ASC),
            ("PRICE_DESC", SortMode.PRICE_DESC),
            ("popular", SortMode.POPULAR),
            ("sideways", SortMode.RELEVANCE),
            (None, SortMode.RELEVANCE),
        ],
    )
    def test_sort_mode(self, raw, expected) -> None:
        assert SearchOptions(sort_by=raw).sort_by is expected

    def test_comma_separated_lists(self) -> None:
        options = SearchOptions(colors="red, blue,,", sizes=["M", " ", None])
        assert options.colors == ["red", "blue"]
        assert options.sizes == ["M"]

    def test_blank_user_is_anonymous(self) -> None:
        assert SearchOptions(user_id="  ").user_id is None

    def test_accepts_camel_case(self) -> None:
        options = SearchOptions.model_validate({"minPrice": "5", "sortBy": "newest", "userId": "u1"})
        assert options.min_price == Decimal("5")
        assert options.sort_by is SortMode.NEWEST
        assert options.user_id == "u1"


class TestProduct:
    def test_null_columns_become_defaults(self) -> None:
        product = Product(id=7, name="Lamp", tags=None, brand=None, sales_count=None)
        assert product.id == "7"
        assert product.tags == []
        assert product.brand == ""
        assert product.sales_count == 0

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValueError):
            Product(id="x", name="Lamp", price=Decimal("-1"))

    def test_ranked_product_serializes_camel_case(self) -> None:
        ranked = RankedProduct.from_product(
            Product(id="x", name="Lamp", price=Decimal("12.50"), stock_quantity=3),
            relevance_score=42.0,
        )
        data = ranked.model_dump(mode="json", by_alias=True)
        assert data["relevanceScore"] == 42.0
        assert data["stockQuantity"] == 3
        assert data["price"] == 12.5
