"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from search_service.dependencies import get_search_service
from search_service.infrastructure.catalog import InMemoryCatalog
from search_service.main import create_app
from search_service.schemas import Product
from search_service.services import SearchService, SignalStore

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)

_counter = 0


def make_product(name: str = "Test Product", **overrides: Any) -> Product:
    """Build a catalog product with neutral defaults."""
    global _counter
    _counter += 1
    data: dict[str, Any] = {
        "id": f"p{_counter}",
        "name": name,
        "description": "",
        "category": "misc",
        "price": Decimal("100"),
        "stock_quantity": 0,
        "created_at": BASE_TIME + timedelta(days=_counter),
    }
    data.update(overrides)
    return Product(**data)


class FailingCatalog:
    """Catalog whose every call raises, to exercise degradation paths."""

    def __init__(self) -> None:
        self.query_count = 0

    async def query_products(self, filters, sort=(), limit=None, offset=0):
        self.query_count += 1
        raise RuntimeError("catalog unavailable")

    async def count_products(self, filters):
        self.query_count += 1
        raise RuntimeError("catalog unavailable")


@pytest.fixture
def product_factory() -> Callable[..., Product]:
    return make_product


@pytest.fixture
def sample_products() -> list[Product]:
    """A small storefront catalog."""
    return [
        make_product(
            "Summer Dress",
            id="dress-1",
            description="Light cotton dress for warm days",
            category="dresses",
            brand="Sunwear",
            tags=["summer", "cotton"],
            colors=["red", "white"],
            sizes=["S", "M"],
            price=Decimal("49.99"),
            stock_quantity=10,
            average_rating=4.5,
            total_reviews=12,
            sales_count=30,
            view_count=200,
        ),
        make_product(
            "Evening Gown",
            id="gown-1",
            description="Floor-length evening wear",
            category="dresses",
            brand="Noir",
            tags=["evening"],
            colors=["black"],
            sizes=["M", "L"],
            price=Decimal("199.00"),
            stock_quantity=2,
            average_rating=4.8,
            total_reviews=5,
            sales_count=8,
            view_count=90,
            is_featured=True,
        ),
        make_product(
            "Blue Running Shoes",
            id="shoes-1",
            description="Breathable trainers",
            category="footwear",
            brand="Stride",
            tags=["running", "sport"],
            colors=["blue"],
            sizes=["42", "43"],
            price=Decimal("89.50"),
            stock_quantity=0,
            average_rating=4.1,
            total_reviews=40,
            sales_count=120,
            view_count=800,
            is_sale=True,
        ),
        make_product(
            "Leather Bag",
            id="bag-1",
            description="Handmade leather shoulder bag",
            category="accessories",
            brand="Noir",
            tags=["leather"],
            colors=["brown"],
            price=Decimal("150.00"),
            stock_quantity=5,
            average_rating=3.9,
            total_reviews=3,
            sales_count=15,
            view_count=60,
            is_new=True,
        ),
        make_product(
            "Archived Dress",
            id="dress-archived",
            description="No longer sold",
            category="dresses",
            price=Decimal("10.00"),
            sales_count=999,
            is_active=False,
        ),
    ]


@pytest.fixture
def signal_store() -> SignalStore:
    return SignalStore()


@pytest.fixture
def catalog(sample_products: list[Product]) -> InMemoryCatalog:
    return InMemoryCatalog(sample_products)


@pytest.fixture
def search_service(catalog: InMemoryCatalog, signal_store: SignalStore) -> SearchService:
    return SearchService(catalog, signal_store)


@pytest.fixture
def app(search_service: SearchService) -> Any:
    """Create test application backed by the in-memory catalog."""
    app = create_app()
    app.dependency_overrides[get_search_service] = lambda: search_service
    return app


@pytest.fixture
def client(app: Any) -> TestClient:
    """Create synchronous test client."""
    return TestClient(app)


@pytest.fixture
def sample_user_id() -> str:
    """Sample user ID for tests."""
    return "test-user-123"
