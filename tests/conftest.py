"""
Shared fixtures: an in-memory product repo standing in for the database,
a seeded catalog and a FastAPI TestClient wired to both.
"""
import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.domain.errors import StorageError
from storefront.domain.schemas import Product
from storefront.repos.cart_repo import MemoryCartRepo
from storefront.services.cart_service import CartAggregator
from storefront.services.catalog_service import CatalogStore

API_HEADERS = {"X-API-Version": "1.0"}


class FakeProductRepo:
    """Keeps the saved catalog in a list; set fail=True to break the next writes."""

    def __init__(self, products=None):
        self.products = [p.model_copy() for p in (products or [])]
        self.saves = 0
        self.fail = False

    def load_all(self):
        return [p.model_copy() for p in self.products]

    def save_all(self, products):
        if self.fail:
            raise StorageError("Failed to persist product")
        self.products = [p.model_copy() for p in products]
        self.saves += 1


@pytest.fixture
def sample_products():
    return [
        Product(id=1, name="Mug", price=9.99, category="Kitchen", description="Stoneware coffee mug"),
        Product(id=2, name="Apron", price=24.5, category="Kitchen", description="Cotton apron"),
        Product(id=3, name="Tote", price=15, category="Accessories", description="Canvas bag for market days"),
        Product(id=4, name="lamp", price=39.9, category="Home", description="Desk lamp"),
        Product(id=5, name="Notebook", price=6.75, category="Stationery"),
    ]


@pytest.fixture
def product_repo(sample_products):
    return FakeProductRepo(sample_products)


@pytest.fixture
def catalog(product_repo):
    return CatalogStore(product_repo)


@pytest.fixture
def cart_repo():
    return MemoryCartRepo(ttl_seconds=60)


@pytest.fixture
def carts(catalog, cart_repo):
    return CartAggregator(catalog, cart_repo)


@pytest.fixture
def app(catalog, cart_repo):
    return create_app(catalog, cart_repo)


@pytest.fixture
def test_client(app):
    return TestClient(app, headers=API_HEADERS)
