import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from products_api.config import Settings
from products_api.main import create_app
from products_api.services.product_service import ProductStore

API_KEY = "test-secret"

PHONE = {
    "name": "Smartphone",
    "description": "6.1 inch OLED phone",
    "price": 799.99,
    "category": "Electronics",
    "inStock": True,
}


@pytest.fixture
def settings() -> Settings:
    return Settings(MONGO_URI="mongodb://localhost:27017", API_KEY=API_KEY, _env_file=None)


@pytest.fixture
def collection():
    return AsyncMongoMockClient(tz_aware=True)["products_test"]["products"]


@pytest.fixture
def store(collection) -> ProductStore:
    return ProductStore(collection)


@pytest.fixture
def app(settings, store):
    return create_app(settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app, headers={"x-api-key": API_KEY}, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def anon_client(app):
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


def make_product(**overrides) -> dict:
    product = dict(PHONE)
    product.update(overrides)
    return product
