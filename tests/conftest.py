import pytest
from fastapi.testclient import TestClient

from cafe_api.database import DocumentStore
from cafe_api.main import app
from cafe_api.services import get_order_service
from cafe_api.services.order_service import OrderService

TABLES = [
    {"id": 1, "name": "Table 1", "status": "available"},
    {"id": 2, "name": "Table 2", "status": "available"},
    {"id": 3, "name": "Patio", "status": "available"},
]

FOOD_ITEMS = [
    {"id": 1, "name": "Espresso", "category": "Coffee", "price": 2.5,
     "description": "Single shot"},
    {"id": 2, "name": "Butter Croissant", "category": "Pastry", "price": 3.25,
     "description": "All-butter"},
    {"id": 3, "name": "Avocado Toast", "category": "Breakfast", "price": 9.5,
     "description": "Sourdough, poached egg"},
]


@pytest.fixture
def store(tmp_path):
    store = DocumentStore(tmp_path / "db.json", lock_timeout=5)
    store.seed({"tables": TABLES, "foodItems": FOOD_ITEMS})
    return store


@pytest.fixture
def service(store):
    return OrderService(store, tax_rate=0.10)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_order_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
