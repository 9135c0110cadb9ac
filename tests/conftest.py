"""Shared fixtures for tests."""
import json
import pytest

from incremental_search import config as config_module
from incremental_search import server as server_module
from incremental_search.search_types import SearchConfig


SAMPLE_PRODUCTS = {
    "products": [
        {
            "id": "p1",
            "title": "Classic Tee",
            "category": "Apparel",
            "subtitle": "Soft cotton t-shirt",
            "description": "Everyday tee in heavyweight cotton",
        },
        {
            "id": "p2",
            "title": "Coffee Mug",
            "category": "Home",
            "subtitle": "Ceramic, 350ml",
            "description": "Glossy mug for coffee and tea",
        },
        {
            "id": "p3",
            "title": "Canvas Tote",
            "category": "Accessories",
            "subtitle": "Natural canvas bag",
            "description": "Sturdy tote for groceries",
        },
        {
            "id": "p4",
            "title": "Hoodie",
            "category": "Apparel",
            "subtitle": "Fleece pullover",
            "description": "Warm hoodie with a classic fit",
        },
    ]
}


@pytest.fixture
def products():
    """Return sample products as a list of dicts."""
    return [dict(p) for p in SAMPLE_PRODUCTS["products"]]


@pytest.fixture
def users():
    """Return sample users, some with nested fields."""
    return [
        {"id": "u1", "name": "Joanna Smith", "email": "joanna@example.com", "role": "admin",
         "address": {"city": "Boston"}},
        {"id": "u2", "name": "John Thomas", "email": "jt@example.com", "role": "customer",
         "address": {"city": "Austin"}},
        {"id": "u3", "name": "Bob Stone", "email": "bob@example.com", "role": "customer"},
        {"id": "u4", "name": "Mary Jane", "email": "mary.jane@example.com", "role": "customer",
         "address": None},
    ]


@pytest.fixture
def user_config():
    return SearchConfig(
        fields=["name", "email", "role"],
        get_label=lambda user: user["name"],
        get_key=lambda user: user["id"],
        debounce_ms=20,
        max_suggestions=5,
    )


@pytest.fixture
def sample_records_path(tmp_path):
    """Create a temporary records file with sample products."""
    records_file = tmp_path / "products.json"
    records_file.write_text(json.dumps(SAMPLE_PRODUCTS, indent=2))
    return records_file


@pytest.fixture(autouse=True)
def fresh_globals():
    """Reset the cached config and records around every test."""
    config_module.reset_config()
    server_module.reload_records()
    yield
    config_module.reset_config()
    server_module.reload_records()
