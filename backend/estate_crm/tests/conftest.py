"""
Pytest configuration and fixtures for backend testing.

Provides application fixtures wired to in-memory or SQLite stores, a
FastAPI test client and sample request payloads.
"""
import pytest
from typing import Dict, Generator
from fastapi.testclient import TestClient

from estate_crm.api.main import create_app
from estate_crm.config import Settings
from estate_crm.database.connection import DatabaseManager
from estate_crm.store import Stores
from estate_crm.store.factory import memory_stores, sql_stores
from estate_crm.ui import CrmData


@pytest.fixture
def settings() -> Settings:
    """Settings for a memory-backed application."""
    return Settings(store_backend="memory", auto_seed=True)


@pytest.fixture
def stores() -> Stores:
    """Fresh in-memory stores for each test."""
    return memory_stores()


@pytest.fixture
def seeded_stores(stores: Stores) -> Stores:
    """In-memory stores holding the example data."""
    for store in stores.all().values():
        store.ensure_seed()
    return stores


@pytest.fixture
def app(settings: Settings, seeded_stores: Stores):
    return create_app(settings=settings, stores=seeded_stores)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """FastAPI test client over seeded in-memory stores."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db() -> Generator[DatabaseManager, None, None]:
    """SQLite in-memory database."""
    manager = DatabaseManager("sqlite://")
    yield manager
    manager.dispose()


@pytest.fixture(params=["memory", "sql"])
def any_stores(request, db: DatabaseManager) -> Stores:
    """Stores for every locally runnable backend."""
    if request.param == "sql":
        return sql_stores(db)
    return memory_stores()


@pytest.fixture
def crm(seeded_stores: Stores) -> CrmData:
    """UI data layer over seeded in-memory stores."""
    return CrmData(seeded_stores)


@pytest.fixture
def sample_client_data() -> Dict:
    """Sample client data for testing."""
    return {
        "name": "Ann Lee",
        "email": "a@x.com",
        "phone": "1234567890",
        "status": "Lead",
    }


@pytest.fixture
def sample_property_data() -> Dict:
    """Sample property data for testing."""
    return {
        "name": "Harbor View Condo",
        "address": "12 Harbor Rd, Seaside",
        "price": 640000,
        "status": "For Sale",
        "imageUrl": "https://images.unsplash.com/photo-1512917774080-9991f1c4c750",
        "bedrooms": 2,
        "bathrooms": 1,
        "sqft": 950,
    }


@pytest.fixture
def sample_transaction_data() -> Dict:
    """Sample transaction data for testing."""
    return {
        "date": "2024-01-05",
        "description": "Commission from 12 Harbor Rd",
        "category": "Commission",
        "amount": 19200,
        "type": "Income",
    }


@pytest.fixture
def sample_contract_data() -> Dict:
    """Sample contract data for testing."""
    return {
        "propertyId": "prop-1",
        "clientId": "cli-2",
        "status": "Draft",
        "expiryDate": "2024-03-01T00:00:00Z",
        "amount": 750000,
    }
