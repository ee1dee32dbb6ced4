"""
Test configuration
Fixtures for the engine, the stores and an in-process API client
"""

import pytest
from fastapi.testclient import TestClient

from cartoffer.app import create_app
from cartoffer.config import Settings
from cartoffer.core.database import DatabaseManager
from cartoffer.models.offer import Offer, OfferType
from cartoffer.services.log_service import OperationLogService
from cartoffer.services.offer_store import InMemoryOfferStore
from cartoffer.services.segment_resolver import StaticSegmentResolver

# Mock server user mapping: user 1 -> p1, user 2 -> p2, user 3 -> p3
TEST_SEGMENTS = {1: "p1", 2: "p2", 3: "p3"}


@pytest.fixture
def test_settings():
    """Test settings, in-memory database and store"""
    return Settings(
        database_url="duckdb://:memory:",
        offer_store="memory",
        segment_source="static",
        api_title="Cart Offer API (Test)",
        api_version="1.0.0-test",
        debug=True,
    )


@pytest.fixture
def test_db():
    db = DatabaseManager("duckdb://:memory:")
    db.init_database()
    yield db
    db.close()


@pytest.fixture
def log_service(test_db):
    return OperationLogService(test_db)


@pytest.fixture
def offer_store():
    return InMemoryOfferStore()


@pytest.fixture
def segment_resolver():
    return StaticSegmentResolver(TEST_SEGMENTS)


@pytest.fixture
def app_instance(test_settings, offer_store, segment_resolver):
    return create_app(test_settings, offer_store=offer_store, segment_resolver=segment_resolver)


@pytest.fixture
def client(app_instance):
    with TestClient(app_instance) as c:
        yield c


@pytest.fixture
def make_offer():
    """Build an Offer; ids follow call order so the first call is the first registered"""
    counter = {"next": 1}
    
    def _make(offer_type, offer_value, segments=("p1",), restaurant_id=1):
        offer = Offer(
            offer_id=counter["next"],
            restaurant_id=restaurant_id,
            offer_type=OfferType(offer_type),
            offer_value=offer_value,
            customer_segments=tuple(segments),
        )
        counter["next"] += 1
        return offer
    
    return _make


@pytest.fixture
def add_offer(client):
    """Register an offer through the API, as the cart suite does"""
    
    def _add(restaurant_id, offer_type, offer_value, *segments):
        response = client.post(
            "/api/v1/offer",
            json={
                "restaurant_id": restaurant_id,
                "offer_type": offer_type,
                "offer_value": offer_value,
                "customer_segment": list(segments),
            }
        )
        assert response.status_code == 200, response.text
        return response
    
    return _add


@pytest.fixture
def apply_offer(client):
    
    def _apply(cart_value, user_id, restaurant_id):
        return client.post(
            "/api/v1/cart/apply_offer",
            json={
                "cart_value": cart_value,
                "user_id": user_id,
                "restaurant_id": restaurant_id,
            }
        )
    
    return _apply
