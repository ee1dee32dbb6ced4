"""
Offer registration, mock segment, log and health endpoint tests
"""

import pytest
import requests
from fastapi.testclient import TestClient

from cartoffer.app import create_app
from cartoffer.services.offer_store import InMemoryOfferStore
from cartoffer.services.segment_resolver import HttpSegmentResolver, StaticSegmentResolver


class TestOfferAPI:
    """POST/GET /api/v1/offer"""
    
    def test_add_offer_success(self, client, offer_store):
        response = client.post("/api/v1/offer", json={
            "restaurant_id": 1,
            "offer_type": "FLATX",
            "offer_value": 10,
            "customer_segment": ["p1"],
        })
        
        assert response.status_code == 200
        assert response.json() == {"response_msg": "success"}
        
        offers = offer_store.get_offers(1)
        assert len(offers) == 1
        assert offers[0].customer_segments == ("p1",)
    
    def test_list_offers_in_registration_order(self, client, add_offer):
        add_offer(3, "FLATX", 10, "p1")
        add_offer(3, "PERCENTAGE", 15, "p1", "p2")
        
        response = client.get("/api/v1/offer", params={"restaurant_id": 3})
        
        assert response.status_code == 200
        data = response.json()
        assert [o["offer_type"] for o in data] == ["FLATX", "PERCENTAGE"]
        assert data[1]["customer_segment"] == ["p1", "p2"]
        assert data[0]["offer_id"] < data[1]["offer_id"]
    
    def test_list_offers_unknown_restaurant(self, client):
        response = client.get("/api/v1/offer", params={"restaurant_id": 42})
        assert response.status_code == 200
        assert response.json() == []
    
    @pytest.mark.parametrize("body", [
        {"restaurant_id": 1, "offer_type": "BOGO", "offer_value": 10, "customer_segment": ["p1"]},
        {"restaurant_id": 1, "offer_type": "FLATX", "offer_value": -10, "customer_segment": ["p1"]},
        {"restaurant_id": 1, "offer_type": "FLATX", "offer_value": 10, "customer_segment": []},
        {"restaurant_id": 1, "offer_type": "FLATX", "offer_value": 10.5, "customer_segment": ["p1"]},
        {"restaurant_id": 0, "offer_type": "FLATX", "offer_value": 10, "customer_segment": ["p1"]},
        {"offer_type": "FLATX", "offer_value": 10, "customer_segment": ["p1"]},
    ])
    def test_add_offer_invalid_body(self, client, offer_store, body):
        response = client.post("/api/v1/offer", json=body)
        
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert offer_store.list_restaurants() == []
    
    def test_registration_logged(self, client, add_offer):
        add_offer(7, "PERCENTAGE", 25, "p3")
        
        logs = client.get("/api/v1/logs", params={"action": "offer_register"}).json()["data"]["logs"]
        
        assert len(logs) == 1
        assert logs[0]["detail"]["restaurant_id"] == 7
        assert logs[0]["detail"]["offer_type"] == "PERCENTAGE"


class TestUserSegmentAPI:
    """GET /api/v1/user_segment (mock collaborator)"""
    
    @pytest.mark.parametrize("user_id,segment", [(1, "p1"), (2, "p2"), (3, "p3")])
    def test_known_users(self, client, user_id, segment):
        response = client.get("/api/v1/user_segment", params={"user_id": user_id})
        assert response.status_code == 200
        assert response.json() == {"segment": segment}
    
    def test_unknown_user(self, client):
        response = client.get("/api/v1/user_segment", params={"user_id": 999})
        assert response.status_code == 404
        assert response.json()["success"] is False


def test_health_and_root(client):
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json() == {
        "status": "healthy",
        "version": "1.0.0-test",
        "database": "connected",
    }
    
    root = client.get("/")
    assert root.json()["name"] == "Cart Offer API (Test)"


def test_cart_with_http_segment_lookup(test_settings, client):
    """Cart app resolving segments through another app's mock endpoint"""
    resolver = HttpSegmentResolver("http://testserver", session=client)
    cart_app = create_app(test_settings, offer_store=InMemoryOfferStore(), segment_resolver=resolver)
    
    with TestClient(cart_app) as cart_client:
        cart_client.post("/api/v1/offer", json={
            "restaurant_id": 1,
            "offer_type": "PERCENTAGE",
            "offer_value": 10,
            "customer_segment": ["p2"],
        })
        
        ok = cart_client.post("/api/v1/cart/apply_offer",
                              json={"cart_value": 200, "user_id": 2, "restaurant_id": 1})
        unknown = cart_client.post("/api/v1/cart/apply_offer",
                                   json={"cart_value": 200, "user_id": 999, "restaurant_id": 1})
    
    assert ok.json() == {"cart_value": 180}
    assert unknown.status_code == 400
    assert unknown.json()["error_code"] == "USER_NOT_FOUND"


def test_segment_service_down_returns_503(test_settings):
    class DownSession:
        def get(self, url, params=None, timeout=None):
            raise requests.ConnectionError("connection refused")
    
    resolver = HttpSegmentResolver("http://localhost:1", session=DownSession())
    cart_app = create_app(test_settings, offer_store=InMemoryOfferStore(), segment_resolver=resolver)
    
    with TestClient(cart_app) as cart_client:
        cart_client.post("/api/v1/offer", json={
            "restaurant_id": 1,
            "offer_type": "FLATX",
            "offer_value": 10,
            "customer_segment": ["p1"],
        })
        response = cart_client.post("/api/v1/cart/apply_offer",
                                    json={"cart_value": 200, "user_id": 1, "restaurant_id": 1})
    
    assert response.status_code == 503
    assert response.json()["error_code"] == "SEGMENT_SERVICE_UNAVAILABLE"


class TestDuckDBBackedAPI:
    """Same endpoints with offers stored in DuckDB INTEGER columns"""
    
    @pytest.fixture
    def duckdb_client(self, test_settings, segment_resolver):
        cfg = test_settings.model_copy(update={"offer_store": "duckdb"})
        with TestClient(create_app(cfg, segment_resolver=segment_resolver)) as c:
            yield c
    
    def test_largest_int32_ids_accepted(self, duckdb_client):
        response = duckdb_client.post("/api/v1/offer", json={
            "restaurant_id": 2**31 - 1,
            "offer_type": "FLATX",
            "offer_value": 2**31 - 1,
            "customer_segment": ["p1"],
        })
        assert response.status_code == 200
        
        applied = duckdb_client.post("/api/v1/cart/apply_offer",
                                     json={"cart_value": 200, "user_id": 1, "restaurant_id": 2**31 - 1})
        assert applied.json() == {"cart_value": 0}
    
    @pytest.mark.parametrize("field", ["restaurant_id", "offer_value"])
    def test_oversized_offer_fields_rejected(self, duckdb_client, field):
        body = {
            "restaurant_id": 1,
            "offer_type": "FLATX",
            "offer_value": 10,
            "customer_segment": ["p1"],
        }
        body[field] = 2**40
        
        response = duckdb_client.post("/api/v1/offer", json=body)
        
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
    
    def test_oversized_ids_in_lookups_rejected(self, duckdb_client):
        applied = duckdb_client.post("/api/v1/cart/apply_offer",
                                     json={"cart_value": 200, "user_id": 1, "restaurant_id": 2**40})
        listed = duckdb_client.get("/api/v1/offer", params={"restaurant_id": 2**40})
        
        assert applied.status_code == 400
        assert listed.status_code == 400


class TestDatabaseUnavailable:
    """In-memory offers keep working when the operation log database cannot open"""
    
    def test_directory_as_database(self, test_settings, offer_store, segment_resolver, tmp_path):
        cfg = test_settings.model_copy(update={"database_url": f"duckdb://{tmp_path}"})
        app = create_app(cfg, offer_store=offer_store, segment_resolver=segment_resolver)
        
        with TestClient(app) as c:
            registered = c.post("/api/v1/offer", json={
                "restaurant_id": 1,
                "offer_type": "FLATX",
                "offer_value": 10,
                "customer_segment": ["p1"],
            })
            applied = c.post("/api/v1/cart/apply_offer",
                             json={"cart_value": 200, "user_id": 1, "restaurant_id": 1})
        
        assert registered.status_code == 200
        assert len(offer_store.get_offers(1)) == 1
        assert applied.status_code == 200
        assert applied.json() == {"cart_value": 190}
    
    def test_uncreatable_database_directory(self, test_settings, offer_store, segment_resolver, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        cfg = test_settings.model_copy(update={"database_url": f"duckdb://{blocker}/sub/x.duckdb"})
        app = create_app(cfg, offer_store=offer_store, segment_resolver=segment_resolver)
        
        with TestClient(app) as c:
            health = c.get("/health")
        
        assert health.status_code == 200
        assert health.json()["status"] == "unhealthy"


def test_resolver_closed_on_shutdown(test_settings, offer_store):
    class TrackingResolver(StaticSegmentResolver):
        closed = False
        
        def close(self):
            self.closed = True
    
    resolver = TrackingResolver({1: "p1"})
    with TestClient(create_app(test_settings, offer_store=offer_store, segment_resolver=resolver)):
        assert not resolver.closed
    
    assert resolver.closed
