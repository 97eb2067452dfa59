"""HTTP layer: routing, parameter validation and JSON error bodies."""
import base64

import pytest
from fastapi.testclient import TestClient

from customer_api.config import Settings
from customer_api.main import app
from customer_api.models import Currency, Language
from customer_api.models.base import get_db


@pytest.fixture
def client(db, store):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_list_customers(client, make_customer, subscribe):
    first = make_customer(email="ann@example.com", attrs={"EuCookieLawAccepted": "true"})
    make_customer(active=False)
    subscribe("ANN@example.com")

    response = client.get("/api/customers")

    assert response.status_code == 200
    [customer] = response.json()["customers"]
    assert customer["id"] == first.id
    assert customer["subscribed_to_newsletter"] is True
    assert customer["eu_cookie_law_accepted"] is True
    assert customer["billing_address"] is None
    assert response.headers["cache-control"] == "private, no-cache"


@pytest.mark.parametrize(
    "params, key",
    [
        ({"limit": 0}, "limit"),
        ({"limit": 251}, "limit"),
        ({"page": 0}, "page"),
        ({"since_id": -1}, "since_id"),
    ],
)
def test_list_rejects_bad_paging(client, params, key):
    response = client.get("/api/customers", params=params)

    assert response.status_code == 400
    assert key in response.json()["errors"]


def test_unparsable_parameter_uses_error_shape(client):
    response = client.get("/api/customers", params={"limit": "many"})

    assert response.status_code == 400
    assert "limit" in response.json()["errors"]


def test_count(client, make_customer):
    make_customer()
    make_customer(deleted=True)

    response = client.get("/api/customers/count")
    assert response.json() == {"count": 1}


def test_search(client, make_customer):
    john = make_customer(attrs={"FirstName": "John"})
    make_customer(attrs={"FirstName": "Jane"})

    response = client.get("/api/customers/search", params={"query": "first_name:John"})

    assert response.status_code == 200
    assert [c["id"] for c in response.json()["customers"]] == [john.id]
    assert response.json()["customers"][0]["first_name"] == "John"


def test_search_invalid_order_is_bad_request(client, make_customer):
    make_customer()

    response = client.get("/api/customers/search", params={"query": "email:example", "order": "password"})

    assert response.status_code == 400
    assert "order" in response.json()["errors"]


def test_get_customer_by_id(client, make_customer):
    customer = make_customer()

    response = client.get(f"/api/customers/{customer.id}")
    assert response.status_code == 200
    assert response.json()["customers"][0]["id"] == customer.id


def test_get_missing_customer(client):
    response = client.get("/api/customers/404")

    assert response.status_code == 404
    assert response.json() == {"errors": {"customer": ["not found"]}}


def test_get_customer_invalid_id(client):
    response = client.get("/api/customers/0")

    assert response.status_code == 400
    assert response.json() == {"errors": {"id": ["invalid id"]}}


def test_customer_language_roundtrip(client, db, make_customer):
    db.add(Language(id=3, name="French", language_culture="fr-FR"))
    db.commit()
    customer = make_customer()

    assert client.get(f"/api/customers/{customer.id}/language").status_code == 404

    response = client.put(f"/api/customers/{customer.id}/language", json={"language_id": 3})
    assert response.status_code == 200
    assert response.json()["language_id"] == 3

    response = client.get(f"/api/customers/{customer.id}/language")
    assert response.json()["language_culture"] == "fr-FR"


def test_customer_language_must_exist(client, make_customer):
    customer = make_customer()

    response = client.put(f"/api/customers/{customer.id}/language", json={"language_id": 99})
    assert response.status_code == 400
    assert "language_id" in response.json()["errors"]


def test_customer_currency_roundtrip(client, db, make_customer):
    db.add(Currency(id=2, name="Euro", currency_code="EUR"))
    db.commit()
    customer = make_customer()

    response = client.put(f"/api/customers/{customer.id}/currency", json={"currency_id": 2})
    assert response.status_code == 200
    assert response.json()["currency_id"] == 2
    assert client.get(f"/api/customers/{customer.id}/currency").json()["currency_code"] == "EUR"


def test_admin_menu_contains_api_entry(client):
    response = client.get("/admin/menu")

    assert response.status_code == 200
    configuration = next(c for c in response.json()["child_nodes"] if c["system_name"] == "Configuration")
    api_menu = next(c for c in configuration["child_nodes"] if c["system_name"] == "Api-Main-Menu")
    assert api_menu["child_nodes"][0]["url"] == "http://testserver/Admin/ApiAdmin/Settings"


class TestBasicAuthGate:

    @pytest.fixture(autouse=True)
    def credentials(self, monkeypatch):
        settings = Settings(api_user="api", api_pass="secret")
        monkeypatch.setattr("customer_api.middleware.security_middleware.get_settings", lambda: settings)

    def test_requests_without_credentials_are_rejected(self, client):
        response = client.get("/api/customers/count")

        assert response.status_code == 401
        assert response.json() == {"errors": {"authorization": ["not authenticated"]}}

    def test_valid_credentials_pass(self, client):
        token = base64.b64encode(b"api:secret").decode()
        response = client.get("/api/customers/count", headers={"Authorization": f"Basic {token}"})

        assert response.status_code == 200

    def test_health_stays_open(self, client):
        assert client.get("/health").status_code == 200

    def test_non_ascii_credentials_are_rejected(self, client):
        token = base64.b64encode("apié:secret".encode("utf-8")).decode()
        response = client.get("/api/customers/count", headers={"Authorization": f"Basic {token}"})

        assert response.status_code == 401
        assert response.json() == {"errors": {"authorization": ["not authenticated"]}}


def test_search_unknown_field_rejected_by_policy(client, make_customer, monkeypatch):
    make_customer()
    settings = Settings(search_unknown_field_policy="reject")
    monkeypatch.setattr("customer_api.services.customer_api_service.get_settings", lambda: settings)

    response = client.get("/api/customers/search", params={"query": "shoe_size:42"})

    assert response.status_code == 400
    assert response.json() == {"errors": {"query": ["unknown search field: shoesize"]}}
