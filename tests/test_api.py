"""
Testy endpointów API (bez uruchamiania lifespan - baza w pamięci przez dependency_overrides).
"""

import logging

import pytest
from fastapi.testclient import TestClient

from bank_app.bootstrap import DEFAULT_CURRENCIES
from bank_app.core.database import get_db, session_scope
from bank_app.schemas import CurrencyCreate
from bank_app.services.currency import CurrencyService
from main import app


@pytest.fixture
def client(session_factory, fake_refresher):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.ready = False
    app.state.refresher = fake_refresher
    yield TestClient(app)
    app.dependency_overrides.clear()
    app.state.ready = False
    app.state.refresher = None


@pytest.fixture
def seeded(session_factory):
    with session_scope(session_factory) as db:
        service = CurrencyService(db)
        for currency_id, name, main in DEFAULT_CURRENCIES:
            service.insert(CurrencyCreate(id=currency_id, name=name, main=main))


NEW_USER = {
    "login": "jkowalski",
    "name": "Jan",
    "surname": "Kowalski",
    "email": "jan.kowalski@bankapp.pl",
    "password": "haslo123",
}


class TestHealth:
    """Testy gotowości aplikacji."""

    def test_not_ready_before_bootstrap(self, client):
        response = client.get("/api/health")
        assert response.status_code == 503
        assert response.json() == {"status": "starting", "ready": False}

    def test_ready_after_bootstrap(self, client):
        app.state.ready = True
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["ready"] is True


class TestCurrencyEndpoints:
    """Testy endpointów walut."""

    def test_list_currencies(self, client, seeded):
        response = client.get("/api/currency/")
        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["USD", "PLN", "EUR"]

    def test_get_currency(self, client, seeded):
        response = client.get("/api/currency/2")
        assert response.status_code == 200
        assert response.json()["main"] is True

    def test_get_missing_currency(self, client, seeded):
        assert client.get("/api/currency/99").status_code == 404

    def test_refresh(self, client, fake_refresher):
        response = client.post("/api/currency/refresh")
        assert response.status_code == 200
        assert response.json()["status"] == "updated"
        assert fake_refresher.calls == 1


class TestUserEndpoints:
    """Testy rejestracji i pobierania użytkowników."""

    def test_register_opens_account_in_main_currency(self, client, seeded):
        response = client.post("/api/users/register", json=NEW_USER)

        assert response.status_code == 201
        body = response.json()
        assert body["currency"] == "PLN"
        assert len(body["account_bill"]) == 26

        bill = client.get(f"/api/bills/user/{body['id']}")
        assert bill.status_code == 200
        assert bill.json()["currency"] == "PLN"
        assert bill.json()["available_funds"] == 0

    def test_register_duplicate_login(self, client, seeded):
        assert client.post("/api/users/register", json=NEW_USER).status_code == 201

        duplicate = dict(NEW_USER, email="inny@bankapp.pl")
        response = client.post("/api/users/register", json=duplicate)

        assert response.status_code == 400
        assert "jkowalski" in response.json()["detail"]

    def test_register_without_currencies(self, client):
        response = client.post("/api/users/register", json=NEW_USER)
        assert response.status_code == 503

    def test_register_invalid_email(self, client, seeded):
        response = client.post("/api/users/register", json=dict(NEW_USER, email="not-an-email"))
        assert response.status_code == 422

    def test_get_user_hides_password(self, client, seeded):
        client.post("/api/users/register", json=NEW_USER)

        response = client.get("/api/users/jkowalski")

        assert response.status_code == 200
        assert response.json()["email"] == NEW_USER["email"]
        assert "password" not in response.json()

    def test_register_overlong_password(self, client, seeded):
        response = client.post("/api/users/register", json=dict(NEW_USER, password="x" * 80))

        assert response.status_code == 422
        assert client.get("/api/users/jkowalski").status_code == 404

    def test_list_users(self, client, seeded):
        client.post("/api/users/register", json=NEW_USER)
        client.post("/api/users/register", json=dict(NEW_USER, login="anowak", email="anna.nowak@bankapp.pl"))

        response = client.get("/api/users/")

        assert response.status_code == 200
        assert [u["login"] for u in response.json()] == ["jkowalski", "anowak"]
        assert all("password" not in u for u in response.json())

    def test_get_missing_user(self, client):
        assert client.get("/api/users/nobody").status_code == 404

    def test_get_missing_bill(self, client):
        assert client.get("/api/bills/user/123").status_code == 404


class RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestAccessLog:
    """Log dostępowy żądań HTTP."""

    def test_request_is_logged(self, client):
        handler = RecordingHandler()
        access_logger = logging.getLogger("bank_app.access")
        access_logger.addHandler(handler)
        access_logger.setLevel(logging.INFO)
        try:
            client.get("/api/users/nobody")
        finally:
            access_logger.removeHandler(handler)
            access_logger.setLevel(logging.NOTSET)

        records = [r for r in handler.records if r.getMessage() == "HTTP_REQUEST"]
        assert len(records) == 1
        assert records[0].method == "GET"
        assert records[0].path == "/api/users/nobody"
        assert records[0].status == 404
        assert records[0].duration_ms >= 0
