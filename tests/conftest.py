"""
Wspólne fixture'y testów: baza SQLite w pamięci i atrapa odświeżania kursów.
"""

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bank_app.config import AdminProfile
from bank_app.core.database import build_engine, init_db
from bank_app.services.rate_refresh import RefreshResult


class FakeRefresher:
    """Records refresh calls instead of calling the exchange rate API."""

    def __init__(self):
        self.calls = 0

    def refresh_exchange_rates(self):
        self.calls += 1
        return RefreshResult(status="updated", base="PLN")


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_refresher():
    return FakeRefresher()


@pytest.fixture
def admin_profile():
    return AdminProfile(
        login="admin",
        name="Adam",
        surname="Nowak",
        email="admin@bankapp.pl",
        password="s3cret-admin",
    )
