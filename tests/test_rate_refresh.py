"""
Testy odświeżania kursów walut (klient HTTP zastąpiony przez httpx.MockTransport).
"""

from datetime import datetime

import httpx
import pytest

from bank_app.bootstrap import DEFAULT_CURRENCIES
from bank_app.core.database import session_scope
from bank_app.core.exceptions import ExchangeRateFetchError
from bank_app.integrations.exchange_rates import ExchangeRatesClient
from bank_app.schemas import CurrencyCreate
from bank_app.services.currency import CurrencyService
from bank_app.services.rate_refresh import CurrencyRateRefresher

SYNC_TIME = datetime(2024, 5, 10, 14, 0, 0)


def rates_transport(rates, status_code=200, seen=None):
    def handler(request):
        if seen is not None:
            seen.append(request)
        if status_code != 200:
            return httpx.Response(status_code, text="upstream error")
        base = request.url.params["from"]
        return httpx.Response(200, json={"amount": 1.0, "base": base, "date": "2024-05-10", "rates": rates})
    return httpx.MockTransport(handler)


def make_refresher(session_factory, transport):
    client = ExchangeRatesClient("https://rates.test", transport=transport)
    return CurrencyRateRefresher(session_factory, client, clock=lambda: SYNC_TIME)


@pytest.fixture
def seeded(session_factory):
    with session_scope(session_factory) as db:
        service = CurrencyService(db)
        for currency_id, name, main in DEFAULT_CURRENCIES:
            service.insert(CurrencyCreate(id=currency_id, name=name, main=main))
    return session_factory


def rates_by_name(db):
    return {c.name: c for c in CurrencyService(db).get_all()}


class TestExchangeRatesClient:
    """Testy klienta API kursów."""

    def test_requests_base_and_symbols(self):
        seen = []
        client = ExchangeRatesClient("https://rates.test/", transport=rates_transport({"USD": 0.25}, seen=seen))

        rates = client.get_latest("PLN", symbols=["USD", "EUR"])

        assert rates == {"USD": 0.25}
        assert seen[0].url.path == "/latest"
        assert seen[0].url.params["from"] == "PLN"
        assert seen[0].url.params["to"] == "USD,EUR"

    def test_error_status_raises(self):
        client = ExchangeRatesClient("https://rates.test", transport=rates_transport({}, status_code=502))
        with pytest.raises(ExchangeRateFetchError):
            client.get_latest("PLN")

    def test_malformed_payload_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"base": "PLN"}))
        client = ExchangeRatesClient("https://rates.test", transport=transport)
        with pytest.raises(ExchangeRateFetchError):
            client.get_latest("PLN")


class TestCurrencyRateRefresher:
    """Testy odświeżania kursów zapisanych w bazie."""

    def test_updates_rates_against_main_currency(self, seeded, db):
        refresher = make_refresher(seeded, rates_transport({"USD": 0.25, "EUR": 0.23}))

        result = refresher.refresh_exchange_rates()

        assert result.status == "updated"
        assert result.base == "PLN"
        assert sorted(result.updated) == ["EUR", "PLN", "USD"]
        currencies = rates_by_name(db)
        assert currencies["PLN"].exchange_rate == 1.0
        assert currencies["USD"].exchange_rate == 0.25
        assert currencies["EUR"].exchange_rate == 0.23
        assert all(c.exchange_rate_sync_date == SYNC_TIME for c in currencies.values())

    def test_missing_rate_is_reported(self, seeded, db):
        refresher = make_refresher(seeded, rates_transport({"USD": 0.25}))

        result = refresher.refresh_exchange_rates()

        assert result.status == "updated"
        assert result.missing == ["EUR"]
        currencies = rates_by_name(db)
        assert currencies["EUR"].exchange_rate == 1.0
        assert currencies["EUR"].exchange_rate_sync_date is None

    def test_api_failure_does_not_raise(self, seeded, db):
        refresher = make_refresher(seeded, rates_transport({}, status_code=500))

        result = refresher.refresh_exchange_rates()

        assert result.status == "failed"
        assert "500" in result.error
        assert all(c.exchange_rate_sync_date is None for c in CurrencyService(db).get_all())

    def test_connection_error_does_not_raise(self, seeded):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        refresher = make_refresher(seeded, httpx.MockTransport(handler))

        assert refresher.refresh_exchange_rates().status == "failed"
        assert not refresher.is_running

    def test_skips_when_already_running(self, seeded):
        seen = []
        refresher = make_refresher(seeded, rates_transport({"USD": 0.25, "EUR": 0.23}, seen=seen))

        refresher._lock.acquire()
        try:
            result = refresher.refresh_exchange_rates()
        finally:
            refresher._lock.release()

        assert result.status == "skipped"
        assert seen == []

    def test_empty_table_is_noop(self, session_factory):
        seen = []
        refresher = make_refresher(session_factory, rates_transport({}, seen=seen))

        result = refresher.refresh_exchange_rates()

        assert result.status == "updated"
        assert seen == []
