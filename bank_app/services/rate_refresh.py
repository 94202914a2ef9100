"""
Odświeżanie kursów walut.

Wywoływane po inicjalizacji walut przy starcie oraz co godzinę przez harmonogram.
Jednocześnie może trwać tylko jedno odświeżanie - kolejne wywołanie w tym czasie
jest pomijane.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from bank_app.core.database import session_scope
from bank_app.integrations.exchange_rates import ExchangeRatesClient
from bank_app.services.currency import CurrencyService

logger = logging.getLogger(__name__)

FALLBACK_BASE_CURRENCY = "PLN"

STATUS_UPDATED = "updated"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass
class RefreshResult:
    """Outcome of one refresh run."""
    status: str
    base: Optional[str] = None
    updated: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    error: Optional[str] = None


class CurrencyRateRefresher:
    """Updates stored exchange rates from the provider; never raises."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        client: ExchangeRatesClient,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.session_factory = session_factory
        self.client = client
        self.clock = clock
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    def refresh_exchange_rates(self) -> RefreshResult:
        """
        Fetches the latest rates against the main currency and stores them.

        Returns:
            RefreshResult - 'updated', 'skipped' (another refresh in flight) or 'failed'
        """
        if not self._lock.acquire(blocking=False):
            logger.info("Exchange rate refresh already running, skipping", extra={"event": "RATES_REFRESH_SKIPPED"})
            return RefreshResult(status=STATUS_SKIPPED)

        try:
            return self._refresh()
        except Exception as e:
            logger.error("Exchange rate refresh failed", exc_info=True, extra={
                "event": "RATES_REFRESH_FAILED",
                "error": str(e),
            })
            return RefreshResult(status=STATUS_FAILED, error=str(e))
        finally:
            self._lock.release()

    def _refresh(self) -> RefreshResult:
        with session_scope(self.session_factory) as db:
            currency_service = CurrencyService(db)
            currencies = currency_service.get_all()
            if not currencies:
                logger.warning("No currencies to refresh")
                return RefreshResult(status=STATUS_UPDATED)

            main = currency_service.get_main()
            base = main.name if main is not None else FALLBACK_BASE_CURRENCY

            others = [c for c in currencies if c.name != base]
            rates = self.client.get_latest(base, symbols=[c.name for c in others])
            synced_at = self.clock()

            result = RefreshResult(status=STATUS_UPDATED, base=base)
            for currency in currencies:
                if currency.name == base:
                    currency_service.update_exchange_rate(currency, 1.0, synced_at)
                    result.updated.append(currency.name)
                elif currency.name in rates:
                    currency_service.update_exchange_rate(currency, rates[currency.name], synced_at)
                    result.updated.append(currency.name)
                else:
                    result.missing.append(currency.name)

        if result.missing:
            logger.warning("No rate returned for some currencies", extra={"missing": result.missing})
        logger.info("Exchange rates refreshed", extra={
            "event": "RATES_REFRESHED",
            "base": base,
            "updated": result.updated,
        })
        return result
