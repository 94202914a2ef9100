"""
Klient API kursów walut (format zgodny z Frankfurter).

Odpowiedź ``GET /latest?from=PLN``::

    {"amount": 1.0, "base": "PLN", "date": "2024-05-10", "rates": {"EUR": 0.23, "USD": 0.25}}
"""

import logging
from typing import Dict, Iterable, Optional

import httpx

from bank_app.core.exceptions import ExchangeRateFetchError

logger = logging.getLogger(__name__)


class ExchangeRatesClient:
    """REST client for the latest exchange rates against a base currency."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def get_latest(self, base: str, symbols: Optional[Iterable[str]] = None) -> Dict[str, float]:
        """
        Fetches the latest rates for ``base``.

        Args:
            base: Base currency code (e.g. 'PLN')
            symbols: Optional currency codes to limit the response to

        Returns:
            Mapping currency code -> units of that currency per 1 unit of base

        Raises:
            ExchangeRateFetchError: On transport errors, non-200 responses or malformed payloads
        """
        params = {"from": base}
        if symbols:
            params["to"] = ",".join(symbols)

        try:
            response = self._client.get(f"{self.base_url}/latest", params=params)
        except httpx.HTTPError as e:
            raise ExchangeRateFetchError(f"Exchange rate request failed: {e}") from e

        if response.status_code != 200:
            raise ExchangeRateFetchError(
                f"Exchange rate API returned {response.status_code}: {response.text[:200]}"
            )

        try:
            payload = response.json()
            rates = {str(code).upper(): float(value) for code, value in payload["rates"].items()}
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise ExchangeRateFetchError(f"Malformed exchange rate payload: {e}") from e

        logger.debug("Fetched exchange rates", extra={"base": base, "count": len(rates)})
        return rates

    def close(self):
        """Zamyka klienta HTTP."""
        self._client.close()
