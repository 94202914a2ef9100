"""
Serwis walut.
"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from bank_app.core.exceptions import DuplicateMainCurrencyError
from bank_app.models.currency import Currency
from bank_app.schemas import CurrencyCreate


class CurrencyService:
    """Currency lookups, inserts and exchange-rate updates within the caller's session."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Currency]:
        return self.db.query(Currency).order_by(Currency.id).all()

    def get_by_id(self, currency_id: int) -> Optional[Currency]:
        return self.db.query(Currency).filter(Currency.id == currency_id).first()

    def get_main(self) -> Optional[Currency]:
        return self.db.query(Currency).filter(Currency.main.is_(True)).first()

    def insert(self, currency_data: CurrencyCreate) -> Currency:
        """
        Inserts a currency with an explicit id.

        Raises:
            DuplicateMainCurrencyError: If a main currency already exists and this one is main too
        """
        if currency_data.main:
            existing_main = self.get_main()
            if existing_main is not None:
                raise DuplicateMainCurrencyError(
                    f"Main currency already set ({existing_main.name}), cannot add {currency_data.name} as main"
                )

        currency = Currency(
            id=currency_data.id,
            name=currency_data.name,
            main=currency_data.main,
            exchange_rate=1.0,
        )
        self.db.add(currency)
        self.db.flush()
        return currency

    def update_exchange_rate(self, currency: Currency, rate: float, synced_at: datetime) -> Currency:
        currency.exchange_rate = rate
        currency.exchange_rate_sync_date = synced_at
        self.db.flush()
        return currency
