"""
Inicjalizacja bazy danych przy starcie aplikacji.

Kolejność: waluty (+ odświeżenie kursów) -> harmonogram odświeżania kursów -> konto administratora.
Każdy krok jest idempotentny - ponowne uruchomienie na zainicjalizowanej bazie niczego nie dodaje.
"""

import logging
from typing import Callable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bank_app.config import AdminProfile
from bank_app.core.database import session_scope
from bank_app.core.exceptions import BootstrapError
from bank_app.core.scheduler import RecurringTask
from bank_app.schemas import CurrencyCreate, UserCreate
from bank_app.services.accounts import AccountResult, open_account
from bank_app.services.additionals import AdditionalService
from bank_app.services.bills import BillService
from bank_app.services.currency import CurrencyService
from bank_app.services.rate_refresh import CurrencyRateRefresher
from bank_app.services.users import UserService

logger = logging.getLogger(__name__)

# (id, name, main)
DEFAULT_CURRENCIES: List[Tuple[int, str, bool]] = [
    (1, "USD", False),
    (2, "PLN", True),
    (3, "EUR", False),
]


class BootstrapSequencer:
    """
    Brings a freshly migrated database to its baseline state.

    Args:
        session_factory: Creates database sessions
        refresher: Exchange rate refresh collaborator
        admin: Admin account data
        recurring_refresh: Task calling the refresher on a schedule (None disables scheduling)
        default_currency_id: Currency assigned to the admin's bill
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        refresher: CurrencyRateRefresher,
        admin: AdminProfile,
        recurring_refresh: Optional[RecurringTask] = None,
        default_currency_id: int = 1,
    ):
        self.session_factory = session_factory
        self.refresher = refresher
        self.admin = admin
        self.recurring_refresh = recurring_refresh
        self.default_currency_id = default_currency_id

    def run(self):
        """Full startup sequence; any error is re-raised as BootstrapError."""
        try:
            self.ensure_currencies()
            self.schedule_recurring_rate_refresh()
            self.ensure_admin()
        except Exception as e:
            logger.error("Bootstrap failed", exc_info=True, extra={"event": "BOOTSTRAP_FAILED"})
            raise BootstrapError(f"Bootstrap failed: {e}") from e
        logger.info("Bootstrap finished", extra={"event": "BOOTSTRAP_DONE"})

    def ensure_currencies(self) -> int:
        """
        Seeds DEFAULT_CURRENCIES into an empty currency table (one transaction),
        then refreshes exchange rates - also when currencies were already present.

        Returns:
            Number of inserted currencies (0 if already seeded)
        """
        inserted = 0
        try:
            with session_scope(self.session_factory) as db:
                currency_service = CurrencyService(db)
                if not currency_service.get_all():
                    for currency_id, name, main in DEFAULT_CURRENCIES:
                        currency_service.insert(CurrencyCreate(id=currency_id, name=name, main=main))
                        inserted += 1
        except IntegrityError:
            # another instance seeded the currencies between lookup and insert
            with session_scope(self.session_factory) as db:
                seeded = bool(CurrencyService(db).get_all())
            if not seeded:
                raise
            inserted = 0
            logger.info("Currencies seeded concurrently")

        if inserted:
            logger.info("Currencies seeded", extra={"event": "CURRENCIES_SEEDED", "count": inserted})
        else:
            logger.info("Currencies already present, skipping seed")

        self.refresher.refresh_exchange_rates()
        return inserted

    def schedule_recurring_rate_refresh(self):
        """Starts the recurring exchange rate refresh (no-op when disabled or already running)."""
        if self.recurring_refresh is None:
            logger.info("Recurring exchange rate refresh disabled")
            return
        self.recurring_refresh.start()

    def ensure_admin(self) -> AccountResult:
        """
        Creates the admin with a bill and an additional record, unless the login exists.

        Returns:
            AccountResult; ``created`` is False when the admin already existed
        """
        existing = self._find_admin()
        if existing is not None:
            logger.info("Admin account already exists", extra={"login": self.admin.login})
            return existing

        user_data = UserCreate(
            login=self.admin.login,
            name=self.admin.name,
            surname=self.admin.surname,
            email=self.admin.email,
            password=self.admin.password,
        )
        try:
            with session_scope(self.session_factory) as db:
                result = open_account(db, user_data, self.default_currency_id)
        except IntegrityError:
            # another instance created the admin between lookup and insert
            existing = self._find_admin()
            if existing is None:
                raise
            logger.info("Admin account created concurrently", extra={"login": self.admin.login})
            return existing

        logger.info("Admin account created", extra={
            "event": "ADMIN_CREATED",
            "login": self.admin.login,
            "user_id": result.user_id,
        })
        return result

    def shutdown(self):
        if self.recurring_refresh is not None:
            self.recurring_refresh.stop()

    def _find_admin(self) -> Optional[AccountResult]:
        with session_scope(self.session_factory) as db:
            user = UserService(db).get_by_login(self.admin.login)
            if user is None:
                return None
            bill = BillService(db).get_by_user_id(user.id)
            additional = AdditionalService(db).get_by_user_id(user.id)
            return AccountResult(
                user_id=user.id,
                bill_id=bill.id if bill else None,
                additional_id=additional.id if additional else None,
                account_bill=bill.account_bill if bill else None,
                created=False,
            )
