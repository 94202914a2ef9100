"""
Wyjątki domenowe aplikacji bankowej.
"""


class BankAppError(Exception):
    """Base class for application errors."""


class BootstrapError(BankAppError):
    """Startup initialization could not bring the database to its baseline state."""


class CurrencyNotFoundError(BankAppError):
    """A currency referenced by id or name does not exist."""

    def __init__(self, currency_id):
        self.currency_id = currency_id
        super().__init__(f"Currency not found: {currency_id}")


class DuplicateMainCurrencyError(BankAppError):
    """A second currency flagged as main was about to be inserted."""


class AccountBillGenerationError(BankAppError):
    """No unused account number could be generated."""


class ExchangeRateFetchError(BankAppError):
    """The exchange-rate provider returned an error or an unreadable payload."""
