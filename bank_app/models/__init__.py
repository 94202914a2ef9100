"""
Modele bazy danych - eksport wszystkich modeli.
"""

from bank_app.models.user import User
from bank_app.models.bill import Bill
from bank_app.models.currency import Currency
from bank_app.models.additional import Additional

__all__ = [
    "User",
    "Bill",
    "Currency",
    "Additional",
]
