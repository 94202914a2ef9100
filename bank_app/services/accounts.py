"""
Zakładanie konta: użytkownik, rachunek i dane dodatkowe jako jedna jednostka logiczna.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.orm import Session

from bank_app.core.exceptions import CurrencyNotFoundError
from bank_app.schemas import AdditionalCreate, BillCreate, UserCreate
from bank_app.services.additionals import AdditionalService
from bank_app.services.bills import BillService
from bank_app.services.currency import CurrencyService
from bank_app.services.users import UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountResult:
    """Identifiers produced by opening an account (or found for an existing one)."""
    user_id: int
    bill_id: Optional[int]
    additional_id: Optional[int]
    account_bill: Optional[str]
    created: bool


def open_account(db: Session, user_data: UserCreate, currency_id: int) -> AccountResult:
    """
    Creates User, then Bill, then Additional in the caller's transaction.

    The bill and the additional record reference the identifier of the user
    inserted here. Nothing is committed; the caller commits or rolls back.

    Args:
        db: Database session (open transaction)
        user_data: New user data
        currency_id: Currency of the new bill

    Returns:
        AccountResult with the generated identifiers

    Raises:
        CurrencyNotFoundError: If the currency does not exist
    """
    currency = CurrencyService(db).get_by_id(currency_id)
    if currency is None:
        raise CurrencyNotFoundError(currency_id)

    bill_service = BillService(db)

    user = UserService(db).insert(user_data)
    bill = bill_service.insert(BillCreate(
        user_id=user.id,
        account_bill=bill_service.generate_account_bill(),
        currency_id=currency.id,
    ))
    additional = AdditionalService(db).insert(AdditionalCreate(user_id=user.id))

    logger.info("Account opened", extra={
        "event": "ACCOUNT_OPENED",
        "user_id": user.id,
        "bill_id": bill.id,
        "currency": currency.name,
    })
    return AccountResult(
        user_id=user.id,
        bill_id=bill.id,
        additional_id=additional.id,
        account_bill=bill.account_bill,
        created=True,
    )
