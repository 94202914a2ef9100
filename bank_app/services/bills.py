"""
Serwis rachunków - generowanie numerów kont i zapis rachunków.
"""

import secrets
from typing import Optional
from sqlalchemy.orm import Session

from bank_app.core.exceptions import AccountBillGenerationError
from bank_app.models.bill import Bill
from bank_app.schemas import BillCreate

ACCOUNT_BILL_LENGTH = 26
MAX_GENERATION_ATTEMPTS = 10


class BillService:
    """Bill lookups, account number generation and inserts within the caller's session."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_user_id(self, user_id: int) -> Optional[Bill]:
        return self.db.query(Bill).filter(Bill.user_id == user_id).first()

    def get_by_account_bill(self, account_bill: str) -> Optional[Bill]:
        return self.db.query(Bill).filter(Bill.account_bill == account_bill).first()

    @staticmethod
    def random_account_bill() -> str:
        """Generuje losowy 26-cyfrowy numer konta."""
        return "".join(str(secrets.randbelow(10)) for _ in range(ACCOUNT_BILL_LENGTH))

    def generate_account_bill(self) -> str:
        """
        Generates an account number not yet used by any bill.

        Returns:
            26-digit account number

        Raises:
            AccountBillGenerationError: If every attempt hit an existing number
        """
        for _ in range(MAX_GENERATION_ATTEMPTS):
            account_bill = self.random_account_bill()
            if self.get_by_account_bill(account_bill) is None:
                return account_bill
        raise AccountBillGenerationError(
            f"Could not generate an unused account number in {MAX_GENERATION_ATTEMPTS} attempts"
        )

    def insert(self, bill_data: BillCreate) -> Bill:
        bill = Bill(
            user_id=bill_data.user_id,
            account_bill=bill_data.account_bill,
            available_funds=bill_data.available_funds,
            currency_id=bill_data.currency_id,
        )
        self.db.add(bill)
        self.db.flush()
        return bill
