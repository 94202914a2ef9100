"""
API endpoints for bills.
All endpoints have prefix /api/bills/
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bank_app.core.database import get_db
from bank_app.schemas import BillRead
from bank_app.services.bills import BillService

router = APIRouter(prefix="/api/bills", tags=["bills"])


@router.get("/user/{user_id}", response_model=BillRead)
def get_user_bill(user_id: int, db: Session = Depends(get_db)):
    """Gets the bill of a user."""
    bill = BillService(db).get_by_user_id(user_id)
    if bill is None:
        raise HTTPException(status_code=404, detail="Bill not found")
    return BillRead(
        id=bill.id,
        user_id=bill.user_id,
        account_bill=bill.account_bill,
        available_funds=bill.available_funds,
        currency_id=bill.currency_id,
        currency=bill.currency.name,
    )
