"""
API endpoints for currencies.
All endpoints have prefix /api/currency/
"""

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from bank_app.core.database import get_db
from bank_app.schemas import CurrencyRead
from bank_app.services.currency import CurrencyService

router = APIRouter(prefix="/api/currency", tags=["currency"])


@router.get("/", response_model=List[CurrencyRead])
def get_currencies(db: Session = Depends(get_db)):
    """Gets list of all currencies with their exchange rates."""
    return CurrencyService(db).get_all()


@router.get("/{currency_id}", response_model=CurrencyRead)
def get_currency(currency_id: int, db: Session = Depends(get_db)):
    """Gets a single currency."""
    currency = CurrencyService(db).get_by_id(currency_id)
    if currency is None:
        raise HTTPException(status_code=404, detail="Currency not found")
    return currency


@router.post("/refresh")
def refresh_rates(request: Request):
    """Triggers an exchange rate refresh now (skipped if one is already running)."""
    refresher = getattr(request.app.state, "refresher", None)
    if refresher is None:
        raise HTTPException(status_code=503, detail="Exchange rate refresh not available")
    return asdict(refresher.refresh_exchange_rates())
