"""
API endpoints for users.
All endpoints have prefix /api/users/
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bank_app.core.database import get_db
from bank_app.core.exceptions import CurrencyNotFoundError
from bank_app.schemas import UserCreate, UserRead
from bank_app.services.accounts import open_account
from bank_app.services.currency import CurrencyService
from bank_app.services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", status_code=201)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Registers a user together with a bill in the main currency and an additional record."""
    user_service = UserService(db)
    if user_service.get_by_login(user_data.login):
        raise HTTPException(status_code=400, detail=f"Login '{user_data.login}' is already taken")
    if user_service.get_by_email(user_data.email):
        raise HTTPException(status_code=400, detail=f"Email '{user_data.email}' is already registered")

    main_currency = CurrencyService(db).get_main()
    if main_currency is None:
        raise HTTPException(status_code=503, detail="Currencies are not initialized yet")

    try:
        result = open_account(db, user_data, main_currency.id)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"Uniqueness error: {str(e.orig)}")
    except CurrencyNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=503, detail=str(e))

    return {
        "id": result.user_id,
        "account_bill": result.account_bill,
        "currency": main_currency.name,
        "message": "User registered",
    }


@router.get("/", response_model=List[UserRead])
def get_users(db: Session = Depends(get_db)):
    """Gets list of all users (without password hashes)."""
    return UserService(db).get_all()


@router.get("/{login}", response_model=UserRead)
def get_user(login: str, db: Session = Depends(get_db)):
    """Gets a user by login (without the password hash)."""
    user = UserService(db).get_by_login(login)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
