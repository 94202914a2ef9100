"""
Pydantic models: inputs for service inserts and read models returned by the API.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from bank_app.core.security import check_password_length


class UserCreate(BaseModel):
    """Data for a new user; the password is plaintext here and hashed on insert."""
    login: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    surname: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_length(value)


class BillCreate(BaseModel):
    user_id: int
    account_bill: str
    currency_id: int
    available_funds: float = 0.0


class CurrencyCreate(BaseModel):
    id: int
    name: str
    main: bool = False


class AdditionalCreate(BaseModel):
    user_id: int


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    login: str
    name: str
    surname: str
    email: str
    created_at: datetime


class CurrencyRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    main: bool
    exchange_rate: float
    exchange_rate_sync_date: Optional[datetime] = None


class BillRead(BaseModel):
    """Bill with the currency name resolved."""
    id: int
    user_id: int
    account_bill: str
    available_funds: float
    currency_id: int
    currency: str
