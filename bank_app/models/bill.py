"""
Model rachunku (konta) użytkownika.
"""

from sqlalchemy import Column, String, Float, Integer, ForeignKey
from sqlalchemy.orm import relationship
from bank_app.core.database import Base


class Bill(Base):
    """User's account: number, balance and currency."""
    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    account_bill = Column(String(26), unique=True, nullable=False)  # 26-digit account number
    available_funds = Column(Float, default=0.0, nullable=False)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=False)

    user = relationship("User", back_populates="bill")
    currency = relationship("Currency", back_populates="bills")
