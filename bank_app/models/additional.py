"""
Model danych dodatkowych użytkownika (sumy przelewów, historia salda).
"""

from sqlalchemy import Column, String, Float, Integer, ForeignKey
from sqlalchemy.orm import relationship
from bank_app.core.database import Base


class Additional(Base):
    """Per-user auxiliary record, created empty together with the user."""
    __tablename__ = "additionals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    account_balance_history = Column(String(1000), default="0,0", nullable=False)  # comma-separated balances
    incoming_transfers_sum = Column(Float, default=0.0, nullable=False)
    outgoing_transfers_sum = Column(Float, default=0.0, nullable=False)

    user = relationship("User", back_populates="additional")
