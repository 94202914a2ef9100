"""
Model waluty wraz z kursem wymiany względem waluty głównej.
"""

from sqlalchemy import Column, String, Float, Integer, Boolean, DateTime
from sqlalchemy.orm import relationship
from bank_app.core.database import Base


class Currency(Base):
    """Currency. At most one row has main=True; rates are quoted against it."""
    __tablename__ = "currencies"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(3), unique=True, nullable=False)  # e.g. 'USD'
    main = Column(Boolean, default=False, nullable=False)
    exchange_rate = Column(Float, default=1.0, nullable=False)  # units per 1 of the main currency
    exchange_rate_sync_date = Column(DateTime, nullable=True)  # last successful refresh

    bills = relationship("Bill", back_populates="currency")
