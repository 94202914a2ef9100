"""
Model użytkownika aplikacji bankowej.
"""

from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import relationship
from bank_app.core.database import Base


class User(Base):
    """Bank customer (or the admin). Identity for lookups is the login."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    login = Column(String(50), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash, never plaintext
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    bill = relationship("Bill", back_populates="user", uselist=False)
    additional = relationship("Additional", back_populates="user", uselist=False)
