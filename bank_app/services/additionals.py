"""
Serwis danych dodatkowych użytkownika.
"""

from typing import Optional
from sqlalchemy.orm import Session

from bank_app.models.additional import Additional
from bank_app.schemas import AdditionalCreate


class AdditionalService:
    """Additional record lookups and inserts within the caller's session."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_user_id(self, user_id: int) -> Optional[Additional]:
        return self.db.query(Additional).filter(Additional.user_id == user_id).first()

    def insert(self, additional_data: AdditionalCreate) -> Additional:
        additional = Additional(user_id=additional_data.user_id)
        self.db.add(additional)
        self.db.flush()
        return additional
