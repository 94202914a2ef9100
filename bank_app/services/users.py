"""
Serwis użytkowników.
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from bank_app.core.security import get_password_hash
from bank_app.models.user import User
from bank_app.schemas import UserCreate


class UserService:
    """User lookups and inserts within the caller's session."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_login(self, login: str) -> Optional[User]:
        return self.db.query(User).filter(User.login == login).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_all(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def insert(self, user_data: UserCreate) -> User:
        """
        Inserts a new user with a hashed password.

        Args:
            user_data: New user data (password in plaintext)

        Returns:
            Persisted user with its generated id
        """
        user = User(
            login=user_data.login,
            name=user_data.name,
            surname=user_data.surname,
            email=user_data.email,
            password=get_password_hash(user_data.password),
        )
        self.db.add(user)
        self.db.flush()
        return user
