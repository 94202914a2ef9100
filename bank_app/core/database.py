"""
Moduł inicjalizacji bazy danych z SQLAlchemy.
Tworzy połączenie z bazą danych, sesje i transakcje.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from bank_app.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str, **kwargs):
    """Creates an engine; SQLite needs check_same_thread disabled for FastAPI and the scheduler thread."""
    connect_args = kwargs.pop("connect_args", {})
    if database_url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)
    return create_engine(database_url, connect_args=connect_args, **kwargs)


# Tworzenie silnika bazy danych
engine = build_engine(settings.database_url)

# Sesja bazy danych
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Baza dla modeli ORM
Base = declarative_base()


def get_db():
    """
    Dependency dla FastAPI - zwraca sesję bazy danych.
    Automatycznie zamyka sesję po użyciu.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope(session_factory: Callable[[], Session] = SessionLocal) -> Iterator[Session]:
    """
    Otwiera sesję jako jedną transakcję: commit przy sukcesie, rollback przy błędzie.

    Args:
        session_factory: Fabryka sesji (domyślnie SessionLocal)

    Yields:
        Sesja bazy danych
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind=None):
    """
    Inicjalizuje bazę danych - tworzy wszystkie tabele.
    Błąd połączenia jest propagowany dalej (start aplikacji zostaje przerwany).

    Args:
        bind: Silnik bazy danych (domyślnie globalny engine)
    """
    from bank_app.models import User, Bill, Currency, Additional

    bind = bind if bind is not None else engine
    Base.metadata.create_all(bind=bind, checkfirst=True)
    logger.info("Database initialized", extra={"event": "DB_READY", "url": str(bind.url)})
