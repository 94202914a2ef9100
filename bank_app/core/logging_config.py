"""
Konfiguracja logowania strukturyzowanego (JSON).

Wszystkie moduły pakietu używają loggerów z hierarchii ``bank_app``
(``logging.getLogger(__name__)``), a dodatkowe pola przekazują przez ``extra``.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger import jsonlogger

ROOT_LOGGER = "bank_app"


class BankJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding a UTC timestamp and the level name to every record."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Konfiguruje logger ``bank_app``: handler na stdout i opcjonalnie do pliku.

    Wywołanie wielokrotne nie duplikuje handlerów.

    Args:
        level: Poziom logowania (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Ścieżka do pliku logów (None = tylko stdout)

    Returns:
        Skonfigurowany logger główny aplikacji
    """
    logger = logging.getLogger(ROOT_LOGGER)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = BankJsonFormatter("%(timestamp)s %(level)s %(logger)s %(message)s")

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    return logger
