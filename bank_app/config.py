"""
Konfiguracja aplikacji.
Używa pydantic-settings do zarządzania zmiennymi środowiskowymi.
"""

from dataclasses import dataclass
from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import List, Optional

from bank_app.core.security import check_password_length


@dataclass(frozen=True)
class AdminProfile:
    """Static admin account data seeded at startup."""
    login: str
    name: str
    surname: str
    email: str
    password: str


class Settings(BaseSettings):
    """Ustawienia aplikacji z zmiennych środowiskowych."""

    # Baza danych
    database_url: str = "sqlite:///./bank_application.db"

    # Serwer
    host: str = "0.0.0.0"
    port: int = 3000

    # API
    api_title: str = "Bank Application"
    api_description: str = "Backend aplikacji bankowej: użytkownicy, rachunki, waluty i kursy walut"
    api_version: str = "1.0.0"

    # CORS
    cors_allow_origins: List[str] = ["*"]  # W produkcji ograniczyć do konkretnych domen
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # Konto administratora (W produkcji ustaw ADMIN_PASSWORD!)
    admin_login: str = "admin"
    admin_name: str = "Admin"
    admin_surname: str = "Admin"
    admin_email: str = "admin@bankapp.pl"
    admin_password: str = "admin"

    # Waluty
    default_currency_id: int = 1  # waluta przypisywana rachunkowi administratora

    # Kursy walut (API zgodne z Frankfurter)
    exchange_rates_api_url: str = "https://api.frankfurter.app"
    exchange_rates_timeout: float = 10.0
    rate_refresh_enabled: bool = True
    rate_refresh_timezone: str = "Europe/Warsaw"

    # Logowanie
    log_level: str = "INFO"
    log_file: Optional[str] = None  # None = tylko stdout

    @field_validator("admin_password")
    @classmethod
    def admin_password_fits_bcrypt(cls, value: str) -> str:
        return check_password_length(value)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def admin_profile(self) -> AdminProfile:
        """Returns the admin account data as an immutable profile."""
        return AdminProfile(
            login=self.admin_login,
            name=self.admin_name,
            surname=self.admin_surname,
            email=self.admin_email,
            password=self.admin_password,
        )


# Globalna instancja ustawień
settings = Settings()
