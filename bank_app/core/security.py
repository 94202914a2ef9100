"""
Hashowanie haseł użytkowników (bcrypt).
"""

import bcrypt

# bcrypt hashes at most 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


def check_password_length(password: str) -> str:
    """
    Sprawdza, czy hasło mieści się w limicie bcrypt (72 bajty UTF-8).

    Raises:
        ValueError: If the encoded password is longer than MAX_PASSWORD_BYTES
    """
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes (UTF-8)")
    return password


def get_password_hash(password: str) -> str:
    """Returns a bcrypt hash of the password."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Checks a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
