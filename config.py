import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    """Interpret typical truthy strings from environment variables."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'replace-this-secret'
    # Relative SQLite paths resolve inside the app's instance folder
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///cryptic_hunt.sqlite'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    REMEMBER_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_SAMESITE = 'Lax'
    REMEMBER_COOKIE_DURATION = timedelta(days=14)
    # Secure cookies and the HTTPS redirect only when explicitly requested so
    # local dev and tests keep working over plain HTTP
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE')
    REMEMBER_COOKIE_SECURE = SESSION_COOKIE_SECURE
    FORCE_HTTPS = _env_flag('FORCE_HTTPS')
    BCRYPT_LOG_ROUNDS = int(os.environ.get('BCRYPT_LOG_ROUNDS', '12'))
    # Pre-hash so passwords past bcrypt's 72-byte limit still work
    BCRYPT_HANDLE_LONG_PASSWORDS = True
    # Registration bounds
    USERNAME_MIN_LENGTH = int(os.environ.get('USERNAME_MIN_LENGTH', '3'))
    USERNAME_MAX_LENGTH = int(os.environ.get('USERNAME_MAX_LENGTH', '24'))
    PASSWORD_MIN_LENGTH = int(os.environ.get('PASSWORD_MIN_LENGTH', '6'))
    # Upper bound (and default) for leaderboard size
    LEADERBOARD_LIMIT = int(os.environ.get('LEADERBOARD_LIMIT', '100'))
    # Optional JSON file replacing the built-in level table
    LEVELS_FILE = os.environ.get('LEVELS_FILE')
