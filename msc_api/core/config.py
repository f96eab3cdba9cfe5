"""
config.py

Application-wide configuration.

Loads environment variables from .env through pydantic BaseSettings and
exposes them as a single settings object shared by the whole service.

Main settings:
- database connection URLs
- JWT secrets and expiry policy
- refresh-token cookie options
- allowed CORS origins
- fallback school-year code used for officer membership IDs
- log level

Design principles:
- every environment variable is read here and nowhere else
- local / test / production differ only by their .env
- settings are treated as immutable at runtime

Related files:
- msc_api.main               : CORS, logging and app start-up
- msc_api.core.security      : JWT secrets / expiry
- msc_api.db.session         : DATABASE_URL
- msc_api.services.school_year : DEFAULT_SCHOOL_YEAR_CODE

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


# extra="ignore": keys in .env that are not declared here are skipped
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    TEST_DATABASE_URL: str | None = None

    SECRET_KEY: str
    REFRESH_SECRET_KEY: str
    ALGORITHM: str = "HS256"

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 14

    # Cookie/deployment options
    # - COOKIE_SECURE: True only behind HTTPS
    # - COOKIE_SAMESITE: "lax" mitigates CSRF by default

    COOKIE_SECURE: bool = False
    COOKIE_SAMESITE: str = "lax"
    COOKIE_DOMAIN: str | None = None

    # Frontend origins
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Used when the settings table has no school_year_code row
    DEFAULT_SCHOOL_YEAR_CODE: str = "2526"

    LOG_LEVEL: str = "INFO"


# Created once at import and shared across the application
settings = Settings()
