# posp_updates/core/config.py
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Service configuration, read from the environment and an optional .env file"""

    APP_TITLE: str = "POSP Updates"

    # Record store
    DATABASE_URL: str = "sqlite:///./posp_updates.db"
    DB_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    # Access guard
    HTPASSWD_FILE: str = "users.htpasswd"
    ADMIN_USER: Optional[str] = None
    ADMIN_PASS: Optional[str] = None
    AUTH_REALM: str = "POSP Updates"

    # When False, storage failures are reported the legacy way:
    # lookups answer DeviceNotFound and saves still answer success.
    STRICT_STORAGE_ERRORS: bool = True

    TEMPLATES_DIR: str = str(PACKAGE_DIR / "templates")
    STATIC_DIR: str = "public"

    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
