from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class CommonSettings(BaseSettings):
    """Fields shared by every environment."""

    DATABASE_URL: str | None = None
    APP_ENV: str = "local"
    SECRET_KEY: str | None = None
    DEBUG: bool = False

    # Sessions
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12

    # Session cookie. Use "none" when the frontend is served from another origin.
    COOKIE_SECURE: bool = True
    COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "lax"

    # JSON array or comma-separated list
    CORS_ORIGINS: str = ""

    LOG_LEVEL: str = "INFO"

    @property
    def database_url(self) -> str | None:
        return self.DATABASE_URL
