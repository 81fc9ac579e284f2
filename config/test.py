from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from config.common import CommonSettings


class TestingSettings(CommonSettings):
    __test__ = False

    DATABASE_URL: str | None = "sqlite+aiosqlite:///./test.db"
    APP_ENV: str = "test"
    SECRET_KEY: str | None = "test-secret-key"
    DEBUG: bool = False
    BCRYPT_ROUNDS: int = 4

    model_config = SettingsConfigDict(env_prefix="TEST_")
