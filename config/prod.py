from __future__ import annotations

from pathlib import Path
from typing import Literal
from pydantic_settings import SettingsConfigDict

from config.common import CommonSettings

ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = ROOT / "env" / ".env.production"


class ProdSettings(CommonSettings):
    APP_ENV: str = "production"
    DEBUG: bool = False
    # Frontend and API live on different origins in production
    COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "none"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
    )
