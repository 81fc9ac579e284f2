from __future__ import annotations

import os

# BaseSettings is provided by the `pydantic-settings` package in Pydantic v2

# Mode selector: use MODE env var if set, else fall back to APP_ENV, then 'local'
MODE = os.environ.get("MODE") or os.environ.get("APP_ENV") or "local"
MODE = MODE.lower()


# Import per-environment settings classes
from .common import CommonSettings
from .local import LocalSettings
from .stage import StageSettings
from .prod import ProdSettings
from .test import TestingSettings


_MAPPING = {
    "local": LocalSettings,
    "stage": StageSettings,
    "staging": StageSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
    "test": TestingSettings,
}


def _choose_settings_class(mode: str):
    return _MAPPING.get(mode, LocalSettings)


def load_settings(mode: str | None = None) -> CommonSettings:
    """Instantiate the settings class for ``mode`` (defaults to the process MODE)."""
    return _choose_settings_class((mode or MODE).lower())()


# Instantiate settings from selected class. Pydantic BaseSettings will read the file
# specified in `model_config.env_file` of each module.
SettingsClass = _choose_settings_class(MODE)
settings = SettingsClass()

__all__ = ["settings", "SettingsClass", "MODE", "CommonSettings", "load_settings"]
