"""Config – engine settings and their validation errors."""

from mp_middleware.config.settings import EngineSettings, Settings
from mp_middleware.config.validation import ConfigError, InvalidSettingValueError

__all__ = [
    "ConfigError",
    "EngineSettings",
    "InvalidSettingValueError",
    "Settings",
]
