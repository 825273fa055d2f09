"""Config settings – immutable dataclass settings."""
from mp_middleware.config.settings.base import Settings
from mp_middleware.config.settings.engine import EngineSettings

__all__ = ["EngineSettings", "Settings"]
