"""Config validation errors."""
from mp_middleware.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Raised when engine configuration is invalid."""
    default_code = "config_error"


class InvalidSettingValueError(ConfigError):
    """A setting is unknown, or its value has the wrong shape."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError"]
