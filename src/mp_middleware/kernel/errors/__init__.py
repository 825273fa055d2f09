"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    └── ApplicationError
        ├── MiddlewareEngineError          (engine.py)
        │   ├── InvalidMiddlewareError
        │   ├── EmptyHandlerError
        │   ├── UnconfiguredHandlerError
        │   ├── MissingDependencyError
        │   ├── CapabilityDisabledError
        │   └── MiddlewareFailedError
        └── ConfigError                    (mp_middleware.config.validation)
            └── InvalidSettingValueError
"""

from mp_middleware.kernel.errors.base import ApplicationError, BaseError
from mp_middleware.kernel.errors.engine import (
    CapabilityDisabledError,
    EmptyHandlerError,
    InvalidMiddlewareError,
    MiddlewareEngineError,
    MiddlewareFailedError,
    MissingDependencyError,
    UnconfiguredHandlerError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "CapabilityDisabledError",
    "EmptyHandlerError",
    "InvalidMiddlewareError",
    "MiddlewareEngineError",
    "MiddlewareFailedError",
    "MissingDependencyError",
    "UnconfiguredHandlerError",
]
