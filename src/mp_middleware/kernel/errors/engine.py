"""Middleware engine errors — registration, lookup and execution failures."""

from __future__ import annotations

from typing import Any

from mp_middleware.kernel.errors.base import ApplicationError


class MiddlewareEngineError(ApplicationError):
    """Common parent of every error the engine raises."""

    default_code = "middleware_engine_error"


class InvalidMiddlewareError(MiddlewareEngineError):
    """A truthy, non-callable value was passed to ``configure`` or ``use``.

    ``handler_id`` is ``None`` when the value came through ``use``.
    """

    default_code = "invalid_middleware"

    def __init__(self, handler_id: str | None, position: int, value: Any) -> None:
        if handler_id is None:
            msg = "One of the parameters you provided to use() is not a function or falsy"
        else:
            msg = f"One of the parameters you provided for the handler {handler_id!r} is not a function or falsy"
        super().__init__(
            msg,
            detail={"handler_id": handler_id, "position": position, "type": type(value).__name__},
        )
        self.handler_id = handler_id
        self.position = position
        self.value = value


class EmptyHandlerError(MiddlewareEngineError):
    """Registration produced no usable functions."""

    default_code = "empty_handler"

    def __init__(self, handler_id: str | None) -> None:
        if handler_id is None:
            msg = "You must provide at least one function to use()"
        else:
            msg = f"You must provide at least one function for the handler {handler_id!r}"
        super().__init__(msg, detail={"handler_id": handler_id})
        self.handler_id = handler_id


class UnconfiguredHandlerError(MiddlewareEngineError):
    """``execute_handler`` was called for an id nothing was configured under."""

    default_code = "unconfigured_handler"

    def __init__(self, handler_id: str) -> None:
        super().__init__(
            f"The handler {handler_id!r} has not been configured",
            detail={"handler_id": handler_id},
        )
        self.handler_id = handler_id


class MissingDependencyError(MiddlewareEngineError):
    """A dependency was looked up before anything was injected under its key."""

    default_code = "missing_dependency"

    def __init__(self, key: str) -> None:
        super().__init__(f"Dependency {key!r} has not been injected", detail={"key": key})
        self.key = key


class CapabilityDisabledError(MiddlewareEngineError):
    """An operation belongs to a capability switched off in the engine settings."""

    default_code = "capability_disabled"

    def __init__(self, capability: str) -> None:
        super().__init__(
            f"The {capability!r} capability is disabled for this engine",
            detail={"capability": capability},
        )
        self.capability = capability


class MiddlewareFailedError(MiddlewareEngineError):
    """Wraps a non-exception value a middleware reported as its error.

    ``next_("boom")`` is legal for a middleware but ``"boom"`` cannot be
    raised, so the chain raises this instead with the value in ``error``.
    """

    default_code = "middleware_failed"

    def __init__(self, error: Any) -> None:
        super().__init__(f"Middleware failed: {error!r}", detail={"error": repr(error)})
        self.error = error


__all__ = [
    "CapabilityDisabledError",
    "EmptyHandlerError",
    "InvalidMiddlewareError",
    "MiddlewareEngineError",
    "MiddlewareFailedError",
    "MissingDependencyError",
    "UnconfiguredHandlerError",
]
