"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog


class EngineNameProcessor:
    """structlog processor that stamps the emitting engine's name on every event.

    Engines bind ``engine`` on their logger already; this covers loggers
    obtained elsewhere (e.g. inside middleware) that want the same field.

    Usage::

        structlog.configure(processors=[EngineNameProcessor("orders"), ...])
    """

    def __init__(self, engine_name: str) -> None:
        self._engine_name = engine_name

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        event_dict.setdefault("engine", self._engine_name)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["EngineNameProcessor", "get_logger"]
