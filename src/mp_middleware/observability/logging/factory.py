"""Observability – JsonLoggerFactory for hosts embedding a MiddlewareEngine."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from mp_middleware.observability.logging.processors import EngineNameProcessor

ENGINE_LOGGER = "mp_middleware"


class JsonLoggerFactory:
    """Route engine events (``middleware.chain.*``, ``middleware.handler.*``) to JSON lines.

    Usage::

        JsonLoggerFactory.configure(engine_name="orders", engine_level=logging.DEBUG)
    """

    @staticmethod
    def configure(
        level: int = logging.INFO,
        *,
        engine_name: str | None = None,
        engine_level: int | None = None,
        extra_processors: list[Any] | None = None,
    ) -> None:
        """Configure structlog and the root handler.

        ``engine_name`` stamps an ``engine`` field on events from loggers that
        did not bind one. ``engine_level`` sets the ``mp_middleware`` logger
        apart from the root, since chain progress is logged at debug.
        """
        processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
        ]
        if engine_name is not None:
            processors.append(EngineNameProcessor(engine_name))
        processors.extend(extra_processors or [])
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

        structlog.configure(
            processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        handler = logging.StreamHandler()
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(),
                ],
            )
        )
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)
        logging.getLogger(ENGINE_LOGGER).setLevel(engine_level if engine_level is not None else logging.NOTSET)


__all__ = ["ENGINE_LOGGER", "JsonLoggerFactory"]
