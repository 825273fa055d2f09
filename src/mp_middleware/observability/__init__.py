"""Observability – structured logging."""
from mp_middleware.observability.logging import ENGINE_LOGGER, EngineNameProcessor, JsonLoggerFactory, get_logger

__all__ = ["ENGINE_LOGGER", "EngineNameProcessor", "JsonLoggerFactory", "get_logger"]
