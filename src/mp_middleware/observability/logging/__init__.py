"""Observability – structured logging helpers."""
from mp_middleware.observability.logging.factory import ENGINE_LOGGER, JsonLoggerFactory
from mp_middleware.observability.logging.processors import EngineNameProcessor, get_logger

__all__ = ["ENGINE_LOGGER", "EngineNameProcessor", "JsonLoggerFactory", "get_logger"]
