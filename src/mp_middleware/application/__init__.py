"""Application – the middleware engine and its building blocks."""

from mp_middleware.application.engine import (
    DependencyRegistry,
    HandlerRegistry,
    MiddlewareEngine,
    MiddlewareList,
    StepContext,
    execute_chain,
    execute_step,
)

__all__ = [
    "DependencyRegistry",
    "HandlerRegistry",
    "MiddlewareEngine",
    "MiddlewareList",
    "StepContext",
    "execute_chain",
    "execute_step",
]
