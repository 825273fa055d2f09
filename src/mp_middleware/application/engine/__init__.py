"""Middleware engine – sequential execution of heterogeneous middleware chains."""
from mp_middleware.application.engine.chain import execute_chain
from mp_middleware.application.engine.context import (
    MiddlewareFunc,
    NextCallback,
    StepContext,
    StopCallback,
)
from mp_middleware.application.engine.dependencies import DependencyRegistry
from mp_middleware.application.engine.engine import MiddlewareEngine
from mp_middleware.application.engine.registry import (
    HandlerRegistry,
    MiddlewareList,
    reduce_to_function_list,
)
from mp_middleware.application.engine.step import callback_slots, execute_step

__all__ = [
    "DependencyRegistry",
    "HandlerRegistry",
    "MiddlewareEngine",
    "MiddlewareFunc",
    "MiddlewareList",
    "NextCallback",
    "StepContext",
    "StopCallback",
    "callback_slots",
    "execute_chain",
    "execute_step",
    "reduce_to_function_list",
]
