"""Middleware engine – chain executor."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mp_middleware.application.engine.context import MiddlewareFunc, StepContext
from mp_middleware.application.engine.step import execute_step
from mp_middleware.config.settings import EngineSettings
from mp_middleware.kernel.types import Break, Continue, Fail
from mp_middleware.observability.logging import get_logger


async def execute_chain(
    functions: Sequence[MiddlewareFunc],
    primary: Any,
    args: Sequence[Any] = (),
    *,
    settings: EngineSettings | None = None,
    chain: str = "middleware",
    logger: Any = None,
) -> Any:
    """Run *functions* front to back, one at a time.

    Returns the last step's result (``None`` for an empty chain or a chain
    ended with ``stop()``). A failing step aborts the chain and its error is
    raised here; the remaining functions never run.
    """
    settings = settings or EngineSettings()
    log = (logger if logger is not None else get_logger(__name__)).bind(chain=chain)
    steps = tuple(functions)
    extra = tuple(args)

    log.debug("middleware.chain.started", steps=len(steps))
    previous: Any = None
    for position, func in enumerate(steps):
        context = StepContext(
            primary=primary,
            args=extra,
            previous_result=previous,
            chain_results=settings.chain_middleware_results,
        )
        outcome = await execute_step(func, context, chain_breaking=settings.chain_breaking)
        match outcome:
            case Continue():
                previous = outcome.value
            case Break():
                log.debug("middleware.chain.broken", position=position, steps=len(steps))
                return None
            case Fail():
                log.warning(
                    "middleware.chain.failed",
                    position=position,
                    error_type=type(outcome.error).__name__,
                )
                raise outcome.error

    log.debug("middleware.chain.completed", steps=len(steps))
    return previous


__all__ = ["execute_chain"]
