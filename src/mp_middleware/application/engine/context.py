"""Middleware engine – call-convention types and the per-step context."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable

MiddlewareFunc = Callable[..., Any]
NextCallback = Callable[..., None]
StopCallback = Callable[..., None]


@dataclasses.dataclass(frozen=True, slots=True)
class StepContext:
    """Everything one middleware invocation receives, built once per step.

    ``previous_result`` is always tracked; it only reaches the middleware
    when ``chain_results`` is set.
    """

    primary: Any
    args: tuple[Any, ...] = ()
    previous_result: Any = None
    chain_results: bool = False

    def arguments(self) -> tuple[Any, ...]:
        """Positional arguments handed to the middleware ahead of its callbacks."""
        if self.chain_results:
            return (self.primary, *self.args, self.previous_result)
        return (self.primary, *self.args)


__all__ = ["MiddlewareFunc", "NextCallback", "StepContext", "StopCallback"]
