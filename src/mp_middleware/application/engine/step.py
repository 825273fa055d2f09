"""Middleware engine – single-step executor.

One middleware call is turned into one :data:`StepOutcome`, whichever way the
function reports completion:

* calling ``next_(error, result)`` or ``stop(error)``,
* returning an awaitable, which is awaited to completion,
* returning a plain value.

Whichever source settles first decides the outcome; later signals are
ignored. Callbacks are offered structurally: a function only receives
``next_``/``stop`` when its signature has positional room for them after
the step arguments.
"""
from __future__ import annotations

import asyncio
import inspect
from typing import Any

from mp_middleware.application.engine.context import MiddlewareFunc, StepContext
from mp_middleware.kernel.errors import MiddlewareFailedError
from mp_middleware.kernel.types import Break, Continue, Fail, StepOutcome

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def callback_slots(func: MiddlewareFunc, argument_count: int) -> int:
    """How many trailing callbacks (0, 1 or 2) *func* can take positionally.

    Only required parameters left over after the step arguments signal a
    callback-style function. Once one is there, defaulted parameters after
    it may take ``stop`` too; a plain ``def step(x, fmt="json")`` gets none.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return 0
    required = optional = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return 2
        if param.kind in _POSITIONAL:
            if param.default is inspect.Parameter.empty:
                required += 1
            else:
                optional += 1
    free = required - argument_count
    if free <= 0:
        return 0
    return min(2, free + optional)


def _as_exception(error: Any) -> BaseException:
    if isinstance(error, BaseException):
        return error
    return MiddlewareFailedError(error)


async def execute_step(
    func: MiddlewareFunc,
    context: StepContext,
    *,
    chain_breaking: bool = True,
) -> StepOutcome[Any]:
    """Run *func* once and return how it finished. Never raises for middleware errors."""
    loop = asyncio.get_running_loop()
    settled: asyncio.Future[StepOutcome[Any]] = loop.create_future()

    def settle(outcome: StepOutcome[Any]) -> None:
        if not settled.done():
            settled.set_result(outcome)

    def next_(error: Any = None, result: Any = None) -> None:
        settle(Fail(_as_exception(error)) if error else Continue(result))

    def stop(error: Any = None) -> None:
        settle(Fail(_as_exception(error)) if error else Break())

    arguments = context.arguments()
    slots = callback_slots(func, len(arguments))
    if not chain_breaking:
        slots = min(slots, 1)
    callbacks = (next_, stop)[:slots]

    try:
        returned = func(*arguments, *callbacks)
    except Exception as exc:
        settle(Fail(exc))
        return settled.result()

    if inspect.isawaitable(returned):
        try:
            value = await returned
        except Exception as exc:
            settle(Fail(exc))
        else:
            if not callbacks or value is not None:
                settle(Continue(value))
    elif not callbacks or returned is not None:
        settle(Continue(returned))

    return await settled


__all__ = ["callback_slots", "execute_step"]
