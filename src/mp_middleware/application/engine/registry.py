"""Middleware engine – HandlerRegistry, MiddlewareList and registration filtering."""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from mp_middleware.application.engine.context import MiddlewareFunc
from mp_middleware.kernel.errors import EmptyHandlerError, InvalidMiddlewareError


def reduce_to_function_list(
    functions: Iterable[Any],
    *,
    handler_id: str | None = None,
) -> tuple[MiddlewareFunc, ...]:
    """Keep the callables in *functions*, dropping falsy placeholders.

    Raises :class:`InvalidMiddlewareError` for a truthy non-callable and
    :class:`EmptyHandlerError` when nothing usable is left.
    ``handler_id`` is only used to word the errors.
    """
    kept: list[MiddlewareFunc] = []
    for position, func in enumerate(functions):
        if callable(func):
            kept.append(func)
        elif func:
            raise InvalidMiddlewareError(handler_id, position, func)
    if not kept:
        raise EmptyHandlerError(handler_id)
    return tuple(kept)


class HandlerRegistry:
    """Handler id -> non-empty sequence of middleware. Registration replaces."""

    def __init__(self) -> None:
        self._handlers: dict[str, tuple[MiddlewareFunc, ...]] = {}

    def configure(self, handler_id: str, functions: Iterable[Any]) -> tuple[MiddlewareFunc, ...]:
        function_list = reduce_to_function_list(functions, handler_id=handler_id)
        self._handlers[handler_id] = function_list
        return function_list

    def get(self, handler_id: str) -> tuple[MiddlewareFunc, ...] | None:
        return self._handlers.get(handler_id)

    def is_configured(self, handler_id: str) -> bool:
        return handler_id in self._handlers

    def ids(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def __contains__(self, handler_id: object) -> bool:
        return handler_id in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


class MiddlewareList:
    """The global, append-only middleware sequence."""

    def __init__(self) -> None:
        self._functions: list[MiddlewareFunc] = []

    def extend(self, functions: Iterable[Any]) -> tuple[MiddlewareFunc, ...]:
        function_list = reduce_to_function_list(functions)
        self._functions.extend(function_list)
        return function_list

    def snapshot(self) -> tuple[MiddlewareFunc, ...]:
        return tuple(self._functions)

    def __iter__(self) -> Iterator[MiddlewareFunc]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._functions)


__all__ = ["HandlerRegistry", "MiddlewareList", "reduce_to_function_list"]
