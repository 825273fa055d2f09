"""Middleware engine – DependencyRegistry."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from mp_middleware.kernel.errors import MissingDependencyError


class DependencyRegistry:
    """Key/value store of collaborators injected after construction.

    A key counts as injected once :meth:`inject` was called for it, whatever
    the value (``None`` included).
    """

    def __init__(self, requirements: Iterable[str] = (), *, throw_on_missing: bool = True) -> None:
        self._requirements: tuple[str, ...] = tuple(requirements)
        self._throw_on_missing = throw_on_missing
        self._injected: dict[str, Any] = {}

    def requires(self) -> tuple[str, ...]:
        return self._requirements

    def inject(self, key: str, value: Any) -> None:
        self._injected[key] = value

    def has(self, key: str) -> bool:
        return key in self._injected

    def missing(self) -> tuple[str, ...]:
        """Required keys not injected yet, in declaration order."""
        return tuple(key for key in self._requirements if key not in self._injected)

    def are_satisfied(self) -> bool:
        return not self.missing()

    def get(self, key: str) -> Any:
        if key in self._injected:
            return self._injected[key]
        if self._throw_on_missing:
            raise MissingDependencyError(key)
        return None


__all__ = ["DependencyRegistry"]
