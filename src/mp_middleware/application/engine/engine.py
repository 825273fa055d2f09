"""Middleware engine – MiddlewareEngine facade.

Usage::

    engine = MiddlewareEngine(chain_middleware_results=True)

    def load(order, next_):
        next_(None, {"id": order})

    async def save(order, loaded):
        return await repo.save(loaded)

    engine.configure("save", load, save)
    saved = await engine.execute_handler("save", 42)

Hosts either compose an engine, as above, or subclass it and declare the
collaborators they expect through ``requirements``::

    class OrdersEngine(MiddlewareEngine):
        requirements = ("repo",)
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from mp_middleware.application.engine.chain import execute_chain
from mp_middleware.application.engine.context import MiddlewareFunc
from mp_middleware.application.engine.dependencies import DependencyRegistry
from mp_middleware.application.engine.registry import HandlerRegistry, MiddlewareList
from mp_middleware.config.settings import EngineSettings
from mp_middleware.kernel.errors import CapabilityDisabledError, UnconfiguredHandlerError
from mp_middleware.observability.logging import get_logger


class MiddlewareEngine:
    """Owns named handler chains, one global middleware chain and injected dependencies."""

    requirements: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        config: EngineSettings | Mapping[str, Any] | None = None,
        *,
        requires: Iterable[str] | None = None,
        name: str | None = None,
        **overrides: Any,
    ) -> None:
        if isinstance(config, EngineSettings):
            self._settings = config.with_overrides(**overrides)
        else:
            self._settings = EngineSettings.from_mapping(config, **overrides)
        self._name = name or type(self).__name__
        self._log = get_logger(__name__, engine=self._name)
        self._dependencies = DependencyRegistry(
            self.requirements if requires is None else requires,
            throw_on_missing=self._settings.throw_on_missing_dependency,
        )
        self._handlers = HandlerRegistry()
        self._middleware = MiddlewareList()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def name(self) -> str:
        return self._name

    # ------------------------------------------------------------------
    # Dependencies
    # ------------------------------------------------------------------

    def _require_dependency_injection(self) -> None:
        if not self._settings.dependency_injection:
            raise CapabilityDisabledError("dependency_injection")

    def requires(self) -> tuple[str, ...]:
        """Keys this engine expects to be injected; empty when none are declared."""
        if not self._settings.dependency_injection:
            return ()
        return self._dependencies.requires()

    def inject(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing whatever was there."""
        self._require_dependency_injection()
        self._dependencies.inject(key, value)
        self._log.debug("middleware.dependency.injected", key=key)

    def has_dependency(self, key: str) -> bool:
        self._require_dependency_injection()
        return self._dependencies.has(key)

    def are_dependencies_satisfied(self) -> bool:
        self._require_dependency_injection()
        return self._dependencies.are_satisfied()

    def missing_dependencies(self) -> tuple[str, ...]:
        self._require_dependency_injection()
        return self._dependencies.missing()

    def dependency(self, key: str) -> Any:
        """Return the injected value for *key*.

        Raises :class:`MissingDependencyError` for unset keys unless
        ``throw_on_missing_dependency`` is off, in which case ``None`` is
        returned.
        """
        self._require_dependency_injection()
        return self._dependencies.get(key)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def configure(self, handler_id: str, *functions: Any) -> None:
        """Set the middleware for *handler_id*, replacing any earlier set."""
        function_list = self._handlers.configure(handler_id, functions)
        self._log.debug("middleware.handler.configured", handler_id=handler_id, steps=len(function_list))

    def is_configured(self, handler_id: str) -> bool:
        return self._handlers.is_configured(handler_id)

    def handler_ids(self) -> tuple[str, ...]:
        return self._handlers.ids()

    def use(self, *functions: Any) -> None:
        """Append *functions* to the global middleware list."""
        function_list = self._middleware.extend(functions)
        self._log.debug("middleware.use.registered", added=len(function_list), steps=len(self._middleware))

    @property
    def middleware(self) -> tuple[MiddlewareFunc, ...]:
        return self._middleware.snapshot()

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def execute_handler(self, handler_id: str, primary: Any = None, *args: Any) -> Any:
        """Run the chain configured under *handler_id*."""
        functions = self._handlers.get(handler_id)
        if functions is None:
            if self._settings.throw_on_missing_handler:
                raise UnconfiguredHandlerError(handler_id)
            functions = ()
        return await execute_chain(
            functions,
            primary,
            args,
            settings=self._settings,
            chain=f"handler:{handler_id}",
            logger=self._log,
        )

    async def execute_middleware(self, primary: Any = None, *args: Any) -> Any:
        """Run the global middleware list."""
        return await execute_chain(
            self._middleware.snapshot(),
            primary,
            args,
            settings=self._settings,
            chain="middleware",
            logger=self._log,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, handlers={len(self._handlers)}, "
            f"middleware={len(self._middleware)})"
        )


__all__ = ["MiddlewareEngine"]
