"""Config settings – EngineSettings, the switches a MiddlewareEngine is built with."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from mp_middleware.config.settings.base import Settings
from mp_middleware.config.validation import InvalidSettingValueError

# camelCase spellings accepted for hosts porting an existing configuration.
_ALIASES: dict[str, str] = {
    "chainMiddlewareResults": "chain_middleware_results",
    "throwOnMissingHandler": "throw_on_missing_handler",
    "throwOnMissingDependency": "throw_on_missing_dependency",
    "dependencyInjection": "dependency_injection",
    "chainBreaking": "chain_breaking",
}


@dataclasses.dataclass(frozen=True)
class EngineSettings(Settings):
    """Immutable behaviour switches for :class:`MiddlewareEngine`.

    Attributes:
        chain_middleware_results: Append each step's result to the arguments
            of the next step.
        throw_on_missing_handler: Fail ``execute_handler`` for unknown ids
            instead of resolving an empty chain.
        throw_on_missing_dependency: Fail ``dependency()`` for keys nothing
            was injected under instead of returning ``None``.
        dependency_injection: Enable the ``requires``/``inject`` family.
        chain_breaking: Offer middleware a ``stop`` callback.
    """

    chain_middleware_results: bool = False
    throw_on_missing_handler: bool = True
    throw_on_missing_dependency: bool = True
    dependency_injection: bool = True
    chain_breaking: bool = True

    def _validate(self) -> None:
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if not isinstance(value, bool):
                raise InvalidSettingValueError(field.name, value, "expected a bool")

    @classmethod
    def from_mapping(cls, partial: Mapping[str, Any] | None = None, **overrides: Any) -> "EngineSettings":
        """Merge *partial* and then *overrides* over the defaults.

        Unknown keys raise :class:`InvalidSettingValueError`.
        """
        known = {field.name for field in dataclasses.fields(cls)}
        merged: dict[str, Any] = {}
        for source in (partial or {}, overrides):
            for key, value in source.items():
                name = _ALIASES.get(key, key)
                if name not in known:
                    raise InvalidSettingValueError(key, value, "unknown setting")
                merged[name] = value
        return cls(**merged)

    def with_overrides(self, **overrides: Any) -> "EngineSettings":
        """Return a copy with *overrides* applied; the original is untouched."""
        if not overrides:
            return self
        return self.from_mapping(dataclasses.asdict(self), **overrides)


__all__ = ["EngineSettings"]
