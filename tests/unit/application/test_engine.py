"""Unit tests for the MiddlewareEngine facade."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from structlog.testing import capture_logs

from mp_middleware import EngineSettings, MiddlewareEngine
from mp_middleware.config import InvalidSettingValueError
from mp_middleware.kernel.errors import (
    CapabilityDisabledError,
    EmptyHandlerError,
    InvalidMiddlewareError,
    MissingDependencyError,
    UnconfiguredHandlerError,
)


def noop(x: Any) -> None:
    return None


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_default_settings(self) -> None:
        assert MiddlewareEngine().settings == EngineSettings()

    def test_mapping_config(self) -> None:
        engine = MiddlewareEngine({"chainMiddlewareResults": True})
        assert engine.settings.chain_middleware_results is True

    def test_keyword_overrides(self) -> None:
        engine = MiddlewareEngine(throw_on_missing_handler=False)
        assert engine.settings.throw_on_missing_handler is False

    def test_settings_instance_with_overrides(self) -> None:
        base = EngineSettings(chain_middleware_results=True)
        engine = MiddlewareEngine(base, chain_breaking=False)
        assert engine.settings.chain_middleware_results is True
        assert engine.settings.chain_breaking is False
        assert base.chain_breaking is True

    def test_unknown_option_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            MiddlewareEngine({"verbose": True})

    def test_name_defaults_to_class_name(self) -> None:
        class OrdersEngine(MiddlewareEngine):
            pass

        assert OrdersEngine().name == "OrdersEngine"
        assert MiddlewareEngine(name="orders").name == "orders"

    def test_repr(self) -> None:
        engine = MiddlewareEngine(name="orders")
        engine.configure("save", noop)
        engine.use(noop, noop)
        assert repr(engine) == "MiddlewareEngine(name='orders', handlers=1, middleware=2)"


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestConfigure:
    def test_is_configured_after_configure(self) -> None:
        engine = MiddlewareEngine()
        assert not engine.is_configured("save")
        engine.configure("save", noop)
        assert engine.is_configured("save")

    def test_stays_configured_after_reconfigure(self) -> None:
        engine = MiddlewareEngine()
        engine.configure("save", noop)
        engine.configure("save", noop, noop)
        assert engine.is_configured("save")

    def test_no_functions_rejected(self) -> None:
        with pytest.raises(EmptyHandlerError):
            MiddlewareEngine().configure("save")

    def test_only_falsy_rejected(self) -> None:
        engine = MiddlewareEngine()
        with pytest.raises(EmptyHandlerError):
            engine.configure("save", None, 0, "")
        assert not engine.is_configured("save")

    def test_non_function_rejected(self) -> None:
        with pytest.raises(InvalidMiddlewareError) as exc_info:
            MiddlewareEngine().configure("save", 42)
        assert exc_info.value.handler_id == "save"

    def test_falsy_entries_dropped(self) -> None:
        record: list[str] = []
        engine = MiddlewareEngine()
        engine.configure("save", None, lambda x: record.append("ran"), False)
        asyncio.run(engine.execute_handler("save", "x"))
        assert record == ["ran"]

    def test_reconfigure_replaces(self) -> None:
        record: list[str] = []
        engine = MiddlewareEngine()
        engine.configure("save", lambda x: record.append("old"))
        engine.configure("save", lambda x: record.append("new"))
        asyncio.run(engine.execute_handler("save", "x"))
        assert record == ["new"]

    def test_handler_ids(self) -> None:
        engine = MiddlewareEngine()
        engine.configure("load", noop)
        engine.configure("save", noop)
        assert engine.handler_ids() == ("load", "save")

    def test_configure_is_logged(self) -> None:
        with capture_logs() as logs:
            engine = MiddlewareEngine(name="orders")
            engine.configure("save", noop, noop)
        entry = next(e for e in logs if e["event"] == "middleware.handler.configured")
        assert entry["handler_id"] == "save"
        assert entry["steps"] == 2
        assert entry["engine"] == "orders"


class TestUse:
    def test_calls_accumulate(self) -> None:
        engine = MiddlewareEngine()
        engine.use(noop)
        engine.use(noop, noop)
        assert len(engine.middleware) == 3

    def test_non_function_rejected(self) -> None:
        engine = MiddlewareEngine()
        with pytest.raises(InvalidMiddlewareError):
            engine.use(noop, "nope")
        assert engine.middleware == ()

    def test_empty_rejected(self) -> None:
        with pytest.raises(EmptyHandlerError):
            MiddlewareEngine().use(None)


# ---------------------------------------------------------------------------
# execute_middleware
# ---------------------------------------------------------------------------


class TestExecuteMiddleware:
    def test_runs_in_registration_order_once_each(self) -> None:
        record: list[str] = []
        engine = MiddlewareEngine()
        engine.use(lambda x: record.append("a"))
        engine.use(lambda x: record.append("b"), lambda x: record.append("c"))
        asyncio.run(engine.execute_middleware("req"))
        assert record == ["a", "b", "c"]

    def test_empty_list_resolves(self) -> None:
        assert asyncio.run(MiddlewareEngine().execute_middleware("req")) is None

    def test_independent_of_handlers(self) -> None:
        record: list[str] = []
        engine = MiddlewareEngine()
        engine.configure("save", lambda x: record.append("handler"))
        engine.use(lambda x: record.append("middleware"))
        asyncio.run(engine.execute_middleware("req"))
        assert record == ["middleware"]

    def test_optional_parameter_middleware_completes(self) -> None:
        record: list[str] = []

        def plain(x: Any, fmt: str = "json") -> None:
            record.append(fmt)

        engine = MiddlewareEngine()
        engine.use(plain)

        async def run() -> Any:
            return await asyncio.wait_for(engine.execute_middleware(1), 1)

        assert asyncio.run(run()) is None
        assert record == ["json"]

    def test_stop_skips_remaining(self) -> None:
        record: list[str] = []

        def gate(x: Any, next_: Any, stop: Any) -> None:
            record.append("gate")
            stop()

        engine = MiddlewareEngine()
        engine.use(gate, lambda x: record.append("after"))
        assert asyncio.run(engine.execute_middleware("req")) is None
        assert record == ["gate"]

    def test_next_error_rejects(self) -> None:
        record: list[str] = []
        err = ValueError("invalid request")

        def validate(x: Any, next_: Any) -> None:
            next_(err)

        engine = MiddlewareEngine()
        engine.use(validate, lambda x: record.append("after"))
        with pytest.raises(ValueError) as exc_info:
            asyncio.run(engine.execute_middleware("req"))
        assert exc_info.value is err
        assert record == []


# ---------------------------------------------------------------------------
# execute_handler
# ---------------------------------------------------------------------------


class TestExecuteHandler:
    def test_save_scenario(self) -> None:
        received: list[Any] = []

        def step1(x: Any, previous: Any, next_: Any) -> None:
            next_(None, 1)

        def step2(x: Any, previous: Any, next_: Any) -> None:
            received.append(previous)
            next_(None, 2)

        engine = MiddlewareEngine(chain_middleware_results=True)
        engine.configure("save", step1, step2)
        assert asyncio.run(engine.execute_handler("save", "x")) == 2
        assert received == [1]

    def test_previous_result_absent_by_default(self) -> None:
        received: list[tuple[Any, ...]] = []

        def step(*args: Any) -> None:
            received.append(args[:-2])
            args[-2](None, "result")

        engine = MiddlewareEngine()
        engine.configure("save", step, step)
        asyncio.run(engine.execute_handler("save", "x", "extra"))
        assert received == [("x", "extra"), ("x", "extra")]

    def test_async_callback_handler_resolves_with_next_result(self) -> None:
        async def load(x: Any, next_: Any) -> None:
            asyncio.get_running_loop().call_later(0.01, next_, None, "loaded")

        engine = MiddlewareEngine()
        engine.configure("load", load)
        assert asyncio.run(engine.execute_handler("load", 1)) == "loaded"

    def test_missing_handler_rejects_by_default(self) -> None:
        with pytest.raises(UnconfiguredHandlerError) as exc_info:
            asyncio.run(MiddlewareEngine().execute_handler("missing"))
        assert exc_info.value.handler_id == "missing"

    def test_missing_handler_resolves_when_lenient(self) -> None:
        record: list[str] = []
        engine = MiddlewareEngine(throw_on_missing_handler=False)
        engine.use(lambda x: record.append("middleware"))
        assert asyncio.run(engine.execute_handler("missing", "x")) is None
        assert record == []

    def test_async_handler(self) -> None:
        async def load(order_id: int) -> dict[str, int]:
            await asyncio.sleep(0)
            return {"id": order_id}

        engine = MiddlewareEngine()
        engine.configure("load", load)
        assert asyncio.run(engine.execute_handler("load", 7)) == {"id": 7}

    def test_concurrent_chains_are_independent(self) -> None:
        record: list[tuple[str, str]] = []

        def tagger(tag: str) -> Any:
            async def step(x: str) -> str:
                record.append((x, tag))
                await asyncio.sleep(0)
                return f"{x}:{tag}"

            return step

        engine = MiddlewareEngine()
        engine.configure("h", tagger("1"), tagger("2"))

        async def run() -> list[Any]:
            return await asyncio.gather(
                engine.execute_handler("h", "a"),
                engine.execute_handler("h", "b"),
            )

        assert asyncio.run(run()) == ["a:2", "b:2"]
        assert [tag for x, tag in record if x == "a"] == ["1", "2"]
        assert [tag for x, tag in record if x == "b"] == ["1", "2"]


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


class TestDependencies:
    def test_requires_empty_by_default(self) -> None:
        engine = MiddlewareEngine()
        assert engine.requires() == ()
        assert engine.are_dependencies_satisfied()

    def test_requires_from_subclass(self) -> None:
        class OrdersEngine(MiddlewareEngine):
            requirements = ("repo", "clock")

        engine = OrdersEngine()
        assert engine.requires() == ("repo", "clock")
        assert not engine.are_dependencies_satisfied()
        assert engine.missing_dependencies() == ("repo", "clock")

    def test_requires_from_constructor(self) -> None:
        engine = MiddlewareEngine(requires=["repo"])
        assert engine.requires() == ("repo",)

    def test_satisfied_after_injecting_every_requirement(self) -> None:
        engine = MiddlewareEngine(requires=["repo", "clock"])
        engine.inject("repo", object())
        assert not engine.are_dependencies_satisfied()
        engine.inject("clock", object())
        assert engine.are_dependencies_satisfied()

    def test_has_dependency(self) -> None:
        engine = MiddlewareEngine()
        assert engine.has_dependency("repo") is False
        engine.inject("repo", "r")
        assert engine.has_dependency("repo") is True

    def test_dependency_lookup(self) -> None:
        engine = MiddlewareEngine()
        engine.inject("repo", "r1")
        engine.inject("repo", "r2")
        assert engine.dependency("repo") == "r2"

    def test_missing_dependency_raises(self) -> None:
        with pytest.raises(MissingDependencyError):
            MiddlewareEngine().dependency("repo")

    def test_missing_dependency_lenient(self) -> None:
        engine = MiddlewareEngine(throw_on_missing_dependency=False)
        assert engine.dependency("repo") is None

    def test_lookup_inside_middleware_fails_chain(self) -> None:
        engine = MiddlewareEngine()
        engine.configure("save", lambda x: engine.dependency("repo").save(x))
        with pytest.raises(MissingDependencyError):
            asyncio.run(engine.execute_handler("save", "order"))

    def test_lookup_inside_middleware_after_inject(self) -> None:
        saved: list[Any] = []

        class Repo:
            def save(self, item: Any) -> str:
                saved.append(item)
                return "saved"

        engine = MiddlewareEngine()
        engine.configure("save", lambda x: engine.dependency("repo").save(x))
        engine.inject("repo", Repo())
        assert asyncio.run(engine.execute_handler("save", "order")) == "saved"
        assert saved == ["order"]


class TestDependencyInjectionDisabled:
    def test_requires_is_empty(self) -> None:
        engine = MiddlewareEngine(requires=["repo"], dependency_injection=False)
        assert engine.requires() == ()

    @pytest.mark.parametrize(
        "call",
        [
            lambda e: e.inject("repo", 1),
            lambda e: e.has_dependency("repo"),
            lambda e: e.are_dependencies_satisfied(),
            lambda e: e.missing_dependencies(),
            lambda e: e.dependency("repo"),
        ],
    )
    def test_operations_raise(self, call: Any) -> None:
        engine = MiddlewareEngine(dependency_injection=False)
        with pytest.raises(CapabilityDisabledError) as exc_info:
            call(engine)
        assert exc_info.value.capability == "dependency_injection"
