"""conftest.py for benchmarks.

All benchmarks share one session-scoped event loop so the cost measured is
the engine's, not ``asyncio.new_event_loop()`` startup.
"""

from __future__ import annotations

import asyncio

import pytest


@pytest.fixture(scope="session")
def event_loop():
    """Session-scoped event loop shared by all async benchmark helpers."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture(scope="session")
def run_async(event_loop):
    """Run a coroutine to completion in the shared loop."""

    def _run(coro):
        return event_loop.run_until_complete(coro)

    return _run
