"""Tests for the background session purge loop."""

import asyncio
from collections.abc import Callable
from uuid import uuid4

from nutrilog.api.app import purge_sessions_periodically
from nutrilog.domain.errors import StorageError


async def _wait_until(condition: Callable[[], bool], timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not condition():
        assert loop.time() < deadline
        await asyncio.sleep(0.01)


def test_purge_loop_removes_expired_sessions(
    container, session_repository, clock
) -> None:
    container.session_service.create(uuid4())
    clock.advance(days=8)
    fresh = container.session_service.create(uuid4())

    async def run() -> None:
        task = asyncio.create_task(purge_sessions_periodically(container, 3600))
        await _wait_until(lambda: len(session_repository.sessions) == 1)
        task.cancel()

    asyncio.run(run())

    assert container.session_service.resolve(fresh) is not None


def test_purge_loop_survives_storage_errors(container, monkeypatch) -> None:
    calls: list[int] = []

    def flaky_purge(max_age_days=None):  # type: ignore[no-untyped-def]
        calls.append(1)
        if len(calls) == 1:
            raise StorageError("database is down")
        return 0

    monkeypatch.setattr(container.session_service, "purge_expired", flaky_purge)

    async def run() -> None:
        task = asyncio.create_task(purge_sessions_periodically(container, 0.01))
        await _wait_until(lambda: len(calls) >= 2)
        task.cancel()

    asyncio.run(run())

    assert len(calls) >= 2


def test_purge_loop_survives_unexpected_errors(container, monkeypatch) -> None:
    calls: list[int] = []

    def broken_purge(max_age_days=None):  # type: ignore[no-untyped-def]
        calls.append(1)
        if len(calls) == 1:
            raise ValueError("unparseable response")
        return 0

    monkeypatch.setattr(container.session_service, "purge_expired", broken_purge)

    async def run() -> None:
        task = asyncio.create_task(purge_sessions_periodically(container, 0.01))
        await _wait_until(lambda: len(calls) >= 2)
        task.cancel()

    asyncio.run(run())

    assert len(calls) >= 2
