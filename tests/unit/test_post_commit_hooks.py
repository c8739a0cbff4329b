"""Tests for post-commit callbacks queued on a write session."""

import logging
from types import SimpleNamespace

import pytest

from app.infrastructure.persistence.database import (
    SessionPostCommitHooks,
    run_post_commit_hooks,
)


def _session() -> SimpleNamespace:
    """Stand-in for AsyncSession: only .info is used by the hooks."""
    return SimpleNamespace(info={})


async def test_callbacks_run_in_order_and_are_drained() -> None:
    session = _session()
    calls: list[str] = []

    async def first() -> None:
        calls.append("first")

    async def second() -> None:
        calls.append("second")

    hooks = SessionPostCommitHooks(session)
    hooks.add(first)
    hooks.add(second)
    assert calls == []

    await run_post_commit_hooks(session)
    assert calls == ["first", "second"]

    await run_post_commit_hooks(session)
    assert calls == ["first", "second"]


async def test_failing_callback_does_not_stop_the_rest(
    caplog: pytest.LogCaptureFixture,
) -> None:
    session = _session()
    calls: list[str] = []

    async def broken() -> None:
        raise ConnectionError("redis gone")

    async def after() -> None:
        calls.append("after")

    hooks = SessionPostCommitHooks(session)
    hooks.add(broken)
    hooks.add(after)

    with caplog.at_level(logging.ERROR):
        await run_post_commit_hooks(session)

    assert calls == ["after"]
    assert "Post-commit callback" in caplog.text


async def test_nothing_queued_is_a_noop() -> None:
    await run_post_commit_hooks(_session())
