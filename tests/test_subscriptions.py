from __future__ import annotations

import logging

import pytest

from pylancache.state.subscriptions import SubscriptionRegistry


def test_all_listeners_notified() -> None:
    registry = SubscriptionRegistry()
    calls: list[str] = []
    registry.subscribe(lambda: calls.append("a"))
    registry.subscribe(lambda: calls.append("b"))

    registry.notify()

    assert sorted(calls) == ["a", "b"]


def test_unsubscribe_removes_listener_and_is_idempotent() -> None:
    registry = SubscriptionRegistry()
    calls: list[int] = []
    unsubscribe = registry.subscribe(lambda: calls.append(1))

    unsubscribe()
    unsubscribe()
    registry.notify()

    assert calls == []
    assert len(registry) == 0


def test_same_callable_can_subscribe_twice() -> None:
    registry = SubscriptionRegistry()
    calls: list[int] = []

    def listener() -> None:
        calls.append(1)

    first = registry.subscribe(listener)
    registry.subscribe(listener)
    first()
    registry.notify()

    assert calls == [1]


def test_listener_may_unsubscribe_itself_while_notified() -> None:
    registry = SubscriptionRegistry()
    calls: list[int] = []
    unsubscribe = None

    def once() -> None:
        calls.append(1)
        assert unsubscribe is not None
        unsubscribe()

    unsubscribe = registry.subscribe(once)
    registry.notify()
    registry.notify()

    assert calls == [1]


def test_failing_listener_does_not_block_others(caplog: pytest.LogCaptureFixture) -> None:
    registry = SubscriptionRegistry()
    calls: list[int] = []

    def broken() -> None:
        raise RuntimeError("boom")

    registry.subscribe(broken)
    registry.subscribe(lambda: calls.append(1))

    with caplog.at_level(logging.DEBUG, logger="pylancache.state.subscriptions"):
        registry.notify()

    assert calls == [1]
    assert "listener failed" in caplog.text
