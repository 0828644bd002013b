from __future__ import annotations

import threading

import pytest
from pydantic import ValidationError

from pylancache.state.store import MISSING, PendingEntry, PendingStore
from pylancache.state.subscriptions import SubscriptionRegistry


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _store(clock: _Clock, registry: SubscriptionRegistry | None = None) -> PendingStore:
    return PendingStore(registry=registry, clock=clock, cooldown=2.0)


def test_get_returns_value_while_live() -> None:
    clock = _Clock()
    store = _store(clock)

    store.set("sharpCorners", True)
    clock.now += 1.999

    assert store.has("sharpCorners")
    assert store.get("sharpCorners") is True


def test_unknown_key_is_missing() -> None:
    store = _store(_Clock())

    assert store.get("nope") is MISSING
    assert not store.has("nope")
    assert store.entry("nope") is None


def test_none_is_a_storable_value() -> None:
    store = _store(_Clock())

    store.set("selectedTheme", None)

    assert store.has("selectedTheme")
    assert store.get("selectedTheme") is None


def test_expired_entry_is_removed_on_read() -> None:
    clock = _Clock()
    store = _store(clock)

    store.set("x", "dark")
    clock.now += 2.0

    # No sweep: the entry is still held until someone reads it.
    assert len(store) == 1
    assert store.get("x") is MISSING
    assert len(store) == 0


def test_has_evicts_expired_entry() -> None:
    clock = _Clock()
    store = _store(clock)

    store.set("x", 1)
    clock.now += 5.0

    assert store.has("x") is False
    assert len(store) == 0


def test_reset_with_same_value_restarts_cooldown() -> None:
    clock = _Clock()
    store = _store(clock)

    store.set("x", True)
    clock.now += 1.75
    store.set("x", True)
    clock.now += 1.5

    assert store.get("x") is True

    clock.now += 0.75
    assert store.get("x") is MISSING


def test_set_overwrites_value() -> None:
    store = _store(_Clock())

    store.set("refreshRate", "STANDARD")
    store.set("refreshRate", "FAST")

    assert store.get("refreshRate") == "FAST"
    assert len(store) == 1


def test_entry_is_a_frozen_copy() -> None:
    clock = _Clock()
    store = _store(clock)

    store.set("x", 10)
    entry = store.entry("x")

    assert entry == PendingEntry(value=10, set_at=100.0)
    with pytest.raises(ValidationError):
        entry.value = 11  # type: ignore[misc,union-attr]
    assert store.get("x") == 10


def test_entry_keeps_value_type() -> None:
    store = _store(_Clock())

    store.set("a", 1)
    store.set("b", True)
    store.set("c", "1")

    assert type(store.get("a")) is int
    assert type(store.get("b")) is bool
    assert type(store.get("c")) is str


def test_set_notifies_registry_but_reads_do_not() -> None:
    registry = SubscriptionRegistry()
    store = _store(_Clock(), registry)
    calls: list[int] = []
    registry.subscribe(lambda: calls.append(1))

    store.set("x", True)
    store.get("x")
    store.has("x")
    store.entry("x")

    assert calls == [1]


def test_listener_can_read_store_during_notification() -> None:
    registry = SubscriptionRegistry()
    store = _store(_Clock(), registry)
    seen: list[object] = []
    registry.subscribe(lambda: seen.append(store.get("x")))

    store.set("x", "local-24h")

    assert seen == ["local-24h"]


def test_concurrent_access_from_threads() -> None:
    registry = SubscriptionRegistry()
    store = PendingStore(registry=registry, cooldown=60.0)
    keys = [f"key-{index}" for index in range(5)]
    errors: list[BaseException] = []
    written: dict[str, set[int]] = {key: set() for key in keys}
    written_lock = threading.Lock()

    def worker(worker_id: int) -> None:
        try:
            for step in range(500):
                key = keys[step % len(keys)]
                value = worker_id * 10_000 + step
                with written_lock:
                    written[key].add(value)
                store.set(key, value)
                store.get(key)
                store.has(key)
                unsubscribe = registry.subscribe(lambda: None)
                unsubscribe()
        except BaseException as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(worker_id,)) for worker_id in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(registry) == 0
    for key in keys:
        assert store.get(key) in written[key]


def test_store_exposes_registry_and_cooldown() -> None:
    registry = SubscriptionRegistry()
    store = PendingStore(registry=registry, clock=_Clock(), cooldown=0.5)

    assert store.registry is registry
    assert store.cooldown == 0.5
    assert isinstance(PendingStore().registry, SubscriptionRegistry)
