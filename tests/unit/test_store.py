"""Unit tests for ObservableStore notification."""

import logging

import pytest

from docchat.session.store import ObservableStore


class Counter(ObservableStore):
    def __init__(self) -> None:
        super().__init__()
        self.value = 0

    def increment(self) -> None:
        self.value += 1
        self._notify()


def test_listeners_see_state_after_mutation() -> None:
    store = Counter()
    seen: list[int] = []
    store.subscribe(lambda: seen.append(store.value))

    store.increment()
    store.increment()

    assert seen == [1, 2]


def test_unsubscribe_stops_notifications_and_is_idempotent() -> None:
    store = Counter()
    seen: list[int] = []
    unsubscribe = store.subscribe(lambda: seen.append(store.value))

    unsubscribe()
    unsubscribe()
    store.increment()

    assert seen == []
    assert store.listener_count == 0


def test_notify_without_listeners_is_noop() -> None:
    store = Counter()

    store.increment()

    assert store.value == 1


def test_failing_listener_is_logged_and_skipped(caplog: pytest.LogCaptureFixture) -> None:
    store = Counter()
    seen: list[int] = []

    def broken() -> None:
        raise RuntimeError("view is gone")

    store.subscribe(broken)
    store.subscribe(lambda: seen.append(store.value))

    with caplog.at_level(logging.ERROR, logger="docchat.session.store"):
        store.increment()

    assert seen == [1]
    assert "failed" in caplog.text


def test_listener_may_unsubscribe_during_notification() -> None:
    store = Counter()
    seen: list[str] = []
    unsubscribe_first = None

    def first() -> None:
        seen.append("first")
        unsubscribe_first()

    unsubscribe_first = store.subscribe(first)
    store.subscribe(lambda: seen.append("second"))

    store.increment()
    store.increment()

    assert seen == ["first", "second", "second"]
